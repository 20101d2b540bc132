"""Dispatches inference calls to a backend chosen by model identifier."""

from typing import Any

from voice_relay.infrastructure.interfaces import InferenceClient


class RoutingInferenceClient(InferenceClient):
    """
    Routes each call by model-identifier prefix.

    The first matching prefix wins; identifiers without a match go to the
    default backend.
    """

    def __init__(self, default: InferenceClient, routes: dict[str, InferenceClient] | None = None):
        self._default = default
        self._routes = routes or {}

    def backend_for(self, model_identifier: str) -> InferenceClient:
        for prefix, backend in self._routes.items():
            if model_identifier.startswith(prefix):
                return backend
        return self._default

    async def generate(
        self, model_identifier: str, inputs: str, instructions: str | None = None
    ) -> Any:
        backend = self.backend_for(model_identifier)
        return await backend.generate(model_identifier, inputs, instructions)
