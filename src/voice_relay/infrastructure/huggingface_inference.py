"""Hugging Face Inference API implementation of the InferenceClient interface."""

from typing import Any

import httpx

from voice_relay.exceptions import InferenceError
from voice_relay.infrastructure.interfaces import InferenceClient


class HuggingFaceInferenceClient(InferenceClient):
    """
    Posts `{"inputs": ...}` to a hosted model.

    The hosted conversational models take no system prompt, so
    `instructions` is not sent.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 15.0,
    ):
        self._client = client
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url.rstrip("/")
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    async def generate(
        self, model_identifier: str, inputs: str, instructions: str | None = None
    ) -> Any:
        try:
            response = await self._client.post(
                f"{self._base_url}/models/{model_identifier}",
                json={"inputs": inputs},
                headers=self._headers,
                timeout=self._timeout_seconds,
            )
        except httpx.HTTPError as e:
            raise InferenceError(model_identifier, str(e) or type(e).__name__, cause=e) from e

        if response.is_error:
            raise InferenceError(
                model_identifier, f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise InferenceError(model_identifier, "response is not JSON", cause=e) from e
