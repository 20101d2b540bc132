"""Abstract interface for the remote translation provider."""

from abc import ABC, abstractmethod
from typing import Any


class TranslatorClient(ABC):
    """Abstract base class for translation upstreams."""

    @abstractmethod
    async def post_translate(self, params: dict[str, str], body: list[dict[str, str]]) -> Any:
        """
        Sends one translate call and returns the decoded JSON payload.

        Args:
            params: Language query parameters in the order they are sent.
            body: One `{"Text": ...}` entry per text; results come back in the
                same order.

        Returns:
            The decoded response payload, unvalidated.

        Raises:
            UpstreamFailureError: On non-2xx responses, timeouts, transport
                errors or undecodable bodies.
        """
        pass
