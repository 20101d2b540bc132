"""Azure Translator implementation of the TranslatorClient interface."""

from typing import Any

import httpx

from voice_relay.exceptions import UpstreamFailureError
from voice_relay.infrastructure.interfaces import TranslatorClient
from voice_relay.logging import setup_logging

logger = setup_logging()


def _extract_details(payload: Any, fallback: str) -> Any:
    """Best-effort error message from an Azure error body."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(error, str):
            return error
    if isinstance(payload, str) and payload:
        return payload
    return fallback


class AzureTranslatorClient(TranslatorClient):
    """Calls the Azure Translator v3 `translate` operation."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        api_key: str,
        region: str,
        api_version: str = "3.0",
    ):
        self._client = client
        self._url = f"{endpoint.rstrip('/')}/translate"
        self._headers = {
            "Ocp-Apim-Subscription-Key": api_key,
            "Ocp-Apim-Subscription-Region": region,
            "Content-Type": "application/json",
        }
        self._api_version = api_version

    async def post_translate(self, params: dict[str, str], body: list[dict[str, str]]) -> Any:
        query = [("api-version", self._api_version), *params.items()]
        try:
            response = await self._client.post(
                self._url, params=query, json=body, headers=self._headers
            )
        except httpx.TimeoutException as e:
            logger.warning("Translator request timed out", extra={"url": self._url})
            raise UpstreamFailureError(
                "Translation request timeout", timed_out=True, cause=e
            ) from e
        except httpx.HTTPError as e:
            logger.exception("Translator request failed", extra={"url": self._url})
            raise UpstreamFailureError(str(e) or type(e).__name__, cause=e) from e

        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        if response.is_error:
            logger.error(
                "Azure translation error",
                extra={"status": response.status_code, "response": payload},
            )
            raise UpstreamFailureError(
                _extract_details(payload, response.reason_phrase),
                raw_payload=payload,
                status_code=response.status_code,
            )

        if isinstance(payload, str):
            raise UpstreamFailureError(
                "Translator returned a non-JSON body",
                raw_payload=payload,
                status_code=response.status_code,
            )

        return payload
