"""Gemini implementation of the InferenceClient interface."""

from typing import Any

from google import genai

from voice_relay.exceptions import InferenceError
from voice_relay.infrastructure.interfaces import InferenceClient
from voice_relay.logging import setup_logging

logger = setup_logging()


class GeminiInferenceClient(InferenceClient):
    """Chat replies from Google Gemini, shaped like a text-generation payload."""

    def __init__(self, client: genai.Client):
        self._client = client

    async def generate(
        self, model_identifier: str, inputs: str, instructions: str | None = None
    ) -> Any:
        """
        Generates a reply with the given system prompt.

        Raises:
            InferenceError: If the Gemini API call fails.
        """
        config = {"system_instruction": instructions} if instructions else None
        try:
            response = await self._client.aio.models.generate_content(
                model=model_identifier,
                contents=inputs,
                config=config,
            )
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"model": model_identifier})
            raise InferenceError(model_identifier, str(e) or type(e).__name__, cause=e) from e
        return {"generated_text": response.text or ""}
