"""Ordered multi-model reply generation with graceful degradation."""

import asyncio
from typing import Any

from voice_relay.domain.models import (
    AttemptOutcome,
    ChatMode,
    ChatReply,
    FallbackChain,
    ModelAttempt,
)
from voice_relay.infrastructure.interfaces import InferenceClient
from voice_relay.logging import setup_logging

logger = setup_logging()

EXHAUSTED_REPLY = "I'm having trouble connecting right now. Please try again later."


def extract_generated_text(payload: Any) -> str | None:
    """
    Returns the generated text from either supported response shape.

    A list whose first element has `generated_text` is checked before a
    mapping with a top-level `generated_text`.
    """
    if isinstance(payload, list) and payload and isinstance(payload[0], dict):
        text = payload[0].get("generated_text")
        if isinstance(text, str) and text.strip():
            return text
    if isinstance(payload, dict):
        text = payload.get("generated_text")
        if isinstance(text, str) and text.strip():
            return text
    return None


class ResponseFallbackChain:
    """
    Tries models strictly in order until one produces text.

    Attempts never overlap: each one finishes or times out before the next
    starts. Failures are logged and dropped, and if every model fails a
    canned reply is returned with `exhausted=True`. `get_reply` never raises.

    The chat mode selects the system prompt handed to every attempt.
    """

    def __init__(
        self,
        client: InferenceClient,
        attempt_timeout_seconds: float = 15.0,
        exhausted_reply: str = EXHAUSTED_REPLY,
        system_prompts: dict[ChatMode, str] | None = None,
    ):
        self._client = client
        self._system_prompts = system_prompts or {}
        self._attempt_timeout_seconds = attempt_timeout_seconds
        self._exhausted_reply = exhausted_reply

    async def get_reply(
        self,
        user_message: str,
        chain: FallbackChain,
        mode: ChatMode = ChatMode.ASK_ME_ANYTHING,
    ) -> ChatReply:
        instructions = self._system_prompts.get(mode)
        outcomes: list[AttemptOutcome] = []
        for attempt in chain.attempts:
            outcome = await self._attempt(attempt, user_message, instructions)
            outcomes.append(outcome)
            if outcome.succeeded:
                logger.info(
                    "Chat reply generated",
                    extra={
                        "model": outcome.model_identifier,
                        "attempt": len(outcomes),
                        "mode": mode.value,
                    },
                )
                return ChatReply(text=outcome.text, source_model=outcome.model_identifier)

        logger.error(
            "All chat models failed",
            extra={"failures": {o.model_identifier: o.error for o in outcomes}},
        )
        return ChatReply(text=self._exhausted_reply, source_model=None, exhausted=True)

    async def _attempt(
        self, attempt: ModelAttempt, user_message: str, instructions: str | None
    ) -> AttemptOutcome:
        model = attempt.model_identifier
        try:
            payload = await asyncio.wait_for(
                self._client.generate(model, user_message, instructions),
                timeout=self._attempt_timeout_seconds,
            )
        except asyncio.TimeoutError:
            error = f"timed out after {self._attempt_timeout_seconds:g}s"
        except Exception as e:
            error = str(e) or type(e).__name__
        else:
            text = extract_generated_text(payload)
            if text:
                return AttemptOutcome(model_identifier=model, text=text)
            error = "response contained no generated text"

        logger.warning("Chat model failed", extra={"model": model, "error": error})
        return AttemptOutcome(model_identifier=model, error=error)
