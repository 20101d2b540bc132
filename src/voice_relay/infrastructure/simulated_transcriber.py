"""Deterministic stand-in for a speech recognition backend."""

import asyncio
from itertools import cycle
from typing import Sequence

from voice_relay.infrastructure.interfaces import TranscriptionService
from voice_relay.logging import setup_logging

logger = setup_logging()

DEFAULT_PHRASES = (
    "Hello, how are you doing today?",
    "I would like to translate this text",
    "The weather is beautiful today",
    "This is a test of voice recognition",
    "Thank you for using our application",
)


class SimulatedTranscriber(TranscriptionService):
    """Returns canned phrases in a fixed rotation after an optional delay."""

    def __init__(self, phrases: Sequence[str] = DEFAULT_PHRASES, delay_seconds: float = 0.0):
        if not phrases:
            raise ValueError("SimulatedTranscriber needs at least one phrase")
        self._phrases = cycle(phrases)
        self._delay_seconds = delay_seconds

    @property
    def name(self) -> str:
        return "simulated"

    async def transcribe(self, locator: str) -> str:
        if self._delay_seconds:
            await asyncio.sleep(self._delay_seconds)
        text = next(self._phrases)
        logger.info("Simulated transcription", extra={"locator": locator, "text": text})
        return text
