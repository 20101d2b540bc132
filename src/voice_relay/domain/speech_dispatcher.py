"""Fire-and-forget text-to-speech."""

import asyncio

from voice_relay.domain.models import VoiceProfile, VoiceSettings
from voice_relay.infrastructure.interfaces import SpeechSynthesizer
from voice_relay.logging import setup_logging

logger = setup_logging()


class SpeechSynthesisDispatcher:
    """
    Speaks text in the voice mapped to a language.

    Unknown languages use the profile's default voice. Without a synthesis
    backend the utterance is only logged. Rate and pitch are fixed at
    construction. In-flight utterances cannot be cancelled.
    """

    def __init__(
        self,
        profile: VoiceProfile,
        synthesizer: SpeechSynthesizer | None = None,
        rate: float = 0.8,
        pitch: float = 1.0,
    ):
        self._profile = profile
        self._synthesizer = synthesizer
        self._rate = rate
        self._pitch = pitch
        self._pending: set[asyncio.Task] = set()

    def resolve_voice(self, language_code: str) -> VoiceSettings:
        return self._profile.resolve(language_code)

    def speak(self, text: str, language_code: str) -> None:
        """
        Schedules an utterance and returns immediately.

        Must be called from a running event loop when a backend is set.
        Synthesis errors are logged, never raised.
        """
        voice = self.resolve_voice(language_code)

        if self._synthesizer is None:
            logger.info(
                "Text-to-speech would play",
                extra={"text": text, "language": language_code, "voice": voice.synthesis_voice},
            )
            return

        task = asyncio.get_running_loop().create_task(
            self._synthesizer.synthesize(text, voice, self._rate, self._pitch)
        )
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Text-to-speech error", extra={"error": str(error)})

    async def drain(self) -> None:
        """Waits for every scheduled utterance to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
