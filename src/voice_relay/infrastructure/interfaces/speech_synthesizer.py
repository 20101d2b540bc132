"""Abstract interface for text-to-speech backends."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from voice_relay.domain.models import VoiceSettings


class SpeechSynthesizer(ABC):
    """Abstract base class for speech synthesis backends."""

    @abstractmethod
    async def synthesize(
        self, text: str, voice: "VoiceSettings", rate: float, pitch: float
    ) -> None:
        """
        Speaks text aloud with the given voice.

        Raises:
            Exception: If synthesis fails; callers log and drop it.
        """
        pass
