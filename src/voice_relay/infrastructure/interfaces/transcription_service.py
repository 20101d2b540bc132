"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier reported as the provider of a transcription."""
        pass

    @abstractmethod
    async def transcribe(self, locator: str) -> str:
        """
        Transcribes the audio behind a locator.

        Args:
            locator: Resource handle of the recorded audio (e.g. file URI).

        Returns:
            The recognized text, possibly empty.

        Raises:
            TranscriptionFailedError: If the backend reports a failure.
        """
        pass
