"""Turns recording artifacts into text."""

import asyncio

from voice_relay.domain.models import RecordingArtifact, TranscriptionResult
from voice_relay.exceptions import TranscriptionFailedError
from voice_relay.infrastructure.interfaces import TranscriptionService
from voice_relay.logging import setup_logging

logger = setup_logging()


class TranscriptionGateway:
    """Provider-agnostic speech-to-text with a bounded wait."""

    def __init__(
        self,
        service: TranscriptionService,
        timeout_seconds: float = 60.0,
        min_duration_millis: int = 0,
        discard_artifacts: bool = True,
    ):
        self._service = service
        self._timeout_seconds = timeout_seconds
        self._min_duration_millis = min_duration_millis
        self._discard_artifacts = discard_artifacts

    async def transcribe(self, artifact: RecordingArtifact) -> TranscriptionResult:
        """
        Transcribes a recording artifact.

        The artifact is consumed: its local audio file is removed afterwards,
        whether or not transcription succeeded.

        Raises:
            TranscriptionFailedError: If the artifact is a failed recording,
                is too short, or the backend errors, times out or returns no
                text.
        """
        try:
            return await self._transcribe(artifact)
        finally:
            if self._discard_artifacts:
                artifact.discard()

    async def _transcribe(self, artifact: RecordingArtifact) -> TranscriptionResult:
        if not artifact.succeeded:
            raise TranscriptionFailedError(artifact.failure_reason or "recording failed")

        if artifact.duration_millis < self._min_duration_millis:
            raise TranscriptionFailedError(
                f"Recording too short ({artifact.duration_millis} ms)"
            )

        logger.info(
            "Starting transcription",
            extra={"provider": self._service.name, "locator": artifact.locator},
        )

        try:
            text = await asyncio.wait_for(
                self._service.transcribe(artifact.locator),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                "Transcription timed out",
                extra={"provider": self._service.name, "timeout": self._timeout_seconds},
            )
            raise TranscriptionFailedError(
                f"{self._service.name} did not respond within {self._timeout_seconds:g}s",
                cause=e,
            ) from e
        except TranscriptionFailedError:
            raise
        except Exception as e:
            logger.exception("Transcription backend error")
            raise TranscriptionFailedError(str(e) or type(e).__name__, cause=e) from e

        text = (text or "").strip()
        if not text:
            raise TranscriptionFailedError(f"{self._service.name} returned no text")

        logger.info(
            "Transcription completed",
            extra={"provider": self._service.name, "characters": len(text)},
        )
        return TranscriptionResult(text=text, provider=self._service.name)
