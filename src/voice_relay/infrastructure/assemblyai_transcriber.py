"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio

import assemblyai as aai

from voice_relay.domain.models import RecordingArtifact
from voice_relay.exceptions import TranscriptionFailedError
from voice_relay.infrastructure.interfaces import TranscriptionService
from voice_relay.logging import setup_logging

logger = setup_logging()


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    @property
    def name(self) -> str:
        return "assemblyai"

    async def transcribe(self, locator: str) -> str:
        """
        Transcribes a recording using AssemblyAI.

        Local `file://` locators are uploaded from disk; any other locator is
        passed to AssemblyAI as a remote URL. The SDK call blocks while it
        polls for completion, so it is awaited off the event loop.
        """
        path = RecordingArtifact(locator=locator, succeeded=True).local_path
        source = str(path) if path is not None else locator

        try:
            transcript = await asyncio.to_thread(self._transcriber.transcribe, source)
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise TranscriptionFailedError("speech recognition failed", cause=e) from e

        if transcript.status == aai.TranscriptStatus.error:
            raise TranscriptionFailedError(transcript.error or "AssemblyAI reported an error")

        logger.info(
            "Audio transcription successful",
            extra={"transcript_id": transcript.id, "characters": len(transcript.text or "")},
        )
        return transcript.text or ""
