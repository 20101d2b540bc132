"""Handler that runs a recording through the voice pipeline."""

from voice_relay.domain import (
    FallbackChain,
    PipelineMode,
    PipelineRequest,
    PipelineResult,
    RecordingArtifact,
    ResponseFallbackChain,
    SpeechSynthesisDispatcher,
    TranscriptionGateway,
    TranslationRelayService,
    TranslationRequest,
)
from voice_relay.logging import setup_logging

logger = setup_logging()


class VoicePipelineHandler:
    """Orchestrates transcription, translation or chat, and speech output."""

    def __init__(
        self,
        gateway: TranscriptionGateway,
        relay: TranslationRelayService,
        fallback_chain: ResponseFallbackChain,
        chain: FallbackChain,
        dispatcher: SpeechSynthesisDispatcher,
    ):
        self._gateway = gateway
        self._relay = relay
        self._fallback_chain = fallback_chain
        self._chain = chain
        self._dispatcher = dispatcher

    async def process(self, artifact: RecordingArtifact, request: PipelineRequest) -> PipelineResult:
        """
        Processes a recording artifact.

        In translate mode the transcription is translated to the target
        language; in chat mode it is answered by the fallback chain. The
        result is then spoken if requested.

        Args:
            artifact: The stopped recording; consumed by this call.
            request: Mode, languages and whether to speak the result.

        Returns:
            PipelineResult with every stage's output.

        Raises:
            TranscriptionFailedError: If the recording cannot be transcribed.
            InvalidRequestError: If the translate request is incomplete.
            UpstreamFailureError: If the translator call fails.
        """
        transcription = await self._gateway.transcribe(artifact)
        logger.info(
            "Processing transcription",
            extra={"mode": request.mode.value, "provider": transcription.provider},
        )

        if request.mode == PipelineMode.TRANSLATE:
            translation = await self._relay.translate(
                TranslationRequest(
                    source_text=transcription.text,
                    target_language=request.target_language,
                    source_language=request.source_language,
                )
            )
            output_text = translation.translated_text
            result = PipelineResult(transcription=transcription, translation=translation)
        else:
            reply = await self._fallback_chain.get_reply(
                transcription.text, self._chain, request.chat_mode
            )
            output_text = reply.text
            result = PipelineResult(transcription=transcription, reply=reply)

        if request.speak and output_text:
            self._dispatcher.speak(output_text, request.target_language)
            result = result.model_copy(
                update={"spoken_text": output_text, "spoken_language": request.target_language}
            )

        return result

    async def drain(self) -> None:
        """Waits for queued speech to finish playing."""
        await self._dispatcher.drain()
