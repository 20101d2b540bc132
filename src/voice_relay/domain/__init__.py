"""Domain layer exports."""

from voice_relay.domain.fallback_chain import ResponseFallbackChain
from voice_relay.domain.models import (
    AttemptOutcome,
    BatchTranslationRequest,
    ChatMode,
    ChatReply,
    FallbackChain,
    ModelAttempt,
    PipelineMode,
    PipelineRequest,
    PipelineResult,
    RecordingArtifact,
    TranscriptionResult,
    TranslationRequest,
    TranslationResponse,
    VoiceProfile,
    VoiceSettings,
)
from voice_relay.domain.recording_session import RecordingSession, RecordingState
from voice_relay.domain.speech_dispatcher import SpeechSynthesisDispatcher
from voice_relay.domain.transcription_gateway import TranscriptionGateway
from voice_relay.domain.translation_relay import TranslationRelayService

__all__ = [
    "AttemptOutcome",
    "BatchTranslationRequest",
    "ChatMode",
    "ChatReply",
    "FallbackChain",
    "ModelAttempt",
    "PipelineMode",
    "PipelineRequest",
    "PipelineResult",
    "RecordingArtifact",
    "RecordingSession",
    "RecordingState",
    "ResponseFallbackChain",
    "SpeechSynthesisDispatcher",
    "TranscriptionGateway",
    "TranscriptionResult",
    "TranslationRelayService",
    "TranslationRequest",
    "TranslationResponse",
    "VoiceProfile",
    "VoiceSettings",
]
