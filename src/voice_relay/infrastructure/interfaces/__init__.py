"""Infrastructure interface exports."""

from voice_relay.infrastructure.interfaces.audio_device import (
    AudioDevice,
    CaptureHandle,
    CaptureSettings,
)
from voice_relay.infrastructure.interfaces.cache_service import CacheService
from voice_relay.infrastructure.interfaces.inference_client import InferenceClient
from voice_relay.infrastructure.interfaces.speech_synthesizer import SpeechSynthesizer
from voice_relay.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)
from voice_relay.infrastructure.interfaces.translator_client import TranslatorClient

__all__ = [
    "AudioDevice",
    "CacheService",
    "CaptureHandle",
    "CaptureSettings",
    "InferenceClient",
    "SpeechSynthesizer",
    "TranscriptionService",
    "TranslatorClient",
]
