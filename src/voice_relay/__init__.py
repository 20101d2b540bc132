from voice_relay.config import AppConfig, load_config
from voice_relay.exceptions import (
    DeviceUnavailableError,
    InvalidRequestError,
    NoActiveRecordingError,
    PermissionDeniedError,
    RecordingError,
    RecordingStateError,
    TranscriptionFailedError,
    UpstreamFailureError,
    VoiceRelayError,
)
from voice_relay.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "VoiceRelayError",
    "RecordingError",
    "PermissionDeniedError",
    "DeviceUnavailableError",
    "NoActiveRecordingError",
    "RecordingStateError",
    "TranscriptionFailedError",
    "InvalidRequestError",
    "UpstreamFailureError",
]
