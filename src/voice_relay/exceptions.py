"""Custom exceptions for the voice relay pipeline."""

from typing import Any


class VoiceRelayError(Exception):
    """Base class for pipeline errors that are reported to the user."""

    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class RecordingError(VoiceRelayError):
    """Base class for recording lifecycle errors."""

    user_message = "Recording failed. Please try again."


class PermissionDeniedError(RecordingError):
    """Raised when microphone access is not granted."""

    user_message = "Microphone access was denied. Allow access and try again."

    def __init__(self, cause: Exception | None = None):
        super().__init__("Audio recording permission not granted", cause=cause)


class DeviceUnavailableError(RecordingError):
    """Raised when the capture device cannot be configured or opened."""

    user_message = "No microphone is available. Check your audio device and try again."

    def __init__(self, reason: str, cause: Exception | None = None):
        self.reason = reason
        super().__init__(f"Audio device unavailable: {reason}", cause=cause)


class NoActiveRecordingError(RecordingError):
    """Raised when a stop is requested while nothing is being captured."""

    user_message = "There is no recording in progress."

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"No active recording to stop (state: {state})")


class RecordingStateError(RecordingError):
    """Raised when a start is requested outside the idle state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while session is {state}")


class TranscriptionFailedError(VoiceRelayError):
    """Raised when an artifact cannot be turned into text."""

    user_message = "Speech recognition failed. Please try recording again."

    def __init__(self, reason: str, cause: Exception | None = None):
        self.reason = reason
        super().__init__(f"Transcription failed: {reason}", cause=cause)


class InvalidRequestError(VoiceRelayError):
    """Raised when a translation request is missing required fields."""

    user_message = "Enter some text and choose a target language."

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing or empty field '{field}'")


class UpstreamFailureError(VoiceRelayError):
    """Raised when the translation provider call fails."""

    def __init__(
        self,
        details: Any,
        raw_payload: Any = None,
        status_code: int | None = None,
        timed_out: bool = False,
        cause: Exception | None = None,
    ):
        self.details = details
        self.raw_payload = raw_payload
        self.status_code = status_code
        self.timed_out = timed_out
        super().__init__(f"Translation upstream failed: {details}", cause=cause)

    @property
    def user_message(self) -> str:
        if self.timed_out:
            return "Translation request timed out. Check your connection and try again."
        if self.status_code == 400:
            return f"Bad translation request: {self.details}"
        if self.status_code == 401:
            return "Invalid translator API key. Please check your configuration."
        if self.status_code == 403:
            return "Access denied by the translator. Check your subscription status."
        if self.status_code == 429:
            return "Rate limit exceeded. Please try again later."
        return "Translation failed. Please try again."


class InferenceError(Exception):
    """Raised when a chat model call fails."""

    def __init__(self, model_identifier: str, message: str, cause: Exception | None = None):
        self.model_identifier = model_identifier
        self.cause = cause
        super().__init__(f"Model '{model_identifier}' failed: {message}")


class CacheServiceError(Exception):
    """Raised when cache operations fail."""

    def __init__(self, key: str, operation: str, cause: Exception | None = None):
        self.key = key
        self.operation = operation
        self.cause = cause
        super().__init__(f"Cache {operation} failed for key '{key}'")
