"""Microphone capture lifecycle."""

from contextlib import AsyncExitStack
from enum import Enum

from voice_relay.domain.models import RecordingArtifact
from voice_relay.exceptions import (
    DeviceUnavailableError,
    NoActiveRecordingError,
    PermissionDeniedError,
    RecordingStateError,
)
from voice_relay.infrastructure.interfaces import AudioDevice, CaptureHandle, CaptureSettings
from voice_relay.logging import setup_logging

logger = setup_logging()


class RecordingState(str, Enum):
    IDLE = "idle"
    PERMISSION_PENDING = "permission_pending"
    ARMED = "armed"
    CAPTURING = "capturing"
    FINALIZING = "finalizing"
    FAILED = "failed"


class RecordingSession:
    """
    Owns one microphone capture from permission request to artifact.

    The session is a state machine:
    IDLE -> PERMISSION_PENDING -> ARMED -> CAPTURING -> FINALIZING -> IDLE,
    with FAILED reachable from any non-idle state. Only `cleanup()` leaves
    FAILED.

    Callers must serialize calls on one instance and must not run two
    sessions against the same device at once; neither is enforced here.
    Use the session as an async context manager, or call `cleanup()` on
    every exit path, so the device and the audio mode are always released.
    """

    def __init__(self, device: AudioDevice, settings: CaptureSettings | None = None):
        self._device = device
        self._settings = settings or CaptureSettings()
        self._state = RecordingState.IDLE
        self._handle: CaptureHandle | None = None
        self._resources = AsyncExitStack()

    @property
    def state(self) -> RecordingState:
        return self._state

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def request_start(self) -> None:
        """
        Requests microphone access and starts capturing.

        Raises:
            RecordingStateError: If the session is not idle.
            PermissionDeniedError: If access is denied; session is FAILED.
            DeviceUnavailableError: If the device cannot be configured or
                opened; session is FAILED.
        """
        if self._state != RecordingState.IDLE:
            raise RecordingStateError("start recording", self._state.value)

        self._state = RecordingState.PERMISSION_PENDING
        try:
            granted = await self._device.request_permission()
        except Exception as e:
            logger.exception("Error requesting audio permissions")
            self._state = RecordingState.FAILED
            raise PermissionDeniedError(cause=e) from e

        if not granted:
            logger.warning("Audio permission denied")
            self._state = RecordingState.FAILED
            raise PermissionDeniedError()

        try:
            await self._resources.enter_async_context(self._device.audio_mode(self._settings))
            self._state = RecordingState.ARMED
            self._handle = await self._device.start_capture(self._settings)
        except Exception as e:
            self._state = RecordingState.FAILED
            try:
                await self._release_resources()
            except Exception:
                logger.exception("Failed to restore audio mode")
            if isinstance(e, DeviceUnavailableError):
                raise
            logger.exception("Failed to start recording")
            raise DeviceUnavailableError(str(e) or type(e).__name__, cause=e) from e

        self._state = RecordingState.CAPTURING
        logger.info(
            "Recording started",
            extra={"sample_rate": self._settings.sample_rate, "channels": self._settings.channels},
        )

    async def request_stop(self) -> RecordingArtifact:
        """
        Stops capturing and returns the artifact.

        The session always ends IDLE. If the audio cannot be retrieved the
        artifact is returned with `succeeded=False` and a `failure_reason`.

        Raises:
            NoActiveRecordingError: If nothing is being captured; the
                session is left untouched.
        """
        if self._state != RecordingState.CAPTURING or self._handle is None:
            raise NoActiveRecordingError(self._state.value)

        self._state = RecordingState.FINALIZING
        handle, self._handle = self._handle, None
        failure: str | None = None

        try:
            await handle.stop()
        except Exception as e:
            logger.exception("Failed to stop recording")
            failure = str(e) or type(e).__name__

        try:
            await self._release_resources()
        except Exception as e:
            logger.exception("Failed to restore audio mode")
            failure = failure or f"audio mode not restored: {e}"

        self._state = RecordingState.IDLE

        locator = handle.locator
        if failure is None and not locator:
            failure = "recording produced no audio locator"

        if failure is not None:
            return RecordingArtifact(
                locator=locator or "",
                duration_millis=0,
                succeeded=False,
                failure_reason=failure,
            )

        artifact = RecordingArtifact(
            locator=locator,
            duration_millis=max(handle.duration_millis, 0),
            succeeded=True,
        )
        logger.info(
            "Recording stopped",
            extra={"locator": artifact.locator, "duration_ms": artifact.duration_millis},
        )
        return artifact

    async def cleanup(self) -> None:
        """
        Releases the device and audio mode and returns the session to IDLE.

        Safe to call in any state; a no-op when already idle. Audio captured
        by an interrupted session is discarded.
        """
        if self._state == RecordingState.IDLE:
            return

        if self._state == RecordingState.CAPTURING:
            artifact = await self.request_stop()
            artifact.discard()
            return

        handle, self._handle = self._handle, None
        if handle is not None:
            try:
                await handle.stop()
            except Exception:
                logger.exception("Failed to stop capture during cleanup")
        try:
            await self._release_resources()
        except Exception:
            logger.exception("Failed to restore audio mode during cleanup")
        self._state = RecordingState.IDLE

    async def _release_resources(self) -> None:
        resources, self._resources = self._resources, AsyncExitStack()
        await resources.aclose()
