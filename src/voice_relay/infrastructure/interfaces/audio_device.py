"""Abstract interface for the microphone and platform audio mode."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from pydantic import BaseModel


class CaptureSettings(BaseModel, frozen=True):
    """Capture parameters tuned for speech."""

    sample_rate: int = 16000
    channels: int = 1
    dtype: str = "int16"


class CaptureHandle(ABC):
    """An open capture on the device."""

    @abstractmethod
    async def stop(self) -> None:
        """
        Flushes buffered audio and releases the device.

        Raises:
            Exception: If the audio cannot be flushed; the device is
                released regardless.
        """
        pass

    @property
    @abstractmethod
    def locator(self) -> str | None:
        """Resource handle for the captured audio, available after stop."""
        pass

    @property
    @abstractmethod
    def duration_millis(self) -> int:
        """Length of the captured audio."""
        pass


class AudioDevice(ABC):
    """Abstract base class for recording platforms."""

    @abstractmethod
    async def request_permission(self) -> bool:
        """Asks the platform for microphone access; True when granted."""
        pass

    @abstractmethod
    def audio_mode(self, settings: CaptureSettings) -> AbstractAsyncContextManager[None]:
        """
        Returns a context that switches the process-wide audio mode to
        recording and restores the previous mode on exit.

        Raises:
            DeviceUnavailableError: If the mode cannot be configured.
        """
        pass

    @abstractmethod
    async def start_capture(self, settings: CaptureSettings) -> CaptureHandle:
        """
        Opens the microphone and starts capturing.

        Raises:
            DeviceUnavailableError: If no capture handle can be obtained.
        """
        pass
