from contextlib import asynccontextmanager

import pytest

from voice_relay.exceptions import DeviceUnavailableError
from voice_relay.infrastructure.interfaces import AudioDevice, CaptureHandle, CaptureSettings


class FakeCapture(CaptureHandle):
    def __init__(self, locator="file:///tmp/fake-recording.wav", duration_millis=2500, fail_stop=False):
        self._pending_locator = locator
        self._locator = None
        self._duration_millis = duration_millis
        self.fail_stop = fail_stop
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True
        if self.fail_stop:
            raise RuntimeError("flush failed")
        self._locator = self._pending_locator

    @property
    def locator(self):
        return self._locator

    @property
    def duration_millis(self) -> int:
        return self._duration_millis


class FakeAudioDevice(AudioDevice):
    """Records calls and lets tests choose where the device fails."""

    def __init__(self, grant=True, fail_mode=False, fail_capture=False, capture=None):
        self.grant = grant
        self.fail_mode = fail_mode
        self.fail_capture = fail_capture
        self.capture = capture or FakeCapture()
        self.mode_active = False
        self.mode_entries = 0
        self.captures_started = 0

    async def request_permission(self) -> bool:
        return self.grant

    @asynccontextmanager
    async def audio_mode(self, settings: CaptureSettings):
        if self.fail_mode:
            raise DeviceUnavailableError("mode rejected")
        self.mode_active = True
        self.mode_entries += 1
        try:
            yield
        finally:
            self.mode_active = False

    async def start_capture(self, settings: CaptureSettings) -> CaptureHandle:
        if self.fail_capture:
            raise OSError("device busy")
        self.captures_started += 1
        return self.capture


@pytest.fixture
def device():
    return FakeAudioDevice()
