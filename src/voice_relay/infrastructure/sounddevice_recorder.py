"""sounddevice implementation of the AudioDevice interface."""

import asyncio
import tempfile
import time
import uuid
import wave
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import numpy as np
import sounddevice as sd

from voice_relay.exceptions import DeviceUnavailableError
from voice_relay.infrastructure.interfaces import AudioDevice, CaptureHandle, CaptureSettings
from voice_relay.logging import setup_logging

logger = setup_logging()


class SoundDeviceCapture(CaptureHandle):
    """Buffers microphone frames and writes them to a WAV file on stop."""

    def __init__(self, settings: CaptureSettings, output_path: Path):
        self._settings = settings
        self._output_path = output_path
        self._frames: list[np.ndarray] = []
        self._stream: sd.InputStream | None = None
        self._started_at = 0.0
        self._duration_millis = 0
        self._locator: str | None = None

    def open(self) -> None:
        """Opens and starts the input stream."""
        self._stream = sd.InputStream(
            samplerate=self._settings.sample_rate,
            channels=self._settings.channels,
            dtype=self._settings.dtype,
            callback=self._on_audio,
        )
        self._stream.start()
        self._started_at = time.monotonic()

    def _on_audio(self, indata, frames, time_info, status) -> None:
        if status:
            logger.warning("Input stream status", extra={"status": str(status)})
        self._frames.append(indata.copy())

    async def stop(self) -> None:
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.stop()
        finally:
            stream.close()

        elapsed = time.monotonic() - self._started_at
        frames, self._frames = self._frames, []
        self._duration_millis = await asyncio.to_thread(self._write_wav, frames, elapsed)

        self._locator = self._output_path.resolve().as_uri()
        logger.info(
            "Capture written",
            extra={"path": str(self._output_path), "duration_ms": self._duration_millis},
        )

    def _write_wav(self, frames: list[np.ndarray], elapsed: float) -> int:
        """Writes the buffered frames and returns the recorded duration."""
        audio = (
            np.concatenate(frames)
            if frames
            else np.zeros((0, self._settings.channels), dtype=self._settings.dtype)
        )
        with wave.open(str(self._output_path), "wb") as wf:
            wf.setnchannels(self._settings.channels)
            wf.setsampwidth(np.dtype(self._settings.dtype).itemsize)
            wf.setframerate(self._settings.sample_rate)
            wf.writeframes(audio.tobytes())

        if len(audio):
            return int(len(audio) * 1000 / self._settings.sample_rate)
        return int(elapsed * 1000)

    @property
    def locator(self) -> str | None:
        return self._locator

    @property
    def duration_millis(self) -> int:
        return self._duration_millis


class SoundDeviceAudioDevice(AudioDevice):
    """Records from the default input device through PortAudio."""

    def __init__(self, output_dir: Path | None = None):
        self._output_dir = output_dir or Path(tempfile.gettempdir())

    async def request_permission(self) -> bool:
        """
        Desktop platforms have no permission prompt; access is granted when
        PortAudio exposes a default input device.
        """
        try:
            device = sd.query_devices(kind="input")
        except (sd.PortAudioError, ValueError):
            logger.warning("No input device available")
            return False
        logger.info("Audio permission granted", extra={"device": device.get("name")})
        return True

    @asynccontextmanager
    async def audio_mode(self, settings: CaptureSettings) -> AsyncIterator[None]:
        # channels and dtype are live input/output pairs; copy them.
        previous = (
            sd.default.samplerate,
            tuple(sd.default.channels),
            tuple(sd.default.dtype),
        )
        try:
            sd.default.samplerate = settings.sample_rate
            sd.default.channels = settings.channels
            sd.default.dtype = settings.dtype
        except (sd.PortAudioError, ValueError, TypeError) as e:
            sd.default.samplerate, sd.default.channels, sd.default.dtype = previous
            raise DeviceUnavailableError("could not configure audio mode", cause=e) from e
        logger.info("Audio mode set for recording", extra={"sample_rate": settings.sample_rate})
        try:
            yield
        finally:
            sd.default.samplerate, sd.default.channels, sd.default.dtype = previous
            logger.info("Audio mode restored")

    async def start_capture(self, settings: CaptureSettings) -> CaptureHandle:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self._output_dir / f"recording-{uuid.uuid4().hex}.wav"
        capture = SoundDeviceCapture(settings, output_path)
        try:
            capture.open()
        except (sd.PortAudioError, ValueError) as e:
            logger.exception("Failed to open input stream")
            raise DeviceUnavailableError("could not open input stream", cause=e) from e
        return capture
