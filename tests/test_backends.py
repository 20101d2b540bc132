import asyncio
import wave
from types import SimpleNamespace

import assemblyai as aai
import numpy as np
import pytest

from voice_relay.exceptions import InferenceError, TranscriptionFailedError
from voice_relay.infrastructure.assemblyai_transcriber import AssemblyAITranscriber
from voice_relay.infrastructure.gemini_inference import GeminiInferenceClient
from voice_relay.infrastructure.interfaces import CaptureSettings

try:
    from voice_relay.infrastructure import sounddevice_recorder
except OSError:
    # PortAudio is not installed on this host.
    sounddevice_recorder = None


class _FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def _gemini(models: _FakeModels) -> GeminiInferenceClient:
    return GeminiInferenceClient(SimpleNamespace(aio=SimpleNamespace(models=models)))


@pytest.mark.asyncio
async def test_gemini_reply_is_shaped_as_generated_text():
    models = _FakeModels(text="Happy to help!")

    payload = await _gemini(models).generate("gemini-2.5-flash-lite", "hi", "Be brief.")

    assert payload == {"generated_text": "Happy to help!"}
    assert models.calls == [
        {
            "model": "gemini-2.5-flash-lite",
            "contents": "hi",
            "config": {"system_instruction": "Be brief."},
        }
    ]


@pytest.mark.asyncio
async def test_gemini_without_instructions_sends_no_config():
    models = _FakeModels(text=None)

    payload = await _gemini(models).generate("gemini-2.5-flash-lite", "hi")

    assert payload == {"generated_text": ""}
    assert models.calls[0]["config"] is None


@pytest.mark.asyncio
async def test_gemini_errors_are_inference_errors():
    error = RuntimeError("quota exceeded")

    with pytest.raises(InferenceError) as exc_info:
        await _gemini(_FakeModels(error=error)).generate("gemini-2.5-flash-lite", "hi")

    assert exc_info.value.model_identifier == "gemini-2.5-flash-lite"
    assert exc_info.value.cause is error


class _FakeTranscriber:
    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error
        self.sources = []

    def transcribe(self, source):
        self.sources.append(source)
        if self.error:
            raise self.error
        return self.transcript


def _transcript(status, text=None, error=None):
    return SimpleNamespace(id="tr-1", status=status, text=text, error=error)


@pytest.mark.asyncio
async def test_assemblyai_uploads_local_files_by_path(tmp_path):
    audio = tmp_path / "take 1.wav"
    backend = _FakeTranscriber(_transcript(aai.TranscriptStatus.completed, text="hello"))

    text = await AssemblyAITranscriber(backend).transcribe(audio.as_uri())

    assert text == "hello"
    assert backend.sources == [str(audio)]


@pytest.mark.asyncio
async def test_assemblyai_passes_remote_urls_through():
    backend = _FakeTranscriber(_transcript(aai.TranscriptStatus.completed, text="hello"))

    await AssemblyAITranscriber(backend).transcribe("https://cdn.example.com/take.wav")

    assert backend.sources == ["https://cdn.example.com/take.wav"]


@pytest.mark.asyncio
async def test_assemblyai_error_status_is_transcription_failure():
    backend = _FakeTranscriber(_transcript(aai.TranscriptStatus.error, error="audio too quiet"))

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await AssemblyAITranscriber(backend).transcribe("https://cdn.example.com/take.wav")

    assert exc_info.value.reason == "audio too quiet"


@pytest.mark.asyncio
async def test_assemblyai_sdk_exceptions_are_wrapped():
    error = ConnectionError("unreachable")

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await AssemblyAITranscriber(_FakeTranscriber(error=error)).transcribe("https://x/take.wav")

    assert exc_info.value.cause is error


class _FakeStream:
    def __init__(self):
        self.stopped = False
        self.closed = False

    def stop(self):
        self.stopped = True

    def close(self):
        self.closed = True


@pytest.mark.skipif(sounddevice_recorder is None, reason="PortAudio not available")
@pytest.mark.asyncio
async def test_capture_flush_runs_in_a_worker_thread(tmp_path, monkeypatch):
    offloaded = []
    real_to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return await real_to_thread(func, *args, **kwargs)

    monkeypatch.setattr(sounddevice_recorder.asyncio, "to_thread", recording_to_thread)

    settings = CaptureSettings(sample_rate=16000, channels=1)
    output = tmp_path / "take.wav"
    capture = sounddevice_recorder.SoundDeviceCapture(settings, output)
    stream = _FakeStream()
    capture._stream = stream
    capture._frames = [np.zeros((8000, 1), dtype="int16"), np.ones((8000, 1), dtype="int16")]

    await capture.stop()

    assert offloaded == ["_write_wav"]
    assert stream.stopped and stream.closed
    assert capture.duration_millis == 1000
    assert capture.locator == output.resolve().as_uri()
    with wave.open(str(output), "rb") as wf:
        assert wf.getnframes() == 16000
        assert wf.getframerate() == 16000
