import asyncio

import pytest

from voice_relay.domain import RecordingArtifact, TranscriptionGateway
from voice_relay.exceptions import TranscriptionFailedError
from voice_relay.infrastructure.interfaces import TranscriptionService
from voice_relay.infrastructure.simulated_transcriber import SimulatedTranscriber


class _StubTranscriber(TranscriptionService):
    def __init__(self, text="hello there", delay=0.0, error=None):
        self.text = text
        self.delay = delay
        self.error = error
        self.locators = []

    @property
    def name(self) -> str:
        return "stub"

    async def transcribe(self, locator: str) -> str:
        self.locators.append(locator)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.text


def _artifact(**overrides) -> RecordingArtifact:
    fields = {"locator": "memory://take-1", "duration_millis": 3000, "succeeded": True}
    fields.update(overrides)
    return RecordingArtifact(**fields)


@pytest.mark.asyncio
async def test_transcribe_returns_text_and_provider():
    backend = _StubTranscriber(text="  good morning  ")
    gateway = TranscriptionGateway(backend)

    result = await gateway.transcribe(_artifact())

    assert result.text == "good morning"
    assert result.provider == "stub"
    assert backend.locators == ["memory://take-1"]


@pytest.mark.asyncio
async def test_failed_artifact_is_rejected_without_calling_backend():
    backend = _StubTranscriber()
    gateway = TranscriptionGateway(backend)

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await gateway.transcribe(_artifact(succeeded=False, failure_reason="flush failed"))

    assert exc_info.value.reason == "flush failed"
    assert backend.locators == []


@pytest.mark.asyncio
async def test_backend_timeout_is_reported_as_transcription_failure():
    gateway = TranscriptionGateway(_StubTranscriber(delay=1.0), timeout_seconds=0.01)

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await gateway.transcribe(_artifact())

    assert "did not respond" in exc_info.value.reason


@pytest.mark.asyncio
async def test_empty_text_is_a_failure():
    gateway = TranscriptionGateway(_StubTranscriber(text="   "))

    with pytest.raises(TranscriptionFailedError):
        await gateway.transcribe(_artifact())


@pytest.mark.asyncio
async def test_backend_errors_are_wrapped():
    gateway = TranscriptionGateway(_StubTranscriber(error=ConnectionError("unreachable")))

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await gateway.transcribe(_artifact())

    assert isinstance(exc_info.value.cause, ConnectionError)


@pytest.mark.asyncio
async def test_short_recordings_are_rejected():
    backend = _StubTranscriber()
    gateway = TranscriptionGateway(backend, min_duration_millis=2000)

    with pytest.raises(TranscriptionFailedError) as exc_info:
        await gateway.transcribe(_artifact(duration_millis=800))

    assert "too short" in exc_info.value.reason
    assert backend.locators == []


@pytest.mark.asyncio
async def test_local_artifact_is_discarded_after_use(tmp_path):
    audio = tmp_path / "take.wav"
    audio.write_bytes(b"RIFF")
    gateway = TranscriptionGateway(_StubTranscriber())

    await gateway.transcribe(_artifact(locator=audio.as_uri()))

    assert not audio.exists()


@pytest.mark.asyncio
async def test_local_artifact_is_discarded_even_on_failure(tmp_path):
    audio = tmp_path / "take.wav"
    audio.write_bytes(b"RIFF")
    gateway = TranscriptionGateway(_StubTranscriber(text=""))

    with pytest.raises(TranscriptionFailedError):
        await gateway.transcribe(_artifact(locator=audio.as_uri()))

    assert not audio.exists()


@pytest.mark.asyncio
async def test_simulated_backend_is_deterministic():
    gateway = TranscriptionGateway(SimulatedTranscriber(phrases=["one", "two"]))

    texts = [(await gateway.transcribe(_artifact())).text for _ in range(3)]

    assert texts == ["one", "two", "one"]


def test_simulated_backend_needs_phrases():
    with pytest.raises(ValueError):
        SimulatedTranscriber(phrases=[])
