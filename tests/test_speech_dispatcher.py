import asyncio
import json
import logging

import pytest

from voice_relay.domain import SpeechSynthesisDispatcher
from voice_relay.domain.voice_profiles import default_voice_profile, load_voice_profile
from voice_relay.infrastructure.interfaces import SpeechSynthesizer
from voice_relay.infrastructure.ssml import build_ssml


class _RecordingSynthesizer(SpeechSynthesizer):
    def __init__(self, delay=0.0, error=None):
        self.delay = delay
        self.error = error
        self.spoken = []

    async def synthesize(self, text, voice, rate, pitch):
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.spoken.append((text, voice.synthesis_voice, rate, pitch))


@pytest.mark.parametrize(
    "code, voice",
    [
        ("es", "es-ES-ElviraNeural"),
        ("FR", "fr-FR-DeniseNeural"),
        ("pt-BR", "pt-BR-FranciscaNeural"),
        ("xx", "en-US-JennyNeural"),
        ("", "en-US-JennyNeural"),
    ],
)
def test_resolve_voice(code, voice):
    dispatcher = SpeechSynthesisDispatcher(default_voice_profile())

    assert dispatcher.resolve_voice(code).synthesis_voice == voice


def test_speak_without_backend_only_logs(caplog):
    dispatcher = SpeechSynthesisDispatcher(default_voice_profile())

    with caplog.at_level(logging.INFO):
        dispatcher.speak("Hola", "es")

    (record,) = [r for r in caplog.records if r.getMessage() == "Text-to-speech would play"]
    assert record.text == "Hola"
    assert record.voice == "es-ES-ElviraNeural"


@pytest.mark.asyncio
async def test_speak_returns_before_synthesis_finishes():
    synthesizer = _RecordingSynthesizer(delay=0.05)
    dispatcher = SpeechSynthesisDispatcher(default_voice_profile(), synthesizer)

    dispatcher.speak("Hola", "es")
    assert synthesizer.spoken == []

    await dispatcher.drain()

    assert synthesizer.spoken == [("Hola", "es-ES-ElviraNeural", 0.8, 1.0)]


@pytest.mark.asyncio
async def test_rate_and_pitch_are_fixed_at_construction():
    synthesizer = _RecordingSynthesizer()
    dispatcher = SpeechSynthesisDispatcher(
        default_voice_profile(), synthesizer, rate=1.2, pitch=0.9
    )

    dispatcher.speak("Hello", "en")
    dispatcher.speak("Bonjour", "fr")
    await dispatcher.drain()

    assert [(rate, pitch) for _, _, rate, pitch in synthesizer.spoken] == [(1.2, 0.9), (1.2, 0.9)]


@pytest.mark.asyncio
async def test_synthesis_errors_are_not_raised():
    synthesizer = _RecordingSynthesizer(error=RuntimeError("no audio output"))
    dispatcher = SpeechSynthesisDispatcher(default_voice_profile(), synthesizer)

    dispatcher.speak("Hello", "en")
    await dispatcher.drain()

    assert synthesizer.spoken == []


@pytest.mark.asyncio
async def test_drain_with_nothing_pending():
    dispatcher = SpeechSynthesisDispatcher(default_voice_profile(), _RecordingSynthesizer())

    await dispatcher.drain()


def test_voice_profile_file_overrides_defaults(tmp_path):
    path = tmp_path / "voices.json"
    path.write_text(
        json.dumps(
            {
                "ES": {"recognition_locale": "es-MX", "synthesis_voice": "es-MX-DaliaNeural"},
                "nl": {"recognition_locale": "nl-NL", "synthesis_voice": "nl-NL-FennaNeural"},
            }
        )
    )

    profile = load_voice_profile(path)

    assert profile.resolve("es").synthesis_voice == "es-MX-DaliaNeural"
    assert profile.resolve("nl").recognition_locale == "nl-NL"
    assert profile.resolve("de").synthesis_voice == "de-DE-KatjaNeural"
    assert profile.resolve("xx").synthesis_voice == "en-US-JennyNeural"


def test_no_profile_path_uses_defaults():
    assert load_voice_profile(None) == default_voice_profile()


def test_build_ssml_escapes_text_and_sets_voice():
    voice = default_voice_profile().resolve("fr")

    ssml = build_ssml('Fish & "chips" <now>', voice, rate=0.8, pitch=1.0)

    assert 'xml:lang="fr-FR"' in ssml
    assert '<voice name="fr-FR-DeniseNeural">' in ssml
    assert "Fish &amp; \"chips\" &lt;now&gt;" in ssml


@pytest.mark.parametrize(
    "rate, pitch, prosody",
    [
        (0.8, 1.0, '<prosody rate="0.8" pitch="+0%">'),
        (1.25, 1.1, '<prosody rate="1.25" pitch="+10%">'),
        (1.0, 0.75, '<prosody rate="1" pitch="-25%">'),
    ],
)
def test_build_ssml_prosody(rate, pitch, prosody):
    ssml = build_ssml("Hello", default_voice_profile().resolve("en"), rate=rate, pitch=pitch)

    assert prosody in ssml
