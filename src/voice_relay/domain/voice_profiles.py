"""Built-in voice profile table and loader."""

import json
from pathlib import Path

from voice_relay.domain.models import VoiceProfile, VoiceSettings

DEFAULT_VOICES: dict[str, VoiceSettings] = {
    "en": VoiceSettings(recognition_locale="en-US", synthesis_voice="en-US-JennyNeural"),
    "fr": VoiceSettings(recognition_locale="fr-FR", synthesis_voice="fr-FR-DeniseNeural"),
    "de": VoiceSettings(recognition_locale="de-DE", synthesis_voice="de-DE-KatjaNeural"),
    "es": VoiceSettings(recognition_locale="es-ES", synthesis_voice="es-ES-ElviraNeural"),
    "it": VoiceSettings(recognition_locale="it-IT", synthesis_voice="it-IT-ElsaNeural"),
    "zh": VoiceSettings(recognition_locale="zh-CN", synthesis_voice="zh-CN-XiaoxiaoNeural"),
    "ja": VoiceSettings(recognition_locale="ja-JP", synthesis_voice="ja-JP-NanamiNeural"),
    "ar": VoiceSettings(recognition_locale="ar-SA", synthesis_voice="ar-SA-ZariyahNeural"),
    "sw": VoiceSettings(recognition_locale="sw-KE", synthesis_voice="sw-KE-ZuriNeural"),
    "zu": VoiceSettings(recognition_locale="zu-ZA", synthesis_voice="zu-ZA-ThandoNeural"),
    "pt": VoiceSettings(recognition_locale="pt-BR", synthesis_voice="pt-BR-FranciscaNeural"),
}


def default_voice_profile() -> VoiceProfile:
    """Returns the built-in profile table."""
    return VoiceProfile(voices=DEFAULT_VOICES)


def load_voice_profile(path: Path | None) -> VoiceProfile:
    """
    Loads a voice profile table from a JSON file.

    The file maps language codes to objects with `recognition_locale` and
    `synthesis_voice`. Entries are merged over the built-in table so that
    the English default is always present.
    """
    if path is None:
        return default_voice_profile()

    overrides = json.loads(path.read_text(encoding="utf-8"))
    voices = dict(DEFAULT_VOICES)
    for code, settings in overrides.items():
        voices[code.lower()] = VoiceSettings.model_validate(settings)
    return VoiceProfile(voices=voices)
