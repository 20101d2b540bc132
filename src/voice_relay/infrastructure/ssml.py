"""SSML document construction for neural voices."""

from xml.sax.saxutils import escape, quoteattr

from voice_relay.domain.models import VoiceSettings


def build_ssml(text: str, voice: VoiceSettings, rate: float, pitch: float) -> str:
    """
    Wraps text in SSML with the voice and prosody settings.

    `rate` is a multiplier of the normal speaking rate; `pitch` is a
    multiplier rendered as a relative percentage (1.0 -> "+0%").
    """
    pitch_percent = round((pitch - 1.0) * 100)
    return (
        f'<speak version="1.0" xmlns="http://www.w3.org/2001/10/synthesis" '
        f"xml:lang={quoteattr(voice.recognition_locale)}>"
        f"<voice name={quoteattr(voice.synthesis_voice)}>"
        f'<prosody rate="{rate:g}" pitch="{pitch_percent:+d}%">{escape(text)}</prosody>'
        f"</voice></speak>"
    )
