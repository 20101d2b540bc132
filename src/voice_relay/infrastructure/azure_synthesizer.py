"""Azure Speech implementation of the SpeechSynthesizer interface."""

import asyncio

import azure.cognitiveservices.speech as speechsdk

from voice_relay.domain.models import VoiceSettings
from voice_relay.infrastructure.interfaces import SpeechSynthesizer
from voice_relay.infrastructure.ssml import build_ssml
from voice_relay.logging import setup_logging

logger = setup_logging()


class AzureSpeechSynthesizer(SpeechSynthesizer):
    """Speaks through the default output device using Azure neural voices."""

    def __init__(self, speech_config: speechsdk.SpeechConfig):
        self._speech_config = speech_config

    async def synthesize(self, text: str, voice: VoiceSettings, rate: float, pitch: float) -> None:
        audio_config = speechsdk.audio.AudioOutputConfig(use_default_speaker=True)
        synthesizer = speechsdk.SpeechSynthesizer(
            speech_config=self._speech_config,
            audio_config=audio_config,
        )
        ssml = build_ssml(text, voice, rate, pitch)

        logger.info(
            "Speech started",
            extra={"voice": voice.synthesis_voice, "characters": len(text)},
        )
        result = await asyncio.to_thread(synthesizer.speak_ssml_async(ssml).get)

        if result.reason == speechsdk.ResultReason.SynthesizingAudioCompleted:
            logger.info("Speech ended", extra={"voice": voice.synthesis_voice})
            return
        if result.reason == speechsdk.ResultReason.Canceled:
            cancellation = result.cancellation_details
            raise RuntimeError(
                f"Speech synthesis canceled: {cancellation.reason} {cancellation.error_details or ''}".strip()
            )
        raise RuntimeError(f"Unexpected synthesis result: {result.reason}")
