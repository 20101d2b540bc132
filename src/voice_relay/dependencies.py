"""Dependency injection configuration for the voice relay components."""

from pathlib import Path

import httpx

from voice_relay.config import AppConfig
from voice_relay.domain import (
    ChatMode,
    FallbackChain,
    RecordingSession,
    ResponseFallbackChain,
    SpeechSynthesisDispatcher,
    TranscriptionGateway,
    TranslationRelayService,
)
from voice_relay.domain.voice_profiles import load_voice_profile
from voice_relay.handlers import VoicePipelineHandler
from voice_relay.infrastructure.azure_translator import AzureTranslatorClient
from voice_relay.infrastructure.huggingface_inference import HuggingFaceInferenceClient
from voice_relay.infrastructure.interfaces import (
    CacheService,
    CaptureSettings,
    InferenceClient,
    SpeechSynthesizer,
    TranscriptionService,
)
from voice_relay.infrastructure.routing_inference import RoutingInferenceClient
from voice_relay.infrastructure.simulated_transcriber import SimulatedTranscriber
from voice_relay.logging import setup_logging

logger = setup_logging()


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Returns the shared HTTP client for translator and inference calls."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.translator.timeout_seconds),
    )


def build_cache(config: AppConfig) -> CacheService | None:
    """Returns the Redis translation cache, or None when not configured."""
    if not config.redis.enabled:
        return None

    import redis.asyncio as redis

    from voice_relay.infrastructure.redis_cache import RedisCacheService

    client = redis.Redis(host=config.redis.host, port=config.redis.port, decode_responses=True)
    logger.info("Translation cache enabled", extra={"host": config.redis.host})
    return RedisCacheService(client, config.redis.cache_ttl_seconds)


def build_translation_relay(
    config: AppConfig, http_client: httpx.AsyncClient
) -> TranslationRelayService:
    """Returns the relay wired to Azure Translator."""
    if not config.translator.api_key:
        logger.warning("Azure Translator not configured, missing AZURE_TRANSLATOR_KEY")
    client = AzureTranslatorClient(
        http_client,
        endpoint=config.translator.endpoint,
        api_key=config.translator.api_key,
        region=config.translator.region,
        api_version=config.translator.api_version,
    )
    return TranslationRelayService(client, cache=build_cache(config))


def build_inference_client(config: AppConfig, http_client: httpx.AsyncClient) -> InferenceClient:
    """Returns an inference client routing `gemini-` models to Gemini."""
    default = HuggingFaceInferenceClient(
        http_client,
        base_url=config.huggingface.base_url,
        api_key=config.huggingface.api_key,
        timeout_seconds=config.chat.attempt_timeout_seconds,
    )
    if not config.gemini.api_key:
        return RoutingInferenceClient(default)

    from google import genai

    from voice_relay.infrastructure.gemini_inference import GeminiInferenceClient

    gemini = GeminiInferenceClient(genai.Client(api_key=config.gemini.api_key))
    return RoutingInferenceClient(default, routes={"gemini-": gemini})


def load_system_prompts(config: AppConfig) -> dict[ChatMode, str]:
    """Reads one system prompt per chat mode from the prompts directory."""
    prompts_dir = Path(__file__).parent / config.gemini.prompts_dir
    return {
        mode: (prompts_dir / f"{mode.value}.txt").read_text(encoding="utf-8").strip()
        for mode in ChatMode
    }


def build_chat_chain(config: AppConfig) -> FallbackChain:
    """Returns the configured model order."""
    return FallbackChain.of(*config.chat.models)


def build_fallback_chain(
    config: AppConfig, http_client: httpx.AsyncClient
) -> ResponseFallbackChain:
    """Returns the chat fallback chain."""
    return ResponseFallbackChain(
        build_inference_client(config, http_client),
        attempt_timeout_seconds=config.chat.attempt_timeout_seconds,
        system_prompts=load_system_prompts(config),
    )


def build_transcription_service(config: AppConfig) -> TranscriptionService:
    """Returns the speech-to-text backend selected for this deployment."""
    if config.transcription.backend == "simulated":
        return SimulatedTranscriber(delay_seconds=2.0)

    import assemblyai as aai

    from voice_relay.infrastructure.assemblyai_transcriber import AssemblyAITranscriber

    aai.settings.api_key = config.assemblyai.api_key
    aai_config = aai.TranscriptionConfig(language_detection=config.assemblyai.language_detection)
    return AssemblyAITranscriber(aai.Transcriber(config=aai_config))


def build_transcription_gateway(config: AppConfig) -> TranscriptionGateway:
    """Returns the transcription gateway."""
    return TranscriptionGateway(
        build_transcription_service(config),
        timeout_seconds=config.transcription.timeout_seconds,
        min_duration_millis=config.transcription.min_duration_millis,
    )


def build_synthesizer(config: AppConfig) -> SpeechSynthesizer | None:
    """Returns the Azure synthesizer, or None when speech is not configured."""
    if not config.speech.enabled:
        logger.info("Speech synthesis not configured, utterances will only be logged")
        return None

    import azure.cognitiveservices.speech as speechsdk

    from voice_relay.infrastructure.azure_synthesizer import AzureSpeechSynthesizer

    speech_config = speechsdk.SpeechConfig(
        subscription=config.speech.subscription_key,
        region=config.speech.region,
    )
    return AzureSpeechSynthesizer(speech_config)


def build_speech_dispatcher(config: AppConfig) -> SpeechSynthesisDispatcher:
    """Returns the speech dispatcher."""
    return SpeechSynthesisDispatcher(
        load_voice_profile(config.voice_profiles_path),
        synthesizer=build_synthesizer(config),
        rate=config.speech.rate,
        pitch=config.speech.pitch,
    )


def build_recording_session(config: AppConfig) -> RecordingSession:
    """Returns a recording session on the default microphone."""
    from voice_relay.infrastructure.sounddevice_recorder import SoundDeviceAudioDevice

    settings = CaptureSettings(
        sample_rate=config.recording.sample_rate,
        channels=config.recording.channels,
    )
    return RecordingSession(SoundDeviceAudioDevice(config.recording.output_dir), settings)


def build_pipeline_handler(
    config: AppConfig, http_client: httpx.AsyncClient
) -> VoicePipelineHandler:
    """Returns the end-to-end pipeline handler."""
    return VoicePipelineHandler(
        gateway=build_transcription_gateway(config),
        relay=build_translation_relay(config, http_client),
        fallback_chain=build_fallback_chain(config, http_client),
        chain=build_chat_chain(config),
        dispatcher=build_speech_dispatcher(config),
    )
