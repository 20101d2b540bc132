"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel


class AzureTranslatorConfig(BaseModel, frozen=True):
    """Azure Translator connection configuration."""

    api_key: str
    region: str
    endpoint: str = "https://api.cognitive.microsofttranslator.com"
    api_version: str = "3.0"
    timeout_seconds: float = 10.0


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language_detection: bool = True


class TranscriptionConfig(BaseModel, frozen=True):
    """Transcription gateway configuration."""

    backend: str = "assemblyai"
    timeout_seconds: float = 60.0
    min_duration_millis: int = 0


class HuggingFaceConfig(BaseModel, frozen=True):
    """Hugging Face inference API configuration."""

    api_key: str
    base_url: str = "https://api-inference.huggingface.co"
    primary_model: str = "microsoft/DialoGPT-medium"
    backup_model: str = "facebook/blenderbot-400M-distill"


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    prompts_dir: Path = Path("prompts")


class ChatConfig(BaseModel, frozen=True):
    """Fallback chain configuration."""

    models: tuple[str, ...]
    attempt_timeout_seconds: float = 15.0


class AzureSpeechConfig(BaseModel, frozen=True):
    """Azure Speech synthesis configuration."""

    subscription_key: str
    region: str
    rate: float = 0.8
    pitch: float = 1.0

    @property
    def enabled(self) -> bool:
        return bool(self.subscription_key and self.region)


class RedisConfig(BaseModel, frozen=True):
    """Redis translation cache configuration."""

    host: str
    port: int = 6379
    cache_ttl_seconds: int = 86400  # 24 hours default

    @property
    def enabled(self) -> bool:
        return bool(self.host)


class RecordingConfig(BaseModel, frozen=True):
    """Microphone capture configuration."""

    sample_rate: int = 16000
    channels: int = 1
    output_dir: Path | None = None


class ServerConfig(BaseModel, frozen=True):
    """Relay API listener configuration."""

    host: str = "0.0.0.0"
    port: int = 3000


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    translator: AzureTranslatorConfig
    assemblyai: AssemblyAIConfig
    transcription: TranscriptionConfig
    huggingface: HuggingFaceConfig
    gemini: GeminiConfig
    chat: ChatConfig
    speech: AzureSpeechConfig
    redis: RedisConfig
    recording: RecordingConfig
    server: ServerConfig = ServerConfig()
    voice_profiles_path: Path | None = None


def _split_models(raw: str) -> tuple[str, ...]:
    return tuple(model.strip() for model in raw.split(",") if model.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    huggingface = HuggingFaceConfig(
        api_key=os.getenv("HUGGINGFACE_API_KEY", ""),
    )
    gemini = GeminiConfig(
        api_key=os.getenv("GEMINI_API_KEY", ""),
        model_name=os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash-lite"),
    )
    default_models = f"{huggingface.primary_model},{huggingface.backup_model}"
    if gemini.api_key:
        default_models += f",{gemini.model_name}"
    output_dir = os.getenv("RECORDING_OUTPUT_DIR")
    voice_profiles_path = os.getenv("VOICE_PROFILES_PATH")

    return AppConfig(
        translator=AzureTranslatorConfig(
            api_key=os.getenv("AZURE_TRANSLATOR_KEY", ""),
            region=os.getenv("AZURE_TRANSLATOR_REGION", "eastus"),
            endpoint=os.getenv(
                "AZURE_TRANSLATOR_ENDPOINT",
                "https://api.cognitive.microsofttranslator.com",
            ),
            timeout_seconds=float(os.getenv("AZURE_TRANSLATOR_TIMEOUT_SECONDS", "10")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        transcription=TranscriptionConfig(
            backend=os.getenv("TRANSCRIPTION_BACKEND", "assemblyai"),
            timeout_seconds=float(os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "60")),
            min_duration_millis=int(os.getenv("TRANSCRIPTION_MIN_DURATION_MS", "0")),
        ),
        huggingface=huggingface,
        gemini=gemini,
        chat=ChatConfig(
            models=_split_models(os.getenv("CHAT_MODELS", default_models)),
            attempt_timeout_seconds=float(os.getenv("CHAT_ATTEMPT_TIMEOUT_SECONDS", "15")),
        ),
        speech=AzureSpeechConfig(
            subscription_key=os.getenv("AZURE_SPEECH_KEY", ""),
            region=os.getenv("AZURE_SPEECH_REGION", ""),
        ),
        redis=RedisConfig(
            host=os.getenv("REDIS_HOST", ""),
            port=int(os.getenv("REDIS_PORT", "6379")),
            cache_ttl_seconds=int(os.getenv("REDIS_CACHE_TTL_SECONDS", "86400")),
        ),
        recording=RecordingConfig(
            output_dir=Path(output_dir) if output_dir else None,
        ),
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        ),
        voice_profiles_path=Path(voice_profiles_path) if voice_profiles_path else None,
    )
