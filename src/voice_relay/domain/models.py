"""Domain models for the voice relay pipeline."""

from enum import Enum
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from pydantic import BaseModel, Field


class RecordingArtifact(BaseModel, frozen=True):
    """A captured audio unit produced when a recording stops."""

    locator: str
    duration_millis: int = Field(default=0, ge=0)
    succeeded: bool
    failure_reason: str | None = None

    @property
    def local_path(self) -> Path | None:
        """Returns the filesystem path for `file://` locators."""
        parsed = urlparse(self.locator)
        if parsed.scheme != "file":
            return None
        return Path(unquote(parsed.path))

    def discard(self) -> None:
        """Removes the backing audio file, if it is a local one."""
        path = self.local_path
        if path is not None:
            path.unlink(missing_ok=True)


class TranscriptionResult(BaseModel, frozen=True):
    """Text recognized from an artifact."""

    text: str
    provider: str


class TranslationRequest(BaseModel, frozen=True):
    """Text to translate plus its language pair."""

    source_text: str
    target_language: str
    source_language: str | None = "auto"


class BatchTranslationRequest(BaseModel, frozen=True):
    """Several texts sharing one language pair."""

    source_texts: tuple[str, ...]
    target_language: str
    source_language: str | None = "auto"


class TranslationResponse(BaseModel, frozen=True):
    """Normalized translator response."""

    translated_text: str | None
    detected_language: str | None = None
    raw_provider_payload: Any = None


class ModelAttempt(BaseModel, frozen=True):
    """A single model to try in a fallback chain."""

    model_identifier: str = Field(min_length=1)


class FallbackChain(BaseModel, frozen=True):
    """Ordered, non-empty list of models; primary first."""

    attempts: tuple[ModelAttempt, ...] = Field(min_length=1)

    @classmethod
    def of(cls, *model_identifiers: str) -> "FallbackChain":
        return cls(
            attempts=tuple(ModelAttempt(model_identifier=m) for m in model_identifiers)
        )


class AttemptOutcome(BaseModel, frozen=True):
    """Result of one fallback attempt; exactly one of text/error is set."""

    model_identifier: str
    text: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return bool(self.text)


class ChatMode(str, Enum):
    """Persona the chatbot answers in."""

    CUSTOMER_CARE = "customer_care"
    ASK_ME_ANYTHING = "ask_me_anything"


class ChatReply(BaseModel, frozen=True):
    """Reply produced by the fallback chain."""

    text: str
    source_model: str | None = None
    exhausted: bool = False


class VoiceSettings(BaseModel, frozen=True):
    """Recognition locale and synthesis voice for one language."""

    recognition_locale: str
    synthesis_voice: str


class VoiceProfile(BaseModel, frozen=True):
    """Language code to voice settings table with an English default."""

    voices: dict[str, VoiceSettings]
    default_language: str = "en"

    def resolve(self, language_code: str | None) -> VoiceSettings:
        """
        Returns the voice settings for a language code.

        Tries the exact code, then its primary subtag ("pt-BR" -> "pt"),
        and finally the default language.
        """
        if language_code:
            code = language_code.strip().lower()
            for candidate in (code, code.split("-")[0]):
                if candidate in self.voices:
                    return self.voices[candidate]
        return self.voices[self.default_language]


class PipelineMode(str, Enum):
    """What the pipeline does with the transcribed text."""

    TRANSLATE = "translate"
    CHAT = "chat"


class PipelineRequest(BaseModel, frozen=True):
    """Options for one pass through the voice pipeline."""

    mode: PipelineMode = PipelineMode.TRANSLATE
    target_language: str = "en"
    source_language: str | None = "auto"
    chat_mode: ChatMode = ChatMode.ASK_ME_ANYTHING
    speak: bool = True


class PipelineResult(BaseModel, frozen=True):
    """Everything produced by one pass through the voice pipeline."""

    transcription: TranscriptionResult
    translation: TranslationResponse | None = None
    reply: ChatReply | None = None
    spoken_text: str | None = None
    spoken_language: str | None = None
