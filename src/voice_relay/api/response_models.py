"""Request and response models for the relay API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from voice_relay.domain import ChatMode


class TranslateBody(BaseModel):
    """Body of `POST /api/translate`; fields are checked by the relay."""

    model_config = ConfigDict(populate_by_name=True)

    text: str | None = None
    to: str | None = None
    from_: str | None = Field(default=None, alias="from")


class TranslateResponse(BaseModel):
    """Successful translation."""

    translatedText: str | None
    detectedLanguage: str | None = None
    raw: Any = None


class ChatBody(BaseModel):
    """Body of `POST /api/chat`."""

    message: str | None = None
    models: list[str] | None = None
    mode: ChatMode = ChatMode.ASK_ME_ANYTHING


class ChatResponse(BaseModel):
    """Reply from the fallback chain."""

    reply: str
    sourceModel: str | None = None
    exhausted: bool = False


class ErrorResponse(BaseModel):
    """Error body returned by the relay endpoints."""

    error: str
    details: Any = None
