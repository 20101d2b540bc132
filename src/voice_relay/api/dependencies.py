"""FastAPI dependency injection configuration."""

from fastapi import Request

from voice_relay.domain import FallbackChain, ResponseFallbackChain, TranslationRelayService


def get_translation_relay(request: Request) -> TranslationRelayService:
    """Returns the relay built at startup."""
    return request.app.state.translation_relay


def get_fallback_chain(request: Request) -> ResponseFallbackChain:
    """Returns the chat fallback chain built at startup."""
    return request.app.state.fallback_chain


def get_default_chain(request: Request) -> FallbackChain:
    """Returns the configured model order."""
    return request.app.state.chat_chain
