from voice_relay.api.routes.chat import router as chat_router
from voice_relay.api.routes.translate import router as translate_router

__all__ = ["chat_router", "translate_router"]
