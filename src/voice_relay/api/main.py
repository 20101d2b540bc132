"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voice_relay.api.routes import chat_router, translate_router
from voice_relay.config import load_config
from voice_relay.dependencies import (
    build_chat_chain,
    build_fallback_chain,
    build_http_client,
    build_translation_relay,
)
from voice_relay.logging import setup_logging

patch_all()

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the relay components and closes the HTTP client on shutdown."""
    config = load_config()
    async with build_http_client(config) as http_client:
        app.state.translation_relay = build_translation_relay(config, http_client)
        app.state.fallback_chain = build_fallback_chain(config, http_client)
        app.state.chat_chain = build_chat_chain(config)
        logger.info("Translator API ready", extra={"endpoint": config.translator.endpoint})
        yield


app = FastAPI(title="Voice Relay API", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
app.include_router(translate_router)
app.include_router(chat_router)


def run() -> None:
    """Runs the API with uvicorn."""
    config = load_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port)
