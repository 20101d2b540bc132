"""Chatbot endpoint backed by the model fallback chain."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from voice_relay.api.dependencies import get_default_chain, get_fallback_chain
from voice_relay.api.response_models import ChatBody, ChatResponse, ErrorResponse
from voice_relay.domain import FallbackChain, ResponseFallbackChain

router = APIRouter(prefix="/api", tags=["chat"])

ChainDep = Annotated[ResponseFallbackChain, Depends(get_fallback_chain)]
DefaultChainDep = Annotated[FallbackChain, Depends(get_default_chain)]


@router.post("/chat", response_model=ChatResponse, responses={400: {"model": ErrorResponse}})
async def chat(body: ChatBody, fallback_chain: ChainDep, default_chain: DefaultChainDep):
    """Returns a reply from the first model that answers."""
    if not body.message or not body.message.strip():
        return JSONResponse(status_code=400, content={"error": "Missing 'message' field"})

    chain = default_chain
    if body.models:
        model_identifiers = [model.strip() for model in body.models]
        if not all(model_identifiers):
            return JSONResponse(status_code=400, content={"error": "Invalid 'models' field"})
        chain = FallbackChain.of(*model_identifiers)

    reply = await fallback_chain.get_reply(body.message, chain, body.mode)
    return ChatResponse(reply=reply.text, sourceModel=reply.source_model, exhausted=reply.exhausted)
