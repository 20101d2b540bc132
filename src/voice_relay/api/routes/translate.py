"""Translation proxy endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from voice_relay.api.dependencies import get_translation_relay
from voice_relay.api.response_models import ErrorResponse, TranslateBody, TranslateResponse
from voice_relay.domain import TranslationRelayService, TranslationRequest
from voice_relay.exceptions import InvalidRequestError, UpstreamFailureError
from voice_relay.logging import setup_logging

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["translate"])

RelayDep = Annotated[TranslationRelayService, Depends(get_translation_relay)]


@router.post(
    "/translate",
    response_model=TranslateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def translate(body: TranslateBody, relay: RelayDep):
    """Forwards one translation to the upstream provider."""
    try:
        result = await relay.translate(
            TranslationRequest(
                source_text=body.text or "",
                target_language=body.to or "",
                source_language=body.from_,
            )
        )
    except InvalidRequestError:
        return JSONResponse(status_code=400, content={"error": "Missing 'text' or 'to' fields"})
    except UpstreamFailureError as e:
        logger.error(
            "Azure translation error",
            extra={"status": e.status_code, "details": str(e.details)},
        )
        details = e.raw_payload if e.raw_payload is not None else e.details
        return JSONResponse(
            status_code=500,
            content={"error": "translation_failed", "details": details},
        )

    return TranslateResponse(
        translatedText=result.translated_text,
        detectedLanguage=result.detected_language,
        raw=result.raw_provider_payload,
    )
