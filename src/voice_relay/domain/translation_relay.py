"""Single-attempt relay to the remote translation provider."""

from typing import Any

from voice_relay.domain.models import (
    BatchTranslationRequest,
    TranslationRequest,
    TranslationResponse,
)
from voice_relay.exceptions import CacheServiceError, InvalidRequestError, UpstreamFailureError
from voice_relay.infrastructure.interfaces import CacheService, TranslatorClient
from voice_relay.logging import setup_logging

logger = setup_logging()

AUTO_DETECT = "auto"


def build_language_params(request: TranslationRequest | BatchTranslationRequest) -> dict[str, str]:
    """
    Builds the language query parameters.

    `to` always comes first; `from` is only sent for an explicit source
    language other than "auto".
    """
    params = {"to": request.target_language.strip()}
    source = (request.source_language or "").strip()
    if source and source.lower() != AUTO_DETECT:
        params["from"] = source
    return params


def is_same_language(params: dict[str, str]) -> bool:
    source = params.get("from")
    return source is not None and source.lower() == params["to"].lower()


def _malformed(payload: Any, cause: Exception | None = None) -> UpstreamFailureError:
    return UpstreamFailureError("Malformed translation payload", raw_payload=payload, cause=cause)


def parse_translation_item(item: Any, payload: Any) -> tuple[str | None, str | None]:
    """
    Extracts the first candidate and detected language from one result item.

    An empty candidate list yields no text. Any other deviation from the
    expected shape or types is treated as a malformed payload.

    Raises:
        UpstreamFailureError: With the whole payload attached.
    """
    if not isinstance(item, dict):
        raise _malformed(payload)

    candidates = item.get("translations")
    if not isinstance(candidates, list):
        raise _malformed(payload)

    translated_text = None
    if candidates:
        first = candidates[0]
        if not isinstance(first, dict) or not isinstance(first.get("text"), str):
            raise _malformed(payload)
        translated_text = first["text"]

    detected_language = None
    detected = item.get("detectedLanguage")
    if detected is not None:
        if not isinstance(detected, dict):
            raise _malformed(payload)
        detected_language = detected.get("language")
        if detected_language is not None and not isinstance(detected_language, str):
            raise _malformed(payload)

    return translated_text, detected_language


def parse_translation_payload(payload: Any) -> tuple[str | None, str | None]:
    """
    Extracts the first translation and the detected source language.

    Raises:
        UpstreamFailureError: If the payload does not have the expected shape.
    """
    if not isinstance(payload, list) or not payload:
        raise _malformed(payload)
    return parse_translation_item(payload[0], payload)


def _cache_key(text: str, params: dict[str, str]) -> str:
    return f"translation:{text}|{params.get('from', AUTO_DETECT)}|{params['to']}"


class TranslationRelayService:
    """
    Validates a translation request and forwards it upstream exactly once.

    Retries are left to callers. Requests whose explicit source language
    equals the target are answered locally. An optional cache short-circuits
    repeated requests; only successful translations are stored.
    """

    def __init__(self, client: TranslatorClient, cache: CacheService | None = None):
        self._client = client
        self._cache = cache

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """
        Translates text through the upstream provider.

        Raises:
            InvalidRequestError: If the text or target language is empty; no
                upstream call is made.
            UpstreamFailureError: If the upstream call fails or its payload
                is malformed.
        """
        if not request.source_text or not request.source_text.strip():
            raise InvalidRequestError("text")
        if not request.target_language or not request.target_language.strip():
            raise InvalidRequestError("to")

        params = build_language_params(request)
        if is_same_language(params):
            logger.info("Skipping translation, same language", extra={"to": params["to"]})
            return TranslationResponse(
                translated_text=request.source_text,
                detected_language=params["from"],
            )

        cache_key = _cache_key(request.source_text, params)
        cached = await self._cache_get(cache_key)
        if cached is not None:
            return TranslationResponse.model_validate_json(cached)

        logger.info(
            "Translating",
            extra={
                "from": params.get("from", AUTO_DETECT),
                "to": params["to"],
                "characters": len(request.source_text),
            },
        )

        payload = await self._client.post_translate(params, [{"Text": request.source_text}])
        translated_text, detected_language = parse_translation_payload(payload)

        response = TranslationResponse(
            translated_text=translated_text,
            detected_language=detected_language,
            raw_provider_payload=payload,
        )
        logger.info(
            "Translation successful",
            extra={"to": params["to"], "detected_language": detected_language},
        )

        if translated_text:
            await self._cache_set(cache_key, response.model_dump_json())
        return response

    async def translate_batch(self, request: BatchTranslationRequest) -> list[TranslationResponse]:
        """
        Translates several texts with a single upstream call.

        Results keep the order of `request.source_texts`. Cached texts are
        not resent; when every text is cached no call is made. A failed
        batch is not retried item by item.

        Raises:
            InvalidRequestError: If any text or the target language is empty.
            UpstreamFailureError: If the upstream call fails or the payload
                does not hold one result per text sent.
        """
        if not request.source_texts:
            return []
        if not request.target_language or not request.target_language.strip():
            raise InvalidRequestError("to")
        if any(not text or not text.strip() for text in request.source_texts):
            raise InvalidRequestError("texts")

        params = build_language_params(request)
        if is_same_language(params):
            return [
                TranslationResponse(translated_text=text, detected_language=params["from"])
                for text in request.source_texts
            ]

        results: list[TranslationResponse | None] = []
        for text in request.source_texts:
            cached = await self._cache_get(_cache_key(text, params))
            results.append(TranslationResponse.model_validate_json(cached) if cached else None)

        pending = [i for i, result in enumerate(results) if result is None]
        if not pending:
            return results

        logger.info(
            "Batch translating",
            extra={
                "from": params.get("from", AUTO_DETECT),
                "to": params["to"],
                "texts": len(pending),
                "cached": len(results) - len(pending),
            },
        )

        body = [{"Text": request.source_texts[i]} for i in pending]
        payload = await self._client.post_translate(params, body)
        if not isinstance(payload, list) or len(payload) != len(pending):
            raise _malformed(payload)

        for index, item in zip(pending, payload):
            translated_text, detected_language = parse_translation_item(item, payload)
            response = TranslationResponse(
                translated_text=translated_text,
                detected_language=detected_language,
                raw_provider_payload=item,
            )
            results[index] = response
            if translated_text:
                await self._cache_set(
                    _cache_key(request.source_texts[index], params), response.model_dump_json()
                )

        logger.info("Batch translation successful", extra={"to": params["to"], "texts": len(pending)})
        return results

    async def _cache_get(self, key: str) -> str | None:
        if self._cache is None:
            return None
        try:
            return await self._cache.get(key)
        except CacheServiceError:
            # Logged by the cache backend; a cache outage never blocks translation.
            return None

    async def _cache_set(self, key: str, value: str) -> None:
        if self._cache is None:
            return
        try:
            await self._cache.set(key, value)
        except CacheServiceError:
            return
