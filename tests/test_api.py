import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from voice_relay.api.dependencies import (
    get_default_chain,
    get_fallback_chain,
    get_translation_relay,
)
from voice_relay.api.routes import chat_router, translate_router
from voice_relay.domain import (
    ChatMode,
    ChatReply,
    FallbackChain,
    TranslationRelayService,
)
from voice_relay.exceptions import UpstreamFailureError
from voice_relay.infrastructure.interfaces import TranslatorClient


class _StubTranslator(TranslatorClient):
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    async def post_translate(self, params, body):
        self.calls.append((params, body))
        if self.error:
            raise self.error
        return self.payload


class _StubFallbackChain:
    def __init__(self, reply):
        self.reply = reply
        self.chains = []
        self.modes = []

    async def get_reply(self, user_message, chain, mode=ChatMode.ASK_ME_ANYTHING):
        self.chains.append(chain)
        self.modes.append(mode)
        return self.reply


@pytest.fixture
def translator():
    return _StubTranslator(payload=[{"translations": [{"text": "Bonjour", "to": "fr"}]}])


@pytest.fixture
def fallback_chain():
    return _StubFallbackChain(ChatReply(text="hi", source_model="modelB"))


@pytest.fixture
def client(translator, fallback_chain):
    app = FastAPI()
    app.include_router(translate_router)
    app.include_router(chat_router)
    app.dependency_overrides[get_translation_relay] = lambda: TranslationRelayService(translator)
    app.dependency_overrides[get_fallback_chain] = lambda: fallback_chain
    app.dependency_overrides[get_default_chain] = lambda: FallbackChain.of("modelA", "modelB")
    return TestClient(app)


def test_translate_returns_translated_text(client, translator):
    response = client.post("/api/translate", json={"text": "Hello", "to": "fr"})

    assert response.status_code == 200
    body = response.json()
    assert body["translatedText"] == "Bonjour"
    assert body["raw"] == [{"translations": [{"text": "Bonjour", "to": "fr"}]}]
    assert translator.calls == [({"to": "fr"}, [{"Text": "Hello"}])]


def test_translate_forwards_explicit_source_language(client, translator):
    response = client.post("/api/translate", json={"text": "Hello", "to": "fr", "from": "en"})

    assert response.status_code == 200
    assert translator.calls[0][0] == {"to": "fr", "from": "en"}


@pytest.mark.parametrize(
    "body",
    [{"to": "fr"}, {"text": "Hello"}, {"text": "", "to": "fr"}, {}],
)
def test_translate_missing_fields_is_400_without_upstream_call(client, translator, body):
    response = client.post("/api/translate", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing 'text' or 'to' fields"}
    assert translator.calls == []


def test_translate_upstream_failure_is_500_with_details(client, translator):
    error_body = {"error": {"code": 401000, "message": "Invalid subscription key"}}
    translator.error = UpstreamFailureError(
        "Invalid subscription key", raw_payload=error_body, status_code=401
    )

    response = client.post("/api/translate", json={"text": "Hello", "to": "fr"})

    assert response.status_code == 500
    assert response.json() == {"error": "translation_failed", "details": error_body}
    assert len(translator.calls) == 1


def test_chat_uses_default_chain(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 200
    assert response.json() == {"reply": "hi", "sourceModel": "modelB", "exhausted": False}
    assert fallback_chain.chains == [FallbackChain.of("modelA", "modelB")]


def test_chat_models_override_the_chain(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "hello", "models": ["modelC"]})

    assert response.status_code == 200
    assert fallback_chain.chains == [FallbackChain.of("modelC")]


def test_chat_requires_message(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "  "})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing 'message' field"}
    assert fallback_chain.chains == []


@pytest.mark.parametrize(
    "payload",
    [
        [{"translations": [{"text": 5}]}],
        [{"translations": [{"text": "Bonjour"}], "detectedLanguage": {"language": ["fr"]}}],
    ],
)
def test_translate_wrongly_typed_payload_is_translation_failed(client, translator, payload):
    translator.payload = payload

    response = client.post("/api/translate", json={"text": "Hello", "to": "fr"})

    assert response.status_code == 500
    assert response.json() == {"error": "translation_failed", "details": payload}


def test_translate_same_language_skips_upstream(client, translator):
    response = client.post("/api/translate", json={"text": "Hello", "to": "en", "from": "en"})

    assert response.status_code == 200
    assert response.json()["translatedText"] == "Hello"
    assert translator.calls == []


@pytest.mark.parametrize("models", [[""], ["modelA", "   "]])
def test_chat_blank_model_ids_are_rejected(client, fallback_chain, models):
    response = client.post("/api/chat", json={"message": "hello", "models": models})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid 'models' field"}
    assert fallback_chain.chains == []


def test_chat_model_ids_are_stripped(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "hello", "models": [" modelC "]})

    assert response.status_code == 200
    assert fallback_chain.chains == [FallbackChain.of("modelC")]


def test_chat_mode_is_forwarded(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "hello", "mode": "customer_care"})

    assert response.status_code == 200
    assert fallback_chain.modes == [ChatMode.CUSTOMER_CARE]


def test_chat_unknown_mode_is_rejected(client, fallback_chain):
    response = client.post("/api/chat", json={"message": "hello", "mode": "poetry"})

    assert response.status_code == 422
    assert fallback_chain.chains == []
