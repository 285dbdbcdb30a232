import json

import httpx
import pytest

from errors import ProviderInitError
from llm_providers import (
    HIGH_RISK_PROMPT_LINE,
    build_provider,
    is_llm_error,
    llm_error,
    parse_llm_error,
)
from schemas import LLMRequest, RiskLevel, SessionMessage, TherapeuticSession, TopicTag


def _completion(text: str = "Hello there", tokens: int = 42) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": text}}],
        "usage": {"total_tokens": tokens},
    }


def _request(session: TherapeuticSession, prompt: str = "I feel anxious") -> LLMRequest:
    return LLMRequest(prompt=prompt, context=session, max_tokens=321, temperature=0.3)


def test_error_sentinel_helpers():
    err = llm_error("boom")
    assert err == "Error: boom"
    assert is_llm_error(err)
    assert parse_llm_error(err) == "boom"
    assert not is_llm_error("All good")
    assert parse_llm_error("All good") == ""


@pytest.mark.parametrize("key", ["", "PLACEHOLDER", None])
def test_placeholder_key_is_rejected(key):
    with pytest.raises(ProviderInitError, match="Groq API key is required"):
        build_provider("groq", key)


def test_unknown_provider_tag_is_rejected():
    with pytest.raises(ProviderInitError):
        build_provider("openai", "sk-test")


@pytest.mark.asyncio
async def test_query_posts_openai_payload_and_parses_reply(session):
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("Let me explain.", 17))

    provider = build_provider("groq", "gsk-test", transport=httpx.MockTransport(handler))
    response = await provider.query(_request(session))

    assert seen["url"] == "https://api.groq.com/openai/v1/chat/completions"
    assert seen["auth"] == "Bearer gsk-test"
    assert seen["body"]["model"] == "llama-3.3-70b-versatile"
    assert seen["body"]["max_tokens"] == 321
    assert seen["body"]["temperature"] == 0.3
    assert seen["body"]["messages"][0]["role"] == "system"
    assert seen["body"]["messages"][-1] == {"role": "user", "content": "I feel anxious"}

    assert response.raw_response == "Let me explain."
    assert response.token_count == 17
    assert response.provider == "groq-llama-3.3-70b"
    assert response.latency_ms >= 0


@pytest.mark.asyncio
async def test_missing_fields_default_to_empty(session):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    provider = build_provider("grok", "xai-test", transport=transport)

    response = await provider.query(_request(session))

    assert response.raw_response == ""
    assert response.token_count == 0


@pytest.mark.asyncio
async def test_http_error_becomes_sentinel(session):
    transport = httpx.MockTransport(lambda request: httpx.Response(500, text="upstream down"))
    provider = build_provider("groq", "gsk-test", transport=transport)

    response = await provider.query(_request(session))

    assert is_llm_error(response.raw_response)
    assert "Groq API error (500)" in response.raw_response
    assert "upstream down" in response.raw_response
    assert response.token_count == 0


@pytest.mark.asyncio
async def test_transport_failure_becomes_sentinel(session):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    provider = build_provider("grok", "xai-test", transport=httpx.MockTransport(handler))
    response = await provider.query(_request(session))

    assert response.raw_response.startswith("Error:")
    assert "connection refused" in response.raw_response


def test_history_is_windowed_and_roles_mapped():
    provider = build_provider("groq", "gsk-test", history_window=2)
    session = TherapeuticSession(
        session_id="s",
        user_id="u",
        messages=[
            SessionMessage(role="client", content="first"),
            SessionMessage(role="therapist", content="second"),
            SessionMessage(role="client", content="third"),
        ],
    )

    messages = provider.build_messages(_request(session, prompt="fourth"))

    assert [m["role"] for m in messages] == ["system", "assistant", "user", "user"]
    assert [m["content"] for m in messages[1:]] == ["second", "third", "fourth"]


def test_system_prompt_carries_session_context():
    provider = build_provider("grok", "xai-test")
    session = TherapeuticSession(
        session_id="s",
        user_id="u",
        topic_tags=[TopicTag.DISSOCIATION],
        risk_level=RiskLevel.HIGH,
    )

    prompt = provider.build_system_prompt(session)

    assert "Risk level: high" in prompt
    assert "Topics discussed: dissociation" in prompt
    assert HIGH_RISK_PROMPT_LINE in prompt


def test_low_risk_prompt_has_no_crisis_line(session):
    prompt = build_provider("groq", "gsk-test").build_system_prompt(session)

    assert "Topics discussed: none yet" in prompt
    assert HIGH_RISK_PROMPT_LINE not in prompt


def test_describe_never_exposes_key():
    info = build_provider("grok", "xai-secret").describe()

    assert info.name == "grok-2"
    assert info.endpoint == "https://api.x.ai/v1/chat/completions"
    assert info.model_name == "grok-2-latest"
    assert info.rate_limit.requests_per_minute >= 1
    assert "xai-secret" not in info.model_dump_json()
