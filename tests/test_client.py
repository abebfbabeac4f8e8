from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
from pydantic import BaseModel

import agentsflow.client as client_module
from agentsflow.client import (
    CLIENT_TIMEOUT_SECONDS,
    LEGACY_MODEL,
    GenerateOptions,
    PromptCall,
    generate_object,
    generate_text,
    normalize_call,
    parse_json_text,
)
from agentsflow.core.errors import (
    FormatError,
    GenerationTimeoutError,
    TransportError,
    UnknownAgentError,
)


@pytest.fixture()
def gateway(monkeypatch):
    captured: dict[str, Any] = {
        "requests": [],
        "timeouts": [],
        "reply": httpx.Response(200, json={"response": "generated"}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        captured["requests"].append(
            {"url": str(request.url), "json": json.loads(request.content)}
        )
        reply = captured["reply"]
        if isinstance(reply, Exception):
            raise reply
        return reply

    transport = httpx.MockTransport(handler)

    def fake_create_client(base_url: str, timeout: float) -> httpx.AsyncClient:
        captured["timeouts"].append(timeout)
        return httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    monkeypatch.setattr(client_module, "create_client", fake_create_client)
    return captured


def test_legacy_prompt_string_uses_fast_local_model():
    assert normalize_call("Summarize this lead") == {
        "provider": "local",
        "model": LEGACY_MODEL,
        "prompt": "Summarize this lead",
    }
    assert normalize_call(PromptCall("Hi")) == normalize_call("Hi")


def test_agent_preset_fills_model_provider_and_system():
    payload = normalize_call(GenerateOptions(agent_id="web-dev-agent", prompt="Audit my site"))

    assert payload["provider"] == "cloud"
    assert payload["model"] == "gemini-2.0-flash"
    assert payload["system"].startswith("You are a senior web developer")
    assert payload["prompt"] == "Audit my site"


def test_explicit_fields_override_agent_preset():
    payload = normalize_call(
        GenerateOptions(
            agent_id="web-dev-agent",
            provider="local",
            model="mistral",
            system="Custom system",
            messages=[{"role": "user", "content": "Hi"}],
        )
    )

    assert payload == {
        "provider": "local",
        "model": "mistral",
        "system": "Custom system",
        "messages": [{"role": "user", "content": "Hi"}],
    }


def test_unknown_agent_is_rejected():
    with pytest.raises(UnknownAgentError):
        normalize_call(GenerateOptions(agent_id="does-not-exist", prompt="Hi"))


def test_generate_text_returns_only_response_text(gateway):
    text = asyncio.run(generate_text("Hello", base_url="http://gateway.test"))

    assert text == "generated"
    sent = gateway["requests"][0]
    assert sent["url"] == "http://gateway.test/api/ai/generate"
    assert sent["json"]["model"] == LEGACY_MODEL
    assert gateway["timeouts"] == [CLIENT_TIMEOUT_SECONDS]


def test_generate_text_timeout_is_distinct_from_transport_error(gateway):
    gateway["reply"] = httpx.ReadTimeout("read timed out")

    with pytest.raises(GenerationTimeoutError) as exc_info:
        asyncio.run(generate_text("Hello", base_url="http://gateway.test"))

    assert not isinstance(exc_info.value, TransportError)
    assert "timed out" in exc_info.value.message


def test_generate_text_deadline_covers_slowly_streamed_body(monkeypatch):
    async def trickle():
        for char in '{"response": "slow"}':
            await asyncio.sleep(0.1)
            yield char.encode()

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=trickle())

    def slow_client(base_url: str, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=httpx.MockTransport(handler),
        )

    monkeypatch.setattr(client_module, "create_client", slow_client)

    with pytest.raises(GenerationTimeoutError):
        asyncio.run(generate_text("Hi", base_url="http://gateway.test", timeout=0.3))


def test_generate_text_connection_failure_is_transport_error(gateway):
    gateway["reply"] = httpx.ConnectError("refused")

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(generate_text("Hello", base_url="http://gateway.test"))

    assert exc_info.value.status_code == 500
    assert exc_info.value.details == "refused"


def test_generate_text_surfaces_gateway_error_body(gateway):
    gateway["reply"] = httpx.Response(
        500,
        json={"error": "Google API key not configured", "details": "Set GOOGLE_GENAI_API_KEY"},
    )

    with pytest.raises(TransportError) as exc_info:
        asyncio.run(
            generate_text(
                GenerateOptions(provider="cloud", prompt="Hi"),
                base_url="http://gateway.test",
            )
        )

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Google API key not configured"
    assert exc_info.value.details == "Set GOOGLE_GENAI_API_KEY"


def test_generate_object_appends_schema_and_requests_json(gateway):
    gateway["reply"] = httpx.Response(200, json={"response": '{"score": 0.8, "reason": "fit"}'})
    schema = {"type": "object", "properties": {"score": {"type": "number"}}}

    result = asyncio.run(
        generate_object("Score this lead", schema, base_url="http://gateway.test")
    )

    assert result == {"score": 0.8, "reason": "fit"}
    sent = gateway["requests"][0]["json"]
    assert sent["format"] == "json"
    assert sent["prompt"] == (
        "Score this lead\n\nPlease respond with a JSON object matching this schema: "
        + json.dumps(schema)
    )


def test_generate_object_keeps_caller_options(gateway):
    gateway["reply"] = httpx.Response(200, json={"response": "{}"})

    asyncio.run(
        generate_object(
            "Plan a campaign",
            {"type": "object"},
            options=GenerateOptions(agent_id="seo-strategist"),
            base_url="http://gateway.test",
        )
    )

    sent = gateway["requests"][0]["json"]
    assert sent["provider"] == "cloud"
    assert sent["prompt"].startswith("Plan a campaign\n\n")


def test_generate_object_non_json_raises_format_error_with_raw_text(gateway):
    gateway["reply"] = httpx.Response(200, json={"response": "Sure! Here is your object."})

    with pytest.raises(FormatError) as exc_info:
        asyncio.run(generate_object("Hi", {"type": "object"}, base_url="http://gateway.test"))

    assert exc_info.value.raw_text == "Sure! Here is your object."
    assert exc_info.value.details == "Sure! Here is your object."


class LeadScore(BaseModel):
    score: float
    reason: str


def test_generate_object_validates_model_type(gateway):
    gateway["reply"] = httpx.Response(200, json={"response": '{"score": 0.4, "reason": "cold"}'})

    result = asyncio.run(
        generate_object(
            "Score",
            LeadScore.model_json_schema(),
            model_type=LeadScore,
            base_url="http://gateway.test",
        )
    )

    assert result == LeadScore(score=0.4, reason="cold")


def test_generate_object_model_mismatch_is_format_error(gateway):
    gateway["reply"] = httpx.Response(200, json={"response": '{"score": "high"}'})

    with pytest.raises(FormatError) as exc_info:
        asyncio.run(
            generate_object(
                "Score",
                LeadScore.model_json_schema(),
                model_type=LeadScore,
                base_url="http://gateway.test",
            )
        )

    assert exc_info.value.raw_text == '{"score": "high"}'


def test_parse_json_text_strips_code_fences():
    assert parse_json_text('```json\n{"ok": true}\n```') == {"ok": True}


def test_client_against_gateway_app(make_client, ollama, monkeypatch):
    app = make_client().app
    ollama["reply"] = httpx.Response(200, json={"response": "from local model"})

    def asgi_client(base_url: str, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url=base_url,
            timeout=timeout,
        )

    monkeypatch.setattr(client_module, "create_client", asgi_client)

    text = asyncio.run(
        generate_text(
            GenerateOptions(agent_id="fast-chat", prompt="Ping"),
            base_url="http://testserver",
        )
    )

    assert text == "from local model"
    sent = ollama["requests"][0]["json"]
    assert sent["model"] == "ministral-3:3b"
    assert sent["system"].startswith("You are a helpful assistant")
