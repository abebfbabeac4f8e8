from __future__ import annotations

import asyncio
import json
from typing import Any, Callable

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import agentsflow.providers.cloud as cloud_provider
import agentsflow.providers.local as local_provider
from agentsflow.config import Settings, get_settings
from agentsflow.db import create_all, get_db
from agentsflow.main import create_app


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "OLLAMA_BASE_URL": "http://ollama.test",
        "GOOGLE_GENAI_API_KEY": None,
        "GATEWAY_URL": "http://gateway.test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'agentsflow.db'}",
        poolclass=NullPool,
    )

    async def _init() -> None:
        await create_all(engine)
        await engine.dispose()

    asyncio.run(_init())
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture()
def make_client(session_factory) -> Callable[..., TestClient]:
    def _make(**overrides: Any) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: make_settings(**overrides)

        async def _get_db():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = _get_db
        return TestClient(app)

    return _make


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture()
def ollama(monkeypatch):
    """Fake Ollama server; tests set ``reply`` to a Response or an exception."""

    captured: dict[str, Any] = {
        "requests": [],
        "reply": httpx.Response(200, json={"response": "pong"}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        captured["requests"].append(
            {"method": request.method, "url": str(request.url), "path": request.url.path, "json": body}
        )
        reply = captured["reply"]
        if isinstance(reply, Exception):
            raise reply
        return reply

    transport = httpx.MockTransport(handler)

    def fake_create_client(base_url: str, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    monkeypatch.setattr(local_provider, "create_client", fake_create_client)
    return captured


class FakeChatSession:
    def __init__(self, model: "FakeGenerativeModel", history: list[dict[str, Any]]) -> None:
        self.model = model
        self.history = history
        self.sent: list[str] = []

    async def send_message_async(self, content: str):
        self.sent.append(content)
        return self.model.genai.next_result()


class FakeGenerativeModel:
    def __init__(self, genai: "FakeGenAI", model_name: str, **kwargs: Any) -> None:
        self.genai = genai
        self.model_name = model_name
        self.kwargs = kwargs
        self.sessions: list[FakeChatSession] = []
        self.prompts: list[str] = []

    def start_chat(self, history: list[dict[str, Any]]):
        session = FakeChatSession(self, history)
        self.sessions.append(session)
        return session

    async def generate_content_async(self, prompt: str):
        self.prompts.append(prompt)
        return self.genai.next_result()


class FakeResult:
    def __init__(self, text: str) -> None:
        self.text = text


class FakeGenAI:
    def __init__(self) -> None:
        self.api_keys: list[str] = []
        self.models: list[FakeGenerativeModel] = []
        self.reply: str | Exception = "gemini says hi"

    def configure(self, api_key: str) -> None:
        self.api_keys.append(api_key)

    def GenerativeModel(self, model_name: str, **kwargs: Any) -> FakeGenerativeModel:
        model = FakeGenerativeModel(self, model_name, **kwargs)
        self.models.append(model)
        return model

    def next_result(self) -> FakeResult:
        if isinstance(self.reply, Exception):
            raise self.reply
        return FakeResult(self.reply)


@pytest.fixture()
def gemini(monkeypatch) -> FakeGenAI:
    fake = FakeGenAI()
    monkeypatch.setattr(cloud_provider, "genai", fake)
    return fake
