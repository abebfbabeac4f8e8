from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class ChatMessageIn(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class GenerateRequestBody(BaseModel):
    model: str | None = None
    prompt: str | None = None
    provider: str | None = None
    messages: list[ChatMessageIn] | None = None
    system: str | None = None
    options: dict[str, Any] | None = None
    format: str | dict[str, Any] | None = None

    model_config = ConfigDict(extra="allow")


class GenerateResponseBody(BaseModel):
    response: str


class OllamaActionBody(BaseModel):
    action: str
    model: str | None = None
    prompt: str | None = None
    system: str | None = None
    messages: list[ChatMessageIn] | None = None
    options: dict[str, Any] | None = None
    name: str | None = None

    model_config = ConfigDict(extra="allow")


class AgentPresetOut(BaseModel):
    id: str
    name: str
    description: str
    provider: str
    model: str
    system_prompt: str
