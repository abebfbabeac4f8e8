from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

DEFAULT_SAMPLING_OPTIONS: dict[str, float] = {
    "temperature": 0.7,
    "top_p": 0.9,
}

Role = Literal["user", "assistant", "system"]
ResponseFormat = str | dict[str, Any]


class Provider(str, Enum):
    LOCAL = "local"
    CLOUD = "cloud"


PROVIDER_ALIASES: dict[str, Provider] = {
    "local": Provider.LOCAL,
    "ollama": Provider.LOCAL,
    "cloud": Provider.CLOUD,
    "google": Provider.CLOUD,
    "gemini": Provider.CLOUD,
}


def resolve_provider(value: str | Provider | None) -> Provider:
    if isinstance(value, Provider):
        return value
    if not value:
        return Provider.LOCAL
    return PROVIDER_ALIASES.get(value.strip().lower(), Provider.LOCAL)


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True, slots=True)
class GenerationRequest:
    provider: Provider
    model: str
    prompt: str | None = None
    messages: tuple[ChatMessage, ...] | None = None
    system: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
    format: ResponseFormat | None = None

    @property
    def is_chat(self) -> bool:
        return bool(self.messages)


@dataclass(frozen=True, slots=True)
class GenerationResponse:
    text: str


@dataclass(frozen=True, slots=True)
class ChatTurn:
    role: Literal["user", "model"]
    content: str

    def to_content(self) -> dict[str, Any]:
        return {"role": self.role, "parts": [self.content]}
