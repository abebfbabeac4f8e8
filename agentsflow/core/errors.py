from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class GatewayError(Exception):
    status_code: int
    message: str
    details: str | None = None

    def __str__(self) -> str:
        return self.message

    def to_error(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidRequestError(GatewayError):
    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(status_code=400, message=message, details=details)


class ConfigurationError(GatewayError):
    """A backend was requested whose credentials are not configured."""

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(status_code=500, message=message, details=details)


class TransportError(GatewayError):
    """The backend was unreachable or answered with a non-2xx status."""


class GenerationTimeoutError(GatewayError):
    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(status_code=504, message=message, details=details)


class FormatError(GatewayError):
    """Generated text could not be parsed as the requested structure."""

    def __init__(self, message: str, raw_text: str) -> None:
        super().__init__(status_code=502, message=message, details=raw_text)
        self.raw_text = raw_text


class UnknownAgentError(GatewayError):
    def __init__(self, agent_id: str) -> None:
        super().__init__(status_code=400, message=f"Unknown agent '{agent_id}'.")
        self.agent_id = agent_id


class NotFoundError(GatewayError):
    def __init__(self, message: str) -> None:
        super().__init__(status_code=404, message=message)
