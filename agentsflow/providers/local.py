from __future__ import annotations

import logging
from typing import Any

import httpx

from agentsflow.config import Settings
from agentsflow.core.errors import TransportError
from agentsflow.core.types import (
    DEFAULT_SAMPLING_OPTIONS,
    ChatMessage,
    GenerationRequest,
    GenerationResponse,
    Provider,
)

from .base import BaseAdapter

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"
CHAT_PATH = "/api/chat"
TAGS_PATH = "/api/tags"
PULL_PATH = "/api/pull"


def create_client(base_url: str, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def sampling_options(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    return {**DEFAULT_SAMPLING_OPTIONS, **(overrides or {})}


class LocalAdapter(BaseAdapter):
    """Ollama-compatible inference server reached over plain HTTP."""

    provider = Provider.LOCAL

    def __init__(self, settings: Settings) -> None:
        self.base_url = settings.OLLAMA_BASE_URL.rstrip("/")
        self.timeout = settings.OLLAMA_TIMEOUT_SECONDS

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        data = await self.send(request)

        if request.is_chat:
            text = (data.get("message") or {}).get("content")
        else:
            text = data.get("response")

        if not isinstance(text, str):
            raise TransportError(
                status_code=500,
                message="Local model server returned an unexpected payload.",
                details=str(data),
            )

        return GenerationResponse(text=text)

    async def send(self, request: GenerationRequest) -> dict[str, Any]:
        path, payload = build_payload(request)
        failure = "Ollama chat failed" if request.is_chat else "Ollama generation failed"
        return await self._request("POST", path, failure, json=payload)

    async def list_models(self) -> dict[str, Any]:
        return await self._request("GET", TAGS_PATH, "Failed to list models")

    async def pull(self, name: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            PULL_PATH,
            "Failed to pull model",
            json={"name": name, "stream": False},
        )

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            async with create_client(self.base_url, self.timeout) as client:
                response = await client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.error("Local model server request %s %s failed: %s", method, path, exc)
            raise TransportError(
                status_code=500,
                message=f"{failure_message}: could not reach {self.base_url}",
                details=str(exc) or exc.__class__.__name__,
            ) from exc

        if response.is_error:
            logger.warning(
                "Local model server answered %s %s with %s",
                method,
                path,
                response.status_code,
            )
            raise TransportError(
                status_code=response.status_code,
                message=failure_message,
                details=response.text,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Local model server answered %s %s with a non-JSON body", method, path)
            raise TransportError(
                status_code=502,
                message=failure_message,
                details=response.text,
            ) from exc


def build_payload(request: GenerationRequest) -> tuple[str, dict[str, Any]]:
    if request.is_chat:
        messages = list(request.messages or ())
        if request.system and messages[0].role != "system":
            messages.insert(0, ChatMessage(role="system", content=request.system))

        payload: dict[str, Any] = {
            "model": request.model,
            "messages": [message.to_payload() for message in messages],
            "stream": False,
            "options": sampling_options(request.options),
        }
        path = CHAT_PATH
    else:
        payload = {
            "model": request.model,
            "prompt": request.prompt,
            "stream": False,
            "options": sampling_options(request.options),
        }
        if request.system:
            payload["system"] = request.system
        path = GENERATE_PATH

    if request.format is not None:
        payload["format"] = request.format

    return path, payload
