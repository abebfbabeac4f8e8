"""Application-side helpers for calling the generation gateway over HTTP.

``generate_text`` accepts either a bare prompt (the legacy call shape, always
answered by the fast local model) or a ``GenerateOptions`` value that may name
an agent preset. ``generate_object`` layers JSON parsing on top of it.
"""

from __future__ import annotations

import asyncio
import dataclasses
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from agentsflow.agents import get_agent
from agentsflow.config import get_settings
from agentsflow.core.errors import FormatError, GenerationTimeoutError, TransportError
from agentsflow.core.types import Provider, ResponseFormat

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/ai/generate"
CLIENT_TIMEOUT_SECONDS = 300.0
LEGACY_MODEL = "ministral-3:3b"
SCHEMA_INSTRUCTION = "Please respond with a JSON object matching this schema:"

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class PromptCall:
    prompt: str
    kind: Literal["prompt"] = "prompt"


@dataclass(frozen=True, slots=True)
class GenerateOptions:
    prompt: str | None = None
    agent_id: str | None = None
    model: str | None = None
    provider: str | None = None
    system: str | None = None
    messages: Sequence[Mapping[str, str]] | None = None
    format: ResponseFormat | None = None
    kind: Literal["options"] = "options"


GenerateCall = PromptCall | GenerateOptions


def create_client(base_url: str, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


def normalize_call(call: str | GenerateCall) -> dict[str, Any]:
    """Resolve either call shape into the gateway's JSON request body."""
    if isinstance(call, str):
        call = PromptCall(prompt=call)

    if call.kind == "prompt":
        return {
            "provider": Provider.LOCAL.value,
            "model": LEGACY_MODEL,
            "prompt": call.prompt,
        }

    payload: dict[str, Any] = {}
    if call.agent_id is not None:
        agent = get_agent(call.agent_id)
        payload.update(
            provider=agent.provider.value,
            model=agent.model,
            system=agent.system_prompt,
        )

    explicit = {
        "prompt": call.prompt,
        "model": call.model,
        "provider": call.provider,
        "system": call.system,
        "messages": [dict(message) for message in call.messages]
        if call.messages is not None
        else None,
        "format": call.format,
    }
    payload.update({key: value for key, value in explicit.items() if value is not None})
    return payload


async def generate_text(
    call: str | GenerateCall,
    *,
    base_url: str | None = None,
    timeout: float = CLIENT_TIMEOUT_SECONDS,
) -> str:
    payload = normalize_call(call)
    body = await _post_generate(payload, base_url or get_settings().GATEWAY_URL, timeout)
    return body["response"]


async def generate_object(
    prompt: str,
    json_schema: Mapping[str, Any],
    *,
    options: GenerateOptions | None = None,
    model_type: type[ModelT] | None = None,
    base_url: str | None = None,
    timeout: float = CLIENT_TIMEOUT_SECONDS,
) -> Any:
    full_prompt = f"{prompt}\n\n{SCHEMA_INSTRUCTION} {json.dumps(json_schema)}"
    base = options or GenerateOptions(provider=Provider.LOCAL.value, model=LEGACY_MODEL)
    call = dataclasses.replace(base, prompt=full_prompt, format="json")

    text = await generate_text(call, base_url=base_url, timeout=timeout)
    data = parse_json_text(text)

    if model_type is None:
        return data

    try:
        return model_type.model_validate(data)
    except ValidationError as exc:
        logger.error("AI response does not match %s: %s", model_type.__name__, text)
        raise FormatError(
            message=f"AI response does not match {model_type.__name__}: {exc.error_count()} errors",
            raw_text=text,
        ) from exc


def parse_json_text(text: str) -> Any:
    cleaned = re.sub(r"^```(?:json)?\s*", "", text.strip())
    cleaned = re.sub(r"\s*```$", "", cleaned)

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse AI response as JSON: %s", text)
        raise FormatError(message="Invalid AI response format", raw_text=text) from exc


async def _post_generate(
    payload: dict[str, Any],
    base_url: str,
    timeout: float,
) -> dict[str, Any]:
    try:
        async with asyncio.timeout(timeout):
            async with create_client(base_url, timeout) as client:
                response = await client.post(GENERATE_PATH, json=payload)
    except (httpx.TimeoutException, TimeoutError) as exc:
        logger.error("AI gateway call timed out after %ss", timeout)
        raise GenerationTimeoutError(
            message="AI response timed out. The model might be too slow or loading.",
            details=str(exc) or None,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("AI gateway call failed: %s", exc)
        raise TransportError(
            status_code=500,
            message=f"Could not reach AI gateway at {base_url}",
            details=str(exc) or exc.__class__.__name__,
        ) from exc

    if response.is_error:
        error = _error_body(response)
        raise TransportError(
            status_code=response.status_code,
            message=error.get("error") or "AI generation failed",
            details=error.get("details"),
        )

    return response.json()


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {"details": response.text}
    return body if isinstance(body, dict) else {"details": response.text}
