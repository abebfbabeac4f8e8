from __future__ import annotations

from fastapi import APIRouter, Depends

from agentsflow.agents import AI_AGENTS
from agentsflow.config import Settings, get_settings
from agentsflow.core.errors import InvalidRequestError, TransportError
from agentsflow.core.generation import build_generation_request, generate
from agentsflow.core.types import ChatMessage, GenerationRequest, Provider
from agentsflow.providers.local import LocalAdapter
from agentsflow.schemas.ai import (
    AgentPresetOut,
    GenerateRequestBody,
    GenerateResponseBody,
    OllamaActionBody,
)

router = APIRouter(prefix="/api/ai", tags=["ai"])

OLLAMA_ACTIONS = {"generate", "chat", "models", "pull"}


@router.post("/generate", response_model=GenerateResponseBody)
async def generate_endpoint(
    payload: GenerateRequestBody,
    settings: Settings = Depends(get_settings),
) -> GenerateResponseBody:
    request = build_generation_request(payload, settings)
    response = await generate(request, settings)
    return GenerateResponseBody(response=response.text)


@router.get("/agents", response_model=list[AgentPresetOut])
async def list_agents() -> list[AgentPresetOut]:
    return [
        AgentPresetOut(
            id=agent.id,
            name=agent.name,
            description=agent.description,
            provider=agent.provider.value,
            model=agent.model,
            system_prompt=agent.system_prompt,
        )
        for agent in AI_AGENTS
    ]


@router.post("/ollama")
async def ollama_action(
    payload: OllamaActionBody,
    settings: Settings = Depends(get_settings),
) -> dict:
    if payload.action not in OLLAMA_ACTIONS:
        raise InvalidRequestError(message="Invalid action")

    adapter = LocalAdapter(settings)

    if payload.action == "models":
        return await adapter.list_models()

    if payload.action == "pull":
        if not payload.name:
            raise InvalidRequestError(message="name is required to pull a model")
        return await adapter.pull(payload.name)

    return await adapter.send(_ollama_request(payload, settings))


@router.get("/ollama")
async def ollama_status(settings: Settings = Depends(get_settings)) -> dict:
    adapter = LocalAdapter(settings)
    try:
        data = await adapter.list_models()
    except TransportError as exc:
        return {
            "status": "disconnected",
            "ollamaUrl": adapter.base_url,
            "error": exc.details or exc.message,
        }

    return {
        "status": "connected",
        "ollamaUrl": adapter.base_url,
        "models": data.get("models", []) if isinstance(data, dict) else [],
    }


def _ollama_request(payload: OllamaActionBody, settings: Settings) -> GenerationRequest:
    model = payload.model or settings.DEFAULT_LOCAL_MODEL

    if payload.action == "chat":
        if not payload.messages:
            raise InvalidRequestError(message="messages are required for the chat action")
        return GenerationRequest(
            provider=Provider.LOCAL,
            model=model,
            messages=tuple(
                ChatMessage(role=message.role, content=message.content)
                for message in payload.messages
            ),
            options=dict(payload.options or {}),
        )

    if payload.prompt is None:
        raise InvalidRequestError(message="prompt is required for the generate action")
    return GenerationRequest(
        provider=Provider.LOCAL,
        model=model,
        prompt=payload.prompt,
        system=payload.system,
        options=dict(payload.options or {}),
    )
