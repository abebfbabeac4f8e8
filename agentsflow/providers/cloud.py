from __future__ import annotations

import logging
from typing import Any, Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from agentsflow.config import Settings
from agentsflow.core.errors import ConfigurationError, TransportError
from agentsflow.core.types import (
    ChatMessage,
    ChatTurn,
    GenerationRequest,
    GenerationResponse,
    Provider,
)

from .base import BaseAdapter

logger = logging.getLogger(__name__)


def build_chat_history(messages: Sequence[ChatMessage]) -> tuple[ChatTurn, ...]:
    """Replayable history: every turn but the last, in Gemini's role vocabulary."""
    return tuple(
        ChatTurn(
            role="model" if message.role == "assistant" else "user",
            content=message.content,
        )
        for message in messages[:-1]
    )


def build_single_prompt(request: GenerationRequest) -> str:
    prompt = request.prompt or ""
    if request.system:
        return f"{request.system}\n\n{prompt}"
    return prompt


class CloudAdapter(BaseAdapter):
    """Google Gemini, driven through its chat-session API."""

    provider = Provider.CLOUD

    def __init__(self, settings: Settings) -> None:
        if not settings.GOOGLE_GENAI_API_KEY:
            raise ConfigurationError(
                message="Google API key not configured",
                details="Set GOOGLE_GENAI_API_KEY to use the cloud provider.",
            )
        genai.configure(api_key=settings.GOOGLE_GENAI_API_KEY)

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        try:
            if request.is_chat:
                text = await self._chat(request)
            else:
                text = await self._complete(request)
        except google_exceptions.GoogleAPICallError as exc:
            logger.error("Gemini call failed for model %s: %s", request.model, exc)
            raise TransportError(
                status_code=exc.code or 500,
                message="Gemini generation failed",
                details=exc.message,
            ) from exc
        except (google_exceptions.GoogleAPIError, ValueError) as exc:
            logger.error("Gemini call failed for model %s: %s", request.model, exc)
            raise TransportError(
                status_code=500,
                message="Gemini generation failed",
                details=str(exc),
            ) from exc

        return GenerationResponse(text=text)

    async def _chat(self, request: GenerationRequest) -> str:
        messages = request.messages or ()
        model = genai.GenerativeModel(
            request.model,
            system_instruction=request.system or None,
            generation_config=_generation_config(request),
        )
        session = model.start_chat(
            history=[turn.to_content() for turn in build_chat_history(messages)]
        )
        result = await session.send_message_async(messages[-1].content)
        return result.text

    async def _complete(self, request: GenerationRequest) -> str:
        model = genai.GenerativeModel(
            request.model,
            generation_config=_generation_config(request),
        )
        result = await model.generate_content_async(build_single_prompt(request))
        return result.text


def _generation_config(request: GenerationRequest) -> dict[str, Any] | None:
    if request.format is None:
        return None
    return {"response_mime_type": "application/json"}
