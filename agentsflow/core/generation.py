from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from agentsflow.config import Settings
from agentsflow.providers import create_adapter

from .errors import GatewayError, InvalidRequestError
from .types import (
    ChatMessage,
    GenerationRequest,
    GenerationResponse,
    Provider,
    resolve_provider,
)

if TYPE_CHECKING:
    from agentsflow.schemas.ai import GenerateRequestBody

logger = logging.getLogger(__name__)


def build_generation_request(
    body: "GenerateRequestBody",
    settings: Settings,
) -> GenerationRequest:
    provider = resolve_provider(body.provider)
    messages = tuple(
        ChatMessage(role=message.role, content=message.content)
        for message in body.messages or ()
    )

    if not messages and body.prompt is None:
        raise InvalidRequestError(
            message="Either prompt or messages must be provided.",
        )

    if body.model:
        model = body.model
    elif provider is Provider.CLOUD:
        model = settings.DEFAULT_CLOUD_MODEL
    else:
        model = settings.DEFAULT_LOCAL_MODEL

    return GenerationRequest(
        provider=provider,
        model=model,
        prompt=body.prompt,
        messages=messages or None,
        system=body.system or None,
        options=dict(body.options or {}),
        format=body.format,
    )


async def generate(request: GenerationRequest, settings: Settings) -> GenerationResponse:
    """Route one request to its backend and return the normalized text.

    Every failure leaves this function as a GatewayError; anything the adapters
    did not anticipate is wrapped as a 500 carrying the original message.
    """
    logger.info(
        "Generating with provider=%s model=%s mode=%s",
        request.provider.value,
        request.model,
        "chat" if request.is_chat else "prompt",
    )

    try:
        adapter = create_adapter(request.provider, settings)
        return await adapter.generate(request)
    except GatewayError as exc:
        logger.warning(
            "Generation failed for provider=%s: %s (%s)",
            request.provider.value,
            exc.message,
            exc.status_code,
        )
        raise
    except Exception as exc:
        logger.exception("Unexpected generation failure for provider=%s", request.provider.value)
        raise GatewayError(
            status_code=500,
            message="AI generation failed",
            details=str(exc),
        ) from exc
