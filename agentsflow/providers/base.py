from __future__ import annotations

from abc import ABC, abstractmethod

from agentsflow.core.types import GenerationRequest, GenerationResponse, Provider


class BaseAdapter(ABC):
    """A model backend that turns a GenerationRequest into plain text."""

    provider: Provider

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Run one generation against the backend.

        Implementations raise GatewayError subclasses only, so the gateway can
        hand the failure to the HTTP boundary unchanged.
        """
