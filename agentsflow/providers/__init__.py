from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from agentsflow.config import Settings
from agentsflow.core.types import Provider

from .base import BaseAdapter
from .cloud import CloudAdapter
from .local import LocalAdapter

ADAPTERS: Mapping[Provider, type[BaseAdapter]] = MappingProxyType(
    {
        Provider.LOCAL: LocalAdapter,
        Provider.CLOUD: CloudAdapter,
    }
)


def create_adapter(provider: Provider, settings: Settings) -> BaseAdapter:
    return ADAPTERS[provider](settings)


__all__ = [
    "ADAPTERS",
    "BaseAdapter",
    "CloudAdapter",
    "LocalAdapter",
    "create_adapter",
]
