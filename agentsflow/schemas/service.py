from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1)
    tier: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    description: str | None = None
    features: list[str] = Field(default_factory=list)
    is_active: bool = True


class ServiceResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: str | None
    tier: str
    price: float
    features: list[str]
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
