from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class LeadCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    company: str | None = None
    phone: str | None = None
    source: str = "website"
    budget: str | None = None
    timeline: str | None = None
    notes: str | None = None


class LeadUpdate(BaseModel):
    name: str | None = Field(None, min_length=1)
    email: str | None = Field(None, min_length=1)
    company: str | None = None
    phone: str | None = None
    status: str | None = None
    score: int | None = None
    budget: str | None = None
    timeline: str | None = None
    notes: str | None = None
    interests: list[str] | None = None

    @field_validator("name", "email")
    @classmethod
    def reject_null(cls, value: str | None) -> str:
        # Omitted is fine; an explicit null would clear a required column.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class LeadResponse(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    company: str | None
    phone: str | None
    source: str
    status: str
    score: int | None
    budget: str | None
    timeline: str | None
    notes: str | None
    interests: list[str] | None
    qualified_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeleteResult(BaseModel):
    message: str
