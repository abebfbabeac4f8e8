from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    lead_id: uuid.UUID
    title: str = Field(..., min_length=1)
    scheduled_at: datetime
    description: str | None = None
    duration_minutes: int = Field(30, gt=0)
    meeting_link: str | None = None
    notes: str | None = None


class AppointmentResponse(BaseModel):
    id: uuid.UUID
    lead_id: uuid.UUID
    title: str
    description: str | None
    scheduled_at: datetime
    duration_minutes: int
    meeting_link: str | None
    notes: str | None
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}
