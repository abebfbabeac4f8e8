from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ConversationCreate(BaseModel):
    lead_id: uuid.UUID | None = None
    channel: str = "chat"


class ConversationResponse(BaseModel):
    id: uuid.UUID
    lead_id: uuid.UUID | None
    channel: str
    status: str
    started_at: datetime

    model_config = {"from_attributes": True}


class MessageCreate(BaseModel):
    role: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    metadata: dict[str, Any] | None = None


class MessageResponse(BaseModel):
    id: uuid.UUID
    conversation_id: uuid.UUID
    role: str
    content: str
    # the ORM attribute is metadata_ because declarative models reserve "metadata"
    metadata: dict[str, Any] = Field(default_factory=dict, validation_alias="metadata_")
    created_at: datetime

    model_config = {"from_attributes": True}
