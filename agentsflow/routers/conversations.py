from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db import get_db
from agentsflow.schemas.conversation import (
    ConversationCreate, ConversationResponse, MessageCreate, MessageResponse,
)
from agentsflow.services import (
    create_conversation, create_message, get_conversation_or_404,
    list_conversations, list_messages,
)

router = APIRouter(prefix="/api/conversations", tags=["Conversations"])


@router.get("", response_model=list[ConversationResponse])
async def list_conversations_endpoint(
    lead_id: uuid.UUID | None = Query(None, alias="leadId"),
    status: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    return await list_conversations(db, lead_id=lead_id, status=status)


@router.post("", response_model=ConversationResponse, status_code=201)
async def create_conversation_endpoint(
    data: ConversationCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_conversation(db, data)


@router.get("/{conversation_id}/messages", response_model=list[MessageResponse])
async def list_messages_endpoint(
    conversation_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Messages of one conversation, oldest first."""
    return await list_messages(db, conversation_id)


@router.post("/{conversation_id}/messages", response_model=MessageResponse, status_code=201)
async def create_message_endpoint(
    conversation_id: uuid.UUID,
    data: MessageCreate,
    db: AsyncSession = Depends(get_db),
):
    conversation = await get_conversation_or_404(db, conversation_id)
    return await create_message(db, conversation, data)
