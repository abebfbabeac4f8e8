from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.core.errors import NotFoundError
from agentsflow.db.models import Conversation, Message
from agentsflow.schemas.conversation import ConversationCreate, MessageCreate

logger = logging.getLogger(__name__)

CONVERSATION_LIST_LIMIT = 50


async def list_conversations(
    db: AsyncSession,
    lead_id: uuid.UUID | None = None,
    status: str | None = None,
) -> list[Conversation]:
    query = select(Conversation)
    if lead_id:
        query = query.where(Conversation.lead_id == lead_id)
    if status:
        query = query.where(Conversation.status == status)
    query = query.order_by(Conversation.started_at.desc()).limit(CONVERSATION_LIST_LIMIT)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_conversation(db: AsyncSession, data: ConversationCreate) -> Conversation:
    conversation = Conversation(lead_id=data.lead_id, channel=data.channel)
    db.add(conversation)
    await db.commit()
    await db.refresh(conversation)
    logger.info("Started %s conversation %s", conversation.channel, conversation.id)
    return conversation


async def get_conversation_or_404(db: AsyncSession, conversation_id: uuid.UUID) -> Conversation:
    result = await db.execute(select(Conversation).where(Conversation.id == conversation_id))
    conversation = result.scalar_one_or_none()
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return conversation


async def list_messages(db: AsyncSession, conversation_id: uuid.UUID) -> list[Message]:
    result = await db.execute(
        select(Message)
        .where(Message.conversation_id == conversation_id)
        .order_by(Message.created_at.asc())
    )
    return list(result.scalars().all())


async def create_message(
    db: AsyncSession, conversation: Conversation, data: MessageCreate
) -> Message:
    message = Message(
        conversation_id=conversation.id,
        role=data.role,
        content=data.content,
        metadata_=data.metadata or {},
    )
    db.add(message)
    await db.commit()
    await db.refresh(message)
    return message
