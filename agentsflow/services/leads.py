"""
Lead service: storage rules for prospects captured by the marketing site.

  - name and email are mandatory on creation
  - moving a lead to "qualified" stamps qualified_at
  - every update bumps updated_at
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.core.errors import NotFoundError
from agentsflow.db.models import Lead
from agentsflow.schemas.lead import LeadCreate, LeadUpdate

logger = logging.getLogger(__name__)

QUALIFIED_STATUS = "qualified"
DEFAULT_LIST_LIMIT = 50


async def list_leads(
    db: AsyncSession,
    status: str | None = None,
    source: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[Lead]:
    query = select(Lead)
    if status:
        query = query.where(Lead.status == status)
    if source:
        query = query.where(Lead.source == source)
    query = query.order_by(Lead.created_at.desc()).limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_lead(db: AsyncSession, data: LeadCreate) -> Lead:
    lead = Lead(**data.model_dump())
    db.add(lead)
    await db.commit()
    await db.refresh(lead)
    logger.info("Created lead %s from source %s", lead.id, lead.source)
    return lead


async def get_lead(db: AsyncSession, lead_id: uuid.UUID) -> Lead | None:
    result = await db.execute(select(Lead).where(Lead.id == lead_id))
    return result.scalar_one_or_none()


async def get_lead_or_404(db: AsyncSession, lead_id: uuid.UUID) -> Lead:
    lead = await get_lead(db, lead_id)
    if lead is None:
        raise NotFoundError("Lead not found")
    return lead


async def update_lead(db: AsyncSession, lead: Lead, data: LeadUpdate) -> Lead:
    changes = data.model_dump(exclude_unset=True)
    now = datetime.now(timezone.utc)

    for field, value in changes.items():
        setattr(lead, field, value)

    if changes.get("status") == QUALIFIED_STATUS:
        lead.qualified_at = now
    lead.updated_at = now

    await db.commit()
    await db.refresh(lead)
    return lead


async def delete_lead(db: AsyncSession, lead: Lead) -> None:
    await db.delete(lead)
    await db.commit()
    logger.info("Deleted lead %s", lead.id)
