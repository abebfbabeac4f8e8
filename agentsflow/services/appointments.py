from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db.models import Appointment
from agentsflow.schemas.appointment import AppointmentCreate
from agentsflow.services.leads import get_lead_or_404

logger = logging.getLogger(__name__)

APPOINTMENT_LIST_LIMIT = 50


async def list_appointments(
    db: AsyncSession,
    lead_id: uuid.UUID | None = None,
    status: str | None = None,
    upcoming: bool = False,
) -> list[Appointment]:
    query = select(Appointment)
    if lead_id:
        query = query.where(Appointment.lead_id == lead_id)
    if status:
        query = query.where(Appointment.status == status)
    if upcoming:
        query = query.where(Appointment.scheduled_at > datetime.now(timezone.utc))
    query = query.order_by(Appointment.scheduled_at.asc()).limit(APPOINTMENT_LIST_LIMIT)

    result = await db.execute(query)
    return list(result.scalars().all())


async def create_appointment(db: AsyncSession, data: AppointmentCreate) -> Appointment:
    await get_lead_or_404(db, data.lead_id)

    appointment = Appointment(**data.model_dump())
    db.add(appointment)
    await db.commit()
    await db.refresh(appointment)
    logger.info("Scheduled appointment %s for lead %s", appointment.id, appointment.lead_id)
    return appointment
