from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db import get_db
from agentsflow.schemas.appointment import AppointmentCreate, AppointmentResponse
from agentsflow.services import create_appointment, list_appointments

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments_endpoint(
    lead_id: uuid.UUID | None = Query(None, alias="leadId"),
    status: str | None = None,
    upcoming: bool = False,
    db: AsyncSession = Depends(get_db),
):
    """Soonest first. upcoming=true keeps only appointments still ahead."""
    return await list_appointments(db, lead_id=lead_id, status=status, upcoming=upcoming)


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment_endpoint(
    data: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_appointment(db, data)
