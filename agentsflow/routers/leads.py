from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db import get_db
from agentsflow.schemas.lead import DeleteResult, LeadCreate, LeadResponse, LeadUpdate
from agentsflow.services import (
    create_lead, delete_lead, get_lead_or_404, list_leads, update_lead,
)

router = APIRouter(prefix="/api/leads", tags=["Leads"])


@router.get("", response_model=list[LeadResponse])
async def list_leads_endpoint(
    status: str | None = None,
    source: str | None = None,
    limit: int = Query(50, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """Newest leads first, optionally filtered by status and source."""
    return await list_leads(db, status=status, source=source, limit=limit)


@router.post("", response_model=LeadResponse, status_code=201)
async def create_lead_endpoint(data: LeadCreate, db: AsyncSession = Depends(get_db)):
    return await create_lead(db, data)


@router.get("/{lead_id}", response_model=LeadResponse)
async def get_lead_endpoint(lead_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    return await get_lead_or_404(db, lead_id)


@router.patch("/{lead_id}", response_model=LeadResponse)
async def update_lead_endpoint(
    lead_id: uuid.UUID,
    data: LeadUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Partial update. Setting status to 'qualified' records qualified_at."""
    lead = await get_lead_or_404(db, lead_id)
    return await update_lead(db, lead, data)


@router.delete("/{lead_id}", response_model=DeleteResult)
async def delete_lead_endpoint(lead_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    lead = await get_lead_or_404(db, lead_id)
    await delete_lead(db, lead)
    return DeleteResult(message="Lead deleted successfully")
