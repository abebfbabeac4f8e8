from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db import get_db
from agentsflow.schemas.service import ServiceCreate, ServiceResponse
from agentsflow.services import create_service, list_active_services

router = APIRouter(prefix="/api/services", tags=["Services"])


@router.get("", response_model=list[ServiceResponse])
async def list_services_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_active_services(db)


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service_endpoint(data: ServiceCreate, db: AsyncSession = Depends(get_db)):
    return await create_service(db, data)
