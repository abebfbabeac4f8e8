"""
Service catalogue: the packages offered to leads.

Only active services are listed, cheapest first. Seeding is idempotent and
keyed on the service name.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentsflow.db.models import Service
from agentsflow.schemas.service import ServiceCreate

logger = logging.getLogger(__name__)

DEFAULT_SERVICES: tuple[ServiceCreate, ...] = (
    ServiceCreate(
        name="Starter Package",
        description=(
            "Perfect for small businesses - includes social media setup, basic SEO audit, "
            "1 month support, email template"
        ),
        tier="basic",
        price=999,
        features=["Social Media Setup", "Basic SEO Audit", "1 Month Support", "Email Template"],
    ),
    ServiceCreate(
        name="Growth Package",
        description=(
            "For scaling businesses - includes full SEO optimization, PPC campaign management, "
            "content strategy, 3 months support, monthly reporting"
        ),
        tier="growth",
        price=2499,
        features=[
            "Full SEO Optimization",
            "PPC Management",
            "Content Strategy",
            "3 Months Support",
            "Monthly Reporting",
        ],
    ),
    ServiceCreate(
        name="Enterprise Package",
        description=(
            "Complete digital transformation - includes dedicated account manager, custom "
            "integrations, advanced analytics, 24/7 support, quarterly strategy reviews, "
            "multi-channel campaigns"
        ),
        tier="enterprise",
        price=4999,
        features=[
            "Dedicated Account Manager",
            "Custom Integrations",
            "Advanced Analytics",
            "24/7 Support",
            "Quarterly Strategy Reviews",
        ],
    ),
)


async def list_active_services(db: AsyncSession) -> list[Service]:
    result = await db.execute(
        select(Service).where(Service.is_active.is_(True)).order_by(Service.price.asc())
    )
    return list(result.scalars().all())


async def create_service(db: AsyncSession, data: ServiceCreate) -> Service:
    service = Service(**data.model_dump())
    db.add(service)
    await db.commit()
    await db.refresh(service)
    logger.info("Created service %s (%s)", service.name, service.tier)
    return service


async def seed_services(db: AsyncSession) -> list[Service]:
    """Insert every default service whose name is not stored yet; return the new rows."""
    created: list[Service] = []
    for data in DEFAULT_SERVICES:
        existing = await db.execute(select(Service.id).where(Service.name == data.name))
        if existing.scalar_one_or_none() is not None:
            continue
        created.append(await create_service(db, data))
    return created
