"""Seed the service catalogue: ``agentsflow-seed``."""

from __future__ import annotations

import asyncio
import logging

from agentsflow.db import create_all, get_engine, get_session_factory
from agentsflow.services import seed_services

logger = logging.getLogger(__name__)


async def run_seed() -> int:
    await create_all(get_engine())
    async with get_session_factory()() as session:
        created = await seed_services(session)
    for service in created:
        logger.info("Created service: %s", service.name)
    return len(created)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    logger.info("Seeding services...")
    count = asyncio.run(run_seed())
    logger.info("Seeding finished, %d new services", count)


if __name__ == "__main__":
    main()
