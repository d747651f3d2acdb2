"""
Seed script: creates the default work-time configuration row.

Usage:
    python -m workforce_analytics.db.seed
"""

import asyncio

from sqlalchemy import select

from workforce_analytics.core.config import settings
from workforce_analytics.db.models import WorkTimeConfig
from workforce_analytics.db.session import AsyncSessionLocal


async def create_work_time_config(session) -> WorkTimeConfig:
    result = await session.execute(select(WorkTimeConfig).limit(1))
    config = result.scalar_one_or_none()
    if config:
        print(f"Work-time config already exists: {config!r}, skipping.")
        return config

    config = WorkTimeConfig(
        check_in_hour=settings.CHECK_IN_HOUR,
        check_in_minute=settings.CHECK_IN_MINUTE,
        late_grace_period=settings.LATE_GRACE_MINUTES,
    )
    session.add(config)
    await session.flush()
    print(f"Created work-time config: {config!r}")
    return config


async def main():
    async with AsyncSessionLocal() as session:
        async with session.begin():
            await create_work_time_config(session)
            print("Seed complete.")


if __name__ == "__main__":
    asyncio.run(main())
