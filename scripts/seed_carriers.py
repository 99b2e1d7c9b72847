#!/usr/bin/env python3
"""
Seed the carrier store with the reference carriers.

Usage:
    python scripts/seed_carriers.py [--create-tables]

Reads POSTGRES_URL from the environment or .env, removes every stored
carrier and inserts the reference set.
"""

import argparse
import asyncio
import sys

import structlog

from app.core.config import get_settings
from app.database.sqlmodel_engine import SQLModelDatabaseManager
from app.infrastructure.persistence.repositories.carrier_repository import (
    PostgresCarrierRepository,
)
from app.infrastructure.persistence.seed_data import seed_carriers

logger = structlog.get_logger("seed_carriers")


async def run(create_tables: bool) -> int:
    db_manager = SQLModelDatabaseManager(get_settings())
    try:
        if create_tables:
            await db_manager.initialize()
            await db_manager.create_tables()
        return await seed_carriers(PostgresCarrierRepository(db_manager))
    finally:
        await db_manager.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the LaneList carrier store")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="create the schema before seeding (development only, prefer alembic upgrade)",
    )
    args = parser.parse_args()

    try:
        count = asyncio.run(run(args.create_tables))
    except Exception as e:
        logger.error("Seed error", error=str(e))
        return 1

    logger.info("Seed completed", carriers=count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
