"""
Create the database schema and register the tracked institutions
"""

import argparse
import asyncio
import logging
import sys
import os

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import engine, async_session_maker, init_db
from core.logging import setup_logging
from ingestion.loaders.sqlite_loader import SQLiteLoader
from ingestion.seed import seed_sample_holdings

logger = logging.getLogger(__name__)


async def init_database(seed: bool = False):
    logger.info("Creating tables...")
    await init_db()
    logger.info("Tables created successfully.")

    if seed:
        async with async_session_maker() as session:
            seeded = await seed_sample_holdings(SQLiteLoader(session))
        logger.info(f"Seeded {seeded} demo holdings")

    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the disclosure database")
    parser.add_argument("--seed", action="store_true", help="Also load the demo 13F portfolios")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(init_database(seed=args.seed))
