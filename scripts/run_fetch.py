"""
Run fetch cycles once, outside the scheduler
"""

import argparse
import asyncio
import sys
import os
import logging

# Add current directory to path to allow imports from core, models, etc.
sys.path.append(os.getcwd())

from core.database import engine, async_session_maker, init_db
from core.logging import setup_logging
from ingestion.notifier import ChangeNotifier
from ingestion.runner import FetchRunner
from ingestion.scheduler import build_congress_sample

logger = logging.getLogger(__name__)

SOURCES = ("insider", "congress", "13f")


async def run_fetch(sources):
    """Run the selected sources in order"""
    await init_db()

    runner = FetchRunner(
        session_maker=async_session_maker,
        notifier=ChangeNotifier(),
        congress_sample=build_congress_sample(),
    )
    cycles = {
        "insider": runner.run_insider,
        "congress": runner.run_congress,
        "13f": runner.run_holdings,
    }

    try:
        for source in sources:
            logger.info(f"Running fetch for source: {source}")
            records = await cycles[source]()
            logger.info(f"Fetch completed for {source}: {len(records)} new")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Fetch disclosure sources once")
    parser.add_argument(
        "sources",
        nargs="*",
        help=f"Sources to fetch, any of {', '.join(SOURCES)} (default: all)"
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run")
    args = parser.parse_args()

    unknown = [s for s in args.sources if s not in SOURCES]
    if unknown:
        parser.error(f"unknown source(s): {', '.join(unknown)}")

    setup_logging(args.log_level)
    asyncio.run(run_fetch(args.sources or list(SOURCES)))
