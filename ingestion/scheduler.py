import logging
import random
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.ext.asyncio import async_sessionmaker
from core.config import settings
from core.database import async_session_maker
from ingestion.notifier import ChangeNotifier, notifier as default_notifier
from ingestion.runner import FetchRunner
from ingestion.sample_data import (
    CongressSample,
    DEFAULT_CONGRESS_CONFIG,
    generate_congress_sample,
)

logger = logging.getLogger(__name__)


def build_congress_sample() -> CongressSample:
    """Generate this process's congressional sample from settings"""
    config = replace(DEFAULT_CONGRESS_CONFIG, sample_size=settings.CONGRESS_SAMPLE_SIZE)
    return generate_congress_sample(config, rng=random.Random(settings.CONGRESS_SAMPLE_SEED))


class IngestionScheduler:
    """
    Periodic fetch schedule:
    - Form 4 feed every INSIDER_FETCH_INTERVAL_MINUTES
    - Congressional sample every CONGRESS_FETCH_INTERVAL_MINUTES
    - 13F filings daily at HOLDINGS_FETCH_HOUR
    - One initial insider + congress fetch shortly after start
    """

    def __init__(
        self,
        session_maker: async_sessionmaker = async_session_maker,
        notifier: ChangeNotifier = default_notifier,
        congress_sample: Optional[CongressSample] = None
    ):
        self.scheduler = AsyncIOScheduler()
        self.runner = FetchRunner(
            session_maker=session_maker,
            notifier=notifier,
            congress_sample=congress_sample if congress_sample is not None else build_congress_sample(),
        )

    def add_jobs(self, now: Optional[datetime] = None):
        """Register all fetch jobs"""
        now = now or datetime.now()

        self.scheduler.add_job(
            self.runner.run_insider,
            trigger=IntervalTrigger(minutes=settings.INSIDER_FETCH_INTERVAL_MINUTES),
            id="insider_fetch",
            replace_existing=True
        )
        self.scheduler.add_job(
            self.runner.run_congress,
            trigger=IntervalTrigger(minutes=settings.CONGRESS_FETCH_INTERVAL_MINUTES),
            id="congress_fetch",
            replace_existing=True
        )
        self.scheduler.add_job(
            self.runner.run_holdings,
            trigger=CronTrigger(hour=settings.HOLDINGS_FETCH_HOUR, minute=0),
            id="holdings_fetch",
            replace_existing=True
        )
        self.scheduler.add_job(
            self.runner.run_initial,
            trigger=DateTrigger(run_date=now + timedelta(seconds=settings.INITIAL_FETCH_DELAY_SECONDS)),
            id="initial_fetch",
            replace_existing=True
        )

    def start(self):
        """Start the scheduler"""
        self.add_jobs()
        self.scheduler.start()
        logger.info("Ingestion scheduler started")

    def stop(self):
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
        logger.info("Ingestion scheduler stopped")
