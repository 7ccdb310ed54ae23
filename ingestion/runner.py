"""
Fetch Runner - executes one adapter cycle and records its outcome.

Each cycle:
- Opens its own database session
- Records a FetchRun row (running -> success/failed)
- Broadcasts an update event when something changed
- Logs failures instead of raising them to the scheduler
"""

from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import httpx
import logging

from ingestion.base import DataSource
from ingestion.extractors.congress_extractor import CongressExtractor
from ingestion.extractors.form4_extractor import Form4Extractor
from ingestion.extractors.holdings_extractor import HoldingsExtractor
from ingestion.notifier import ChangeNotifier
from ingestion.sample_data import CongressSample
from models.base import SourceType, FetchStatus
from models.fetch_run import FetchRun
from core.exceptions import DisclosureError

logger = logging.getLogger(__name__)

HOLDINGS_UPDATED_MESSAGE = "13F holdings updated"


class FetchRunner:
    """
    Orchestrates fetch cycles for every source.

    Responsibilities:
    - Session lifecycle per cycle
    - FetchRun bookkeeping
    - Change notification
    """

    def __init__(
        self,
        session_maker: async_sessionmaker,
        notifier: ChangeNotifier,
        congress_sample: CongressSample,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        self.session_maker = session_maker
        self.notifier = notifier
        self.congress_sample = congress_sample
        self.http_client = http_client

    # ------------------------------------------------------------------
    # Source cycles
    # ------------------------------------------------------------------

    async def run_insider(self) -> List:
        """Fetch the Form 4 feed; returns the new insider trades"""
        return await self.run(
            lambda session: Form4Extractor(session, http_client=self.http_client)
        )

    async def run_congress(self) -> List:
        """Load the congressional sample; returns the new trades"""
        return await self.run(
            lambda session: CongressExtractor(session, sample=self.congress_sample)
        )

    async def run_holdings(self) -> List:
        """Fetch 13F filings; returns the holdings written"""
        return await self.run(
            lambda session: HoldingsExtractor(session, http_client=self.http_client),
            announce_always=True
        )

    async def run_initial(self) -> None:
        """First fetch after startup: insider, then congress"""
        await self.run_insider()
        await self.run_congress()

    # ------------------------------------------------------------------
    # Core cycle
    # ------------------------------------------------------------------

    async def run(
        self,
        source_factory: Callable[[AsyncSession], DataSource],
        announce_always: bool = False
    ) -> List:
        """
        Run one fetch cycle.

        Args:
            source_factory: Builds the adapter bound to the cycle's session
            announce_always: Broadcast a generic message even with no new records

        Returns:
            New records (empty on failure)
        """
        async with self.session_maker() as session:
            source = source_factory(session)
            source_type = source.source_type

            fetch_run = await self._start_run(session, source_type)
            logger.info(f"Starting {source_type.value} fetch (run {fetch_run.run_id})")

            try:
                new_records = await source.fetch()

            except DisclosureError as e:
                await session.rollback()
                logger.error(f"{source_type.value} fetch failed: {e}")
                await self._complete_run(
                    session, fetch_run, FetchStatus.FAILED,
                    records_fetched=source.records_fetched,
                    error_message=e.message
                )
                return []

            except Exception as e:
                await session.rollback()
                logger.exception(f"Unexpected error during {source_type.value} fetch: {e}")
                await self._complete_run(
                    session, fetch_run, FetchStatus.FAILED,
                    records_fetched=source.records_fetched,
                    error_message=str(e)
                )
                return []

            await self._complete_run(
                session, fetch_run, FetchStatus.SUCCESS,
                records_fetched=source.records_fetched,
                records_new=len(new_records)
            )

        await self._announce(source_type, new_records, announce_always)
        return new_records

    async def _announce(self, source_type: SourceType, new_records: List, announce_always: bool) -> None:
        if announce_always:
            await self.notifier.broadcast(source_type, {"message": HOLDINGS_UPDATED_MESSAGE})
        elif new_records:
            await self.notifier.broadcast(source_type, new_records)

    @staticmethod
    async def _start_run(session: AsyncSession, source_type: SourceType) -> FetchRun:
        fetch_run = FetchRun(
            source_type=source_type,
            status=FetchStatus.RUNNING,
            started_at=datetime.utcnow()
        )
        session.add(fetch_run)
        await session.commit()
        await session.refresh(fetch_run)
        return fetch_run

    @staticmethod
    async def _complete_run(
        session: AsyncSession,
        fetch_run: FetchRun,
        status: FetchStatus,
        records_fetched: int = 0,
        records_new: int = 0,
        error_message: Optional[str] = None
    ) -> None:
        # A rollback in the failure path expires the row
        await session.refresh(fetch_run)
        fetch_run.status = status
        fetch_run.completed_at = datetime.utcnow()
        fetch_run.duration_seconds = (fetch_run.completed_at - fetch_run.started_at).total_seconds()
        fetch_run.records_fetched = records_fetched
        fetch_run.records_new = records_new
        fetch_run.error_message = error_message
        session.add(fetch_run)
        await session.commit()

        logger.info(
            f"{fetch_run.source_type.value} fetch {status.value}: "
            f"{records_fetched} fetched, {records_new} new"
        )
