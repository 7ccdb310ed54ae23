"""
Abstract base class for disclosure sources
"""

from abc import ABC, abstractmethod
from typing import List, Any, Optional
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from ingestion.loaders.sqlite_loader import SQLiteLoader
from models.base import SourceType
from core.exceptions import DatabaseError, RecordValidationError
import logging

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """
    Abstract base class for all disclosure sources.

    A fetch cycle is fetch_raw() -> normalize() -> persist() per record.

    Responsibilities:
    - Drop malformed records without failing the batch
    - Report only the records that were newly stored
    - Surface whole-source failures as SourceUnavailableError
    """

    source_type: SourceType

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.loader = SQLiteLoader(db_session)
        self.records_fetched = 0

    @abstractmethod
    async def fetch_raw(self) -> List[Any]:
        """
        Obtain raw records from the source.

        Raises:
            SourceUnavailableError: The source could not be reached
            FeedParseError: The fetched document could not be parsed
        """
        pass

    @abstractmethod
    def build_record(self, raw: Any) -> BaseModel:
        """
        Map one raw record to its validated schema.

        Raises:
            RecordValidationError or pydantic.ValidationError when malformed
        """
        pass

    @abstractmethod
    async def persist(self, record: BaseModel) -> bool:
        """Store a record; True only if it was newly created"""
        pass

    def normalize(self, raw: Any) -> Optional[BaseModel]:
        """Validated record, or None if the raw record is unusable"""
        try:
            return self.build_record(raw)
        except (RecordValidationError, ValidationError, ValueError, TypeError, KeyError, OverflowError) as e:
            logger.debug(f"Dropping malformed {self.source_type.value} record: {e}")
            return None

    async def fetch(self) -> List[BaseModel]:
        """
        Run one fetch cycle and commit the result.

        Returns:
            The records that did not exist before this cycle
        """
        new_records: List[BaseModel] = []

        raw_records = await self.fetch_raw()
        self.records_fetched = len(raw_records)

        for raw in raw_records:
            record = self.normalize(raw)
            if record is None:
                continue
            try:
                if await self.persist(record):
                    new_records.append(record)
            except DatabaseError as e:
                logger.warning(f"Skipping {self.source_type.value} record: {e.message}")

        await self.loader.commit()

        logger.info(
            f"Fetched {self.records_fetched} {self.source_type.value} records, "
            f"{len(new_records)} new"
        )
        return new_records
