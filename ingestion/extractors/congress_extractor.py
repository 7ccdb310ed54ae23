"""
Congressional Trade Extractor

Serves STOCK Act disclosures from the in-process sample set.
"""

from typing import List, Mapping, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from ingestion.base import DataSource
from ingestion.sample_data import CongressSample
from ingestion.transformers.normalizer import DisclosureNormalizer
from models.base import SourceType
from schemas.normalized import CongressTradeCreate


class CongressExtractor(DataSource):
    """
    Load congressional trades from a pre-built sample.

    The sample is generated once per process and handed in, so every cycle
    re-offers the same trades and only the first one stores anything.
    """

    source_type = SourceType.CONGRESS

    def __init__(
        self,
        db_session: AsyncSession,
        sample: CongressSample,
        normalizer: Optional[DisclosureNormalizer] = None
    ):
        super().__init__(db_session)
        self.sample = sample
        self.normalizer = normalizer or DisclosureNormalizer()

    async def fetch_raw(self) -> List[Mapping[str, str]]:
        return list(self.sample)

    def build_record(self, raw: Mapping[str, str]) -> CongressTradeCreate:
        return self.normalizer.normalize_congress(raw)

    async def persist(self, record: CongressTradeCreate) -> bool:
        return await self.loader.insert_congress_trade(record)
