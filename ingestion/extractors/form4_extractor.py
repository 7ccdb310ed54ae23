"""
SEC Form 4 Extractor

Extracts insider transactions from the SEC "current filings" Atom feed.
"""

import asyncio
import feedparser
import httpx
from typing import List, Any, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from ingestion.base import DataSource
from ingestion.transformers.normalizer import DisclosureNormalizer
from models.base import SourceType
from schemas.normalized import InsiderTradeCreate
from core.config import settings
from core.exceptions import SourceUnavailableError, FeedParseError
import logging

logger = logging.getLogger(__name__)


class Form4Extractor(DataSource):
    """
    Extract Form 4 filings from the SEC Atom feed.

    Tickers and transaction details are guessed from the entry title and
    summary; entries without a usable ticker are dropped.
    """

    source_type = SourceType.INSIDER

    def __init__(
        self,
        db_session: AsyncSession,
        feed_url: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        normalizer: Optional[DisclosureNormalizer] = None
    ):
        super().__init__(db_session)
        self.feed_url = feed_url or settings.SEC_FORM4_FEED_URL
        self.http_client = http_client
        self.normalizer = normalizer or DisclosureNormalizer()

    async def _download(self, client: httpx.AsyncClient) -> str:
        try:
            response = await client.get(
                self.feed_url,
                headers={
                    "User-Agent": settings.SEC_USER_AGENT,
                    "Accept": "application/atom+xml",
                }
            )
        except httpx.HTTPError as e:
            raise SourceUnavailableError(
                "Form 4 feed request failed",
                context={"url": self.feed_url},
                original_exception=e
            )

        if not response.is_success:
            raise SourceUnavailableError(
                f"SEC feed returned {response.status_code}",
                context={"url": self.feed_url, "status_code": response.status_code}
            )
        return response.text

    async def fetch_raw(self) -> List[Any]:
        """
        Fetch and parse the feed.

        Returns:
            feedparser entries

        Raises:
            SourceUnavailableError: Network failure or non-2xx response
            FeedParseError: Body is not a readable feed
        """
        if self.http_client is not None:
            content = await self._download(self.http_client)
        else:
            async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
                content = await self._download(client)

        # Parse feed in thread pool
        feed = await asyncio.to_thread(feedparser.parse, content)

        # A partially malformed feed still yields its readable entries
        if feed.bozo and not feed.entries:
            raise FeedParseError(
                "Failed to parse Form 4 feed",
                context={"url": self.feed_url},
                original_exception=feed.get("bozo_exception")
            )

        return list(feed.entries)

    def build_record(self, raw: Any) -> InsiderTradeCreate:
        return self.normalizer.normalize_form4(raw)

    async def persist(self, record: InsiderTradeCreate) -> bool:
        return await self.loader.insert_insider_trade(record)
