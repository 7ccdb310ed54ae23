"""
Transform raw source records into validated disclosure schemas
"""

from typing import Any, Optional, Mapping
from datetime import date, datetime, timezone
import calendar
import re
from schemas.normalized import CongressTradeCreate, InsiderTradeCreate, HoldingCreate
from ingestion.transformers.heuristics import (
    ticker_from_company_name,
    parse_transaction_summary,
)
from core.exceptions import RecordValidationError
import logging

logger = logging.getLogger(__name__)

# "4 - Company Name (0001234567) (Filer Name)"
FORM4_TITLE_RE = re.compile(r"4\s*-\s*(.+?)\s*\((\d+)\)\s*\((.+?)\)")


class DisclosureNormalizer:
    """
    Normalize records from each source into their create schemas.

    Handles:
    - Field mapping per source format
    - Type conversion
    - Heuristic enrichment (tickers, transaction details)

    Every method raises RecordValidationError (or pydantic's ValidationError)
    for a record that cannot be used; callers drop such records.
    """

    def normalize_congress(self, record: Mapping[str, Any]) -> CongressTradeCreate:
        """Normalize a congressional disclosure (sample or scraped)"""
        return CongressTradeCreate(
            member=record.get("member"),
            chamber=record.get("chamber"),
            party=record.get("party"),
            state=record.get("state"),
            ticker=record.get("ticker"),
            asset_description=record.get("asset_description"),
            transaction_type=record.get("transaction_type"),
            amount_range=record.get("amount_range"),
            transaction_date=self._parse_date(record.get("transaction_date")),
            disclosure_date=self._parse_date(record.get("disclosure_date")),
        )

    def normalize_form4(self, entry: Mapping[str, Any]) -> InsiderTradeCreate:
        """
        Normalize a Form 4 Atom feed entry.

        Args:
            entry: feedparser entry (title, summary, updated, link)

        Returns:
            Validated InsiderTradeCreate
        """
        title = entry.get("title") or ""
        match = FORM4_TITLE_RE.match(title.strip())
        if not match:
            raise RecordValidationError(
                "Unrecognized Form 4 title",
                context={"title": title}
            )

        company_name = match.group(1).strip()
        insider_name = match.group(3).strip()

        ticker = ticker_from_company_name(company_name)
        if not ticker:
            raise RecordValidationError(
                "No ticker could be derived",
                context={"company_name": company_name}
            )

        filing_date = self._entry_timestamp(entry)
        if filing_date is None:
            raise RecordValidationError(
                "Entry has no updated timestamp",
                context={"title": title}
            )

        summary = parse_transaction_summary(entry.get("summary") or "")

        return InsiderTradeCreate(
            ticker=ticker,
            company_name=company_name,
            insider_name=insider_name,
            insider_title=summary.insider_title,
            transaction_type=summary.transaction_type,
            shares=summary.shares,
            price_per_share=summary.price_per_share,
            total_value=summary.total_value,
            transaction_date=summary.transaction_date or filing_date.date(),
            filing_date=filing_date,
            filing_url=entry.get("link") or "",
        )

    def normalize_holding(
        self,
        row: Mapping[str, Any],
        institution_id: int,
        quarter: str,
        filing_date: Optional[date],
        cusip_map: Mapping[str, str]
    ) -> HoldingCreate:
        """
        Normalize one 13F information table row.

        Reported values are in thousands of dollars and are scaled to dollars.
        """
        cusip = row.get("cusip") or row.get("CUSIP")
        if not cusip:
            raise RecordValidationError("13F row has no CUSIP", context={"row": dict(row)})
        cusip = str(cusip).strip().upper()

        shares = row.get("sshPrnamt") or row.get("SHARES")
        share_block = row.get("shrsOrPrnAmt")
        if shares is None and isinstance(share_block, Mapping):
            shares = share_block.get("sshPrnamt")

        raw_value = row.get("value") or row.get("VALUE")
        value = self._parse_int(raw_value)
        if raw_value not in (None, "") and value is None:
            raise RecordValidationError(
                "13F row has an unreadable value",
                context={"cusip": cusip, "value": raw_value}
            )

        return HoldingCreate(
            institution_id=institution_id,
            ticker=cusip_map.get(cusip) or cusip[:4],
            cusip=cusip,
            company_name=row.get("nameOfIssuer") or row.get("ISSUER_NAME"),
            shares=self._parse_int(shares) or 0,
            value=(value or 0) * 1000,
            quarter=quarter,
            filing_date=filing_date,
        )

    @staticmethod
    def _entry_timestamp(entry: Mapping[str, Any]) -> Optional[datetime]:
        """Feed entry timestamp as naive UTC"""
        parsed = entry.get("updated_parsed") or entry.get("published_parsed")
        if parsed:
            return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc).replace(tzinfo=None)

        raw = entry.get("updated") or entry.get("published")
        if not raw:
            return None
        try:
            value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
        except ValueError:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        """Safely parse int value"""
        if value is None or value == "":
            return None
        try:
            return int(float(str(value).replace(",", "")))
        except (ValueError, TypeError, OverflowError):
            return None

    @staticmethod
    def _parse_date(value: Any) -> Optional[date]:
        """Safely parse date value"""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            return None
