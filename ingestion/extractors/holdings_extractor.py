"""
SEC 13F Holdings Extractor

Extracts the latest 13F-HR information table of every tracked institution
from SEC EDGAR.
"""

import httpx
from dataclasses import dataclass
from datetime import date
from typing import List, Dict, Any, Mapping, Optional, Sequence
from xml.etree import ElementTree as ET
from sqlalchemy.ext.asyncio import AsyncSession
from ingestion.base import DataSource
from ingestion.sample_data import TrackedInstitution, TRACKED_INSTITUTIONS, CUSIP_TO_TICKER
from ingestion.transformers.heuristics import pad_cik, quarter_from_filing_date
from ingestion.transformers.normalizer import DisclosureNormalizer
from models.base import SourceType
from models.institution import Institution
from schemas.normalized import HoldingCreate
from core.config import settings
from core.exceptions import InstitutionFetchError
import logging

logger = logging.getLogger(__name__)

FORM_13F = "13F-HR"


@dataclass(frozen=True)
class InfoTableRow:
    """One information table row with the filing it came from"""
    institution_id: int
    quarter: str
    filing_date: date
    fields: Mapping[str, Any]


# ============================================================================
# Information table XML
# ============================================================================

def _strip_ns(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def _find_child(parent: Optional[ET.Element], name: str) -> Optional[ET.Element]:
    if parent is None:
        return None
    for child in parent:
        if _strip_ns(child.tag) == name:
            return child
    return None


def _child_text(parent: Optional[ET.Element], name: str) -> Optional[str]:
    child = _find_child(parent, name)
    if child is None:
        return None
    text = (child.text or "").strip()
    return text or None


def parse_info_table_xml(content: str) -> List[Dict[str, Any]]:
    """
    Parse a 13F information table XML document into JSON-shaped rows.

    Namespace prefixes vary between filers, so tags are matched by local name.

    Raises:
        ET.ParseError: Document is not well-formed XML
    """
    root = ET.fromstring(content)

    rows = []
    for element in root.iter():
        if _strip_ns(element.tag) != "infoTable":
            continue
        rows.append({
            "nameOfIssuer": _child_text(element, "nameOfIssuer"),
            "cusip": _child_text(element, "cusip"),
            "value": _child_text(element, "value"),
            "sshPrnamt": _child_text(_find_child(element, "shrsOrPrnAmt"), "sshPrnamt"),
        })
    return rows


# ============================================================================
# Extractor
# ============================================================================

class HoldingsExtractor(DataSource):
    """
    Extract 13F holdings for every stored institution.

    Features:
    - Configured institutions are created before the first fetch
    - infotable.json with infotable.xml fallback
    - One failing institution is logged and skipped, the rest continue
    - updated_at is refreshed for each institution fetched successfully,
      only once its holdings are committed
    """

    source_type = SourceType.HOLDINGS

    def __init__(
        self,
        db_session: AsyncSession,
        institutions: Sequence[TrackedInstitution] = TRACKED_INSTITUTIONS,
        cusip_map: Mapping[str, str] = CUSIP_TO_TICKER,
        http_client: Optional[httpx.AsyncClient] = None,
        data_base_url: Optional[str] = None,
        archives_base_url: Optional[str] = None,
        normalizer: Optional[DisclosureNormalizer] = None
    ):
        super().__init__(db_session)
        self.institutions = institutions
        self.cusip_map = cusip_map
        self.http_client = http_client
        self.data_base_url = (data_base_url or settings.SEC_DATA_BASE_URL).rstrip("/")
        self.archives_base_url = (archives_base_url or settings.SEC_ARCHIVES_BASE_URL).rstrip("/")
        self.normalizer = normalizer or DisclosureNormalizer()
        self.failed_ciks: List[str] = []
        self.fetched_ciks: List[str] = []

    async def fetch(self) -> List[HoldingCreate]:
        new_records = await super().fetch()

        for cik in self.fetched_ciks:
            await self.loader.touch_institution(cik)
        await self.loader.commit()

        return new_records

    async def fetch_raw(self) -> List[InfoTableRow]:
        """
        Download the latest information table of each stored institution.

        Returns:
            Rows of every institution that was fetched successfully
        """
        for tracked in self.institutions:
            await self.loader.upsert_institution(pad_cik(tracked.cik), tracked.name)
        await self.loader.commit()

        if self.http_client is not None:
            return await self._fetch_all(self.http_client)

        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
            return await self._fetch_all(client)

    async def _fetch_all(self, client: httpx.AsyncClient) -> List[InfoTableRow]:
        rows: List[InfoTableRow] = []
        self.failed_ciks = []
        self.fetched_ciks = []

        for institution in await self.loader.list_institutions():
            try:
                institution_rows = await self._fetch_institution(client, institution)
            except InstitutionFetchError as e:
                logger.error(f"Error fetching 13F holdings for {institution.name}: {e}")
                self.failed_ciks.append(institution.cik)
                continue

            logger.info(f"Fetched {len(institution_rows)} holdings for CIK {institution.cik}")
            self.fetched_ciks.append(institution.cik)
            rows.extend(institution_rows)

        return rows

    async def _fetch_institution(
        self,
        client: httpx.AsyncClient,
        institution: Institution
    ) -> List[InfoTableRow]:
        cik = pad_cik(institution.cik)
        submissions_url = f"{self.data_base_url}/submissions/CIK{cik}.json"

        response = await self._get(client, submissions_url, cik)
        if not response.is_success:
            raise InstitutionFetchError(
                f"SEC API returned {response.status_code}",
                context={"cik": cik, "url": submissions_url, "status_code": response.status_code}
            )
        submissions = self._json(response, cik)

        recent = (submissions.get("filings") or {}).get("recent") or {}
        forms = recent.get("form") or []
        if FORM_13F not in forms:
            logger.info(f"No {FORM_13F} filing found for CIK {cik}")
            return []

        index = forms.index(FORM_13F)
        try:
            accession_number = recent["accessionNumber"][index]
            filing_date = date.fromisoformat(recent["filingDate"][index])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise InstitutionFetchError(
                "Malformed submissions index",
                context={"cik": cik, "url": submissions_url},
                original_exception=e
            )

        quarter = quarter_from_filing_date(filing_date)
        filing_base = (
            f"{self.archives_base_url}/Archives/edgar/data/{int(cik)}/"
            f"{str(accession_number).replace('-', '')}"
        )
        fields = await self._fetch_info_table(client, filing_base, cik)

        return [
            InfoTableRow(
                institution_id=institution.id,
                quarter=quarter,
                filing_date=filing_date,
                fields=row
            )
            for row in fields
        ]

    async def _fetch_info_table(
        self,
        client: httpx.AsyncClient,
        filing_base: str,
        cik: str
    ) -> List[Dict[str, Any]]:
        json_url = f"{filing_base}/infotable.json"
        response = await self._get(client, json_url, cik)
        if response.is_success:
            data = self._json(response, cik)
            rows = data.get("data") or []
            return [row for row in rows if isinstance(row, dict)]

        xml_url = f"{filing_base}/infotable.xml"
        response = await self._get(client, xml_url, cik)
        if not response.is_success:
            raise InstitutionFetchError(
                f"No information table available ({response.status_code})",
                context={"cik": cik, "url": xml_url, "status_code": response.status_code}
            )
        try:
            return parse_info_table_xml(response.text)
        except ET.ParseError as e:
            raise InstitutionFetchError(
                "Unreadable information table XML",
                context={"cik": cik, "url": xml_url},
                original_exception=e
            )

    async def _get(self, client: httpx.AsyncClient, url: str, cik: str) -> httpx.Response:
        try:
            return await client.get(
                url,
                headers={"User-Agent": settings.SEC_USER_AGENT, "Accept": "application/json, application/xml"}
            )
        except httpx.HTTPError as e:
            raise InstitutionFetchError(
                "SEC request failed",
                context={"cik": cik, "url": url},
                original_exception=e
            )

    @staticmethod
    def _json(response: httpx.Response, cik: str) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise InstitutionFetchError(
                "Response is not valid JSON",
                context={"cik": cik, "url": str(response.request.url)},
                original_exception=e
            )
        return data if isinstance(data, dict) else {}

    def build_record(self, raw: InfoTableRow) -> HoldingCreate:
        return self.normalizer.normalize_holding(
            raw.fields,
            institution_id=raw.institution_id,
            quarter=raw.quarter,
            filing_date=raw.filing_date,
            cusip_map=self.cusip_map,
        )

    async def persist(self, record: HoldingCreate) -> bool:
        await self.loader.replace_holding(record)
        return True
