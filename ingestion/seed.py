"""
Demo 13F portfolios for a store that has not fetched real filings yet.
"""

from typing import Sequence
from ingestion.loaders.sqlite_loader import SQLiteLoader
from ingestion.sample_data import (
    TrackedInstitution,
    TRACKED_INSTITUTIONS,
    DEMO_HOLDINGS_QUARTER,
    DEMO_HOLDINGS_FILING_DATE,
)
from ingestion.transformers.heuristics import pad_cik
from schemas.normalized import HoldingCreate
import logging

logger = logging.getLogger(__name__)


async def seed_sample_holdings(
    loader: SQLiteLoader,
    portfolios: Sequence[TrackedInstitution] = TRACKED_INSTITUTIONS
) -> int:
    """
    Write the fixed demo portfolios for institutions already in the store.

    Safe to call repeatedly: holdings replace on (institution, ticker, quarter).

    Returns:
        Number of holdings written
    """
    seeded = 0

    for portfolio in portfolios:
        institution = await loader.get_institution_by_cik(pad_cik(portfolio.cik))
        if institution is None:
            continue

        for holding in portfolio.holdings:
            await loader.replace_holding(HoldingCreate(
                institution_id=institution.id,
                ticker=holding.ticker,
                cusip=holding.ticker,  # placeholder, demo data has no CUSIPs
                company_name=holding.company,
                shares=holding.shares,
                value=holding.value,
                quarter=DEMO_HOLDINGS_QUARTER,
                filing_date=DEMO_HOLDINGS_FILING_DATE,
            ))
            seeded += 1

    await loader.commit()
    logger.info(f"Seeded {seeded} holdings across {len(portfolios)} institutions")
    return seeded
