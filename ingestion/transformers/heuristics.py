"""
Text heuristics used when normalizing SEC and congressional records.

All functions are total: malformed input yields a default, never an exception.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple, Union

COMPANY_SUFFIXES = frozenset({
    "INC", "CORP", "CORPORATION", "LLC", "LTD", "CO", "COMPANY",
    "HOLDINGS", "GROUP", "PLC",
})

DEFAULT_INSIDER_TITLE = "Officer/Director"

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_SALE_RE = re.compile(r"sale|sold|sell", re.IGNORECASE)
_SHARES_RE = re.compile(r"(\d{1,3}(?:,\d{3})*(?:\.\d+)?)\s*shares", re.IGNORECASE)
_PRICE_RE = re.compile(r"\$(\d{1,3}(?:,\d{3})*(?:\.\d+)?)\s*(?:per|/)\s*share", re.IGNORECASE)
_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")
_TITLE_RE = re.compile(
    r"\b(CEO|CFO|COO|CTO|President|Chairman|Director|Officer|General Counsel|"
    r"Vice President|EVP|SVP|10% Owner)\b",
    re.IGNORECASE,
)
_AMOUNT_RANGE_RE = re.compile(r"\$?([\d,]+)\s*-\s*\$?([\d,]+)")


@dataclass(frozen=True)
class TransactionSummary:
    """Fields recovered from a free-text Form 4 entry summary"""
    transaction_type: str = "P"
    shares: int = 0
    price_per_share: Optional[float] = None
    total_value: Optional[float] = None
    insider_title: str = DEFAULT_INSIDER_TITLE
    transaction_date: Optional[date] = None


def _to_number(text: str) -> Optional[float]:
    """Finite number from "1,234.5", else None"""
    value = float(text.replace(",", ""))
    return value if math.isfinite(value) else None


def ticker_from_company_name(name: Optional[str]) -> Optional[str]:
    """
    Guess a ticker symbol from a company name.

    Corporate suffixes are dropped; a short first word is used as-is,
    otherwise the initials of the first four words.

    Examples:
        "Apple Inc" -> "APPLE"
        "International Business Machines Corp" -> "IBM"
        "Inc." -> None
    """
    if not name:
        return None

    tokens = [_NON_ALNUM.sub("", word) for word in name.upper().split()]
    words = [t for t in tokens if t and t not in COMPANY_SUFFIXES]
    if not words:
        return None

    if len(words[0]) <= 5:
        return words[0]

    return "".join(word[0] for word in words[:4])


def parse_transaction_summary(text: Optional[str]) -> TransactionSummary:
    """
    Scrape transaction details out of a feed entry summary.

    Anything that cannot be found keeps its default: purchase, zero shares,
    unknown price and value, generic officer title, no date.
    """
    if not text:
        return TransactionSummary()

    transaction_type = "S" if _SALE_RE.search(text) else "P"

    shares = 0
    match = _SHARES_RE.search(text)
    if match:
        number = _to_number(match.group(1))
        shares = int(number) if number is not None else 0

    price_per_share = None
    match = _PRICE_RE.search(text)
    if match:
        price_per_share = _to_number(match.group(1))

    total_value = None
    if shares and price_per_share is not None:
        total_value = shares * price_per_share

    insider_title = DEFAULT_INSIDER_TITLE
    match = _TITLE_RE.search(text)
    if match:
        insider_title = match.group(1)

    transaction_date = None
    match = _DATE_RE.search(text)
    if match:
        try:
            transaction_date = date.fromisoformat(match.group(1))
        except ValueError:
            transaction_date = None

    return TransactionSummary(
        transaction_type=transaction_type,
        shares=shares,
        price_per_share=price_per_share,
        total_value=total_value,
        insider_title=insider_title,
        transaction_date=transaction_date,
    )


def quarter_from_filing_date(filing_date: Union[date, datetime, str]) -> str:
    """
    Map a 13F filing date to the quarter it reports on.

    13F filings are due 45 days after quarter end, so a filing made up to the
    middle of the following quarter still describes the previous one.

    Examples:
        2024-03-10 -> "2023-Q4"
        2024-06-14 -> "2024-Q1"
        2024-06-16 -> "2024-Q2"
    """
    if isinstance(filing_date, str):
        filing_date = date.fromisoformat(filing_date[:10])

    year, month, day = filing_date.year, filing_date.month, filing_date.day

    if month <= 2 or (month == 3 and day <= 15):
        return f"{year - 1}-Q4"
    if month <= 5 or (month == 6 and day <= 14):
        return f"{year}-Q1"
    if month <= 8 or (month == 9 and day <= 14):
        return f"{year}-Q2"
    if month <= 11 or (month == 12 and day <= 14):
        return f"{year}-Q3"
    return f"{year}-Q4"


def parse_amount_range(text: Optional[str]) -> Tuple[int, int]:
    """Parse "$1,001 - $15,000" into (1001, 15000); (0, 0) if unparseable"""
    if not text:
        return 0, 0
    match = _AMOUNT_RANGE_RE.search(text)
    if not match:
        return 0, 0
    return int(match.group(1).replace(",", "")), int(match.group(2).replace(",", ""))


def pad_cik(cik: Union[str, int]) -> str:
    """Zero-pad a CIK to the 10 digits SEC URLs and the store use"""
    return str(cik).strip().zfill(10)
