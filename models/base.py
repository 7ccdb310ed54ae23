from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class SourceType(str, enum.Enum):
    """Ingestion sources; values double as live-event type tags"""
    INSIDER = "insider"
    CONGRESS = "congress"
    HOLDINGS = "13f"


class FetchStatus(str, enum.Enum):
    """Fetch cycle status"""
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class Chamber(str, enum.Enum):
    HOUSE = "House"
    SENATE = "Senate"


class Party(str, enum.Enum):
    DEMOCRAT = "D"
    REPUBLICAN = "R"


class CongressTransactionType(str, enum.Enum):
    PURCHASE = "Purchase"
    SALE = "Sale"


class InsiderTransactionType(str, enum.Enum):
    """Form 4 transaction codes (P = open-market purchase, S = sale)"""
    PURCHASE = "P"
    SALE = "S"
