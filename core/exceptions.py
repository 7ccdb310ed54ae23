"""
Custom exceptions for the disclosure pipeline with structured error context.

Every exception carries a message, a context dictionary and (optionally) the
exception that caused it, so failures can be logged with enough detail to
tell which source, filer or record was involved.

Exception Hierarchy:
    DisclosureError (base)
    ├── ExtractionError
    │   ├── SourceUnavailableError   (network failure / non-2xx, whole source)
    │   ├── FeedParseError           (document could not be parsed at all)
    │   └── InstitutionFetchError    (one 13F filer failed, batch continues)
    ├── TransformationError
    │   └── RecordValidationError    (one malformed record, dropped)
    ├── LoadError
    │   └── DatabaseError
    └── QueryError
        ├── InvalidQueryError        (HTTP 400)
        └── ResourceNotFoundError    (HTTP 404)
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class DisclosureError(Exception):
    """
    Base exception for all pipeline and query errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (source, url, cik, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/storage."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(DisclosureError):
    """Base exception for failures while obtaining raw records."""
    pass


class SourceUnavailableError(ExtractionError):
    """
    Raised when a whole source cannot be reached (network error, non-2xx).

    Only raised before any record is collected, so the caller treats the
    cycle as having produced nothing new.

    Context should include:
        - url: The URL that failed
        - status_code: HTTP status code (if applicable)
    """

    pass


class FeedParseError(ExtractionError):
    """
    Raised when a fetched document cannot be parsed at all.

    Context should include:
        - url: URL of the document
    """
    pass


class InstitutionFetchError(ExtractionError):
    """
    Raised when the 13F filing of a single institution cannot be fetched.

    Context should include:
        - cik: The filer's CIK
        - url: The URL that failed (if applicable)
    """
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(DisclosureError):
    """Base exception for normalization failures."""
    pass


class RecordValidationError(TransformationError):
    """
    Raised when a single raw record cannot be normalized.

    Adapters catch this and drop the record; it never aborts a batch.
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(DisclosureError):
    """Base exception for persistence failures."""
    pass


class DatabaseError(LoadError):
    """
    Raised when a database operation fails.

    Context should include:
        - operation: Type of database operation (INSERT, UPSERT, UPDATE)
        - table_name: Name of the table
    """
    pass


# ============================================================================
# Query Errors
# ============================================================================

class QueryError(DisclosureError):
    """Base exception for read-path errors surfaced to API callers."""
    pass


class InvalidQueryError(QueryError):
    """Raised when request parameters are rejected before querying."""
    pass


class ResourceNotFoundError(QueryError):
    """Raised when a looked-up resource (e.g. a CIK) does not exist."""
    pass
