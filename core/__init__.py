"""
Core utilities and configuration for the disclosure tracker.

This package provides foundational components used by ingestion and the API:

Modules:
    config: Application configuration and environment variable management
    database: Async SQLite engine, session factory and schema initialization
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import init_db
    from core.exceptions import SourceUnavailableError, ResourceNotFoundError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Create tables and seed tracked institutions
    await init_db()
"""

__all__ = [
    "settings",
    "init_db",
    "setup_logging",
    # Exceptions
    "DisclosureError",
    "ExtractionError",
    "SourceUnavailableError",
    "FeedParseError",
    "InstitutionFetchError",
    "TransformationError",
    "RecordValidationError",
    "LoadError",
    "DatabaseError",
    "QueryError",
    "InvalidQueryError",
    "ResourceNotFoundError",
]
