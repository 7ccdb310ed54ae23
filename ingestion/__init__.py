"""
Ingestion pipeline for disclosure sources.

Modules:
    base: Abstract base class for disclosure sources (fetch -> normalize -> persist)
    runner: Runs one source cycle, records a FetchRun and broadcasts changes
    scheduler: APScheduler integration for periodic fetches
    notifier: WebSocket fan-out of live `update` events
    sample_data: Immutable fixtures (congress members, 13F demo portfolios, CUSIP map)
    seed: Demo 13F portfolio seeding

Subpackages:
    extractors: Congress sample, SEC Form 4 feed, SEC 13F filings
    transformers: Record normalization and text heuristics
    loaders: SQLite writes with insert-or-ignore / replace semantics

Usage:
    from ingestion.runner import FetchRunner
    from ingestion.notifier import notifier
    from ingestion.scheduler import build_congress_sample

Example:
    runner = FetchRunner(
        session_maker=async_session_maker,
        notifier=notifier,
        congress_sample=build_congress_sample(),
    )
    new_trades = await runner.run_congress()
    print(f"Stored {len(new_trades)} new congressional trades")

Error Handling:
    Malformed records are dropped inside the adapters. Whole-source failures
    raise SourceUnavailableError or FeedParseError, which the runner logs
    and records on the FetchRun; nothing propagates to the scheduler.
"""

__all__ = [
    "DataSource",
    "FetchRunner",
    "IngestionScheduler",
    "ChangeNotifier",
    "CongressExtractor",
    "Form4Extractor",
    "HoldingsExtractor",
    "DisclosureNormalizer",
    "SQLiteLoader",
]
