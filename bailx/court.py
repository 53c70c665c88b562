"""
Court date resolver.

Queries a fixed, ordered list of court-record sources for a client's name and
collects the hearing records they return. Sources are queried one at a time
with a delay between requests; a failing source is recorded and skipped.
"""

import time
from typing import Any, Dict, List, Optional

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import HearingRecord
from bailx.names import name_variants, parse_client_name
from bailx.sources import CourtSource, build_source

logger = get_logger(__name__)


class ResolverResult:
    """Outcome of one court date search."""

    def __init__(self, client_name: str, hearing_records: List[HearingRecord],
                 errors: List[str], sources_searched: List[str]):
        self.client_name = client_name
        self.hearing_records = hearing_records
        self.errors = errors
        self.sources_searched = sources_searched

    @property
    def success(self) -> bool:
        """False only when nothing was found and something broke."""
        return bool(self.hearing_records) or not self.errors

    def get_summary_message(self) -> str:
        """Get a human-readable summary."""
        return (f"Found {len(self.hearing_records)} records for {self.client_name}, "
                f"{len(self.errors)} sources had errors.")

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "success": self.success,
            "client_name": self.client_name,
            "hearing_records": self.hearing_records,
            "errors": self.errors,
            "sources_searched": self.sources_searched,
            "summary": self.get_summary_message(),
        }


class _Throttle:
    """Sleeps between consecutive outbound queries."""

    def __init__(self, delay: float):
        self.delay = delay
        self.calls = 0

    def wait(self) -> None:
        if self.calls and self.delay > 0:
            time.sleep(self.delay)
        self.calls += 1


def configured_sources(cfg: Config) -> List[CourtSource]:
    """Build the court sources listed in the configuration, in order."""
    return [build_source(source_cfg, cfg) for source_cfg in cfg.resolver.sources]


def configured_public_records(cfg: Config) -> Optional[CourtSource]:
    """Build the public-records aggregator, or None when not configured."""
    if cfg.resolver.public_records is None:
        return None
    return build_source(cfg.resolver.public_records, cfg)


def search_court_dates(client_name: str, options: Optional[Dict[str, Any]] = None,
                       cfg: Optional[Config] = None, sources: Optional[List[CourtSource]] = None,
                       public_records: Optional[CourtSource] = None) -> ResolverResult:
    """
    Search every enabled court source for hearings of a client.

    Args:
        client_name: Client's full name
        options: Optional state, county and max_results; max_results caps the
            returned list
        cfg: Configuration
        sources: Prebuilt sources, defaults to the configured list
        public_records: Prebuilt aggregator, defaults to the configured one

    Returns:
        Search result; never raises for source failures
    """
    cfg = cfg or Config()
    options = options or {}
    if sources is None:
        sources = configured_sources(cfg)
    if public_records is None:
        public_records = configured_public_records(cfg)

    components = parse_client_name(client_name)
    variants = name_variants(components)
    throttle = _Throttle(cfg.resolver.request_delay)

    records: List[HearingRecord] = []
    errors: List[str] = []
    sources_searched: List[str] = []

    logger.info(f"Starting court date search for: {components['full_name']} "
                f"({options.get('state', cfg.resolver.state)}, {options.get('county', cfg.resolver.county)})")
    logger.info(f"Total court sources available: {len(sources)}")

    for source in sources:
        if not source.enabled:
            logger.debug(f"Skipping disabled source: {source.name}")
            continue

        sources_searched.append(source.name)
        queries = variants if source.searches_by_name else [components["full_name"]]

        try:
            for query in queries:
                throttle.wait()
                records.extend(source.search(query))
        except Exception as e:
            error_msg = f"Error searching {source.name}: {e}"
            logger.error(error_msg)
            errors.append(error_msg)

    if public_records is not None and public_records.enabled:
        logger.info(f"Searching {public_records.name} for: {components['full_name']}")
        try:
            throttle.wait()
            records.extend(public_records.search(components["full_name"]))
        except Exception as e:
            error_msg = f"Public records search failed: {e}"
            logger.error(error_msg)
            errors.append(error_msg)

    max_results = options.get("max_results", cfg.resolver.max_results)
    if max_results is not None and len(records) > max_results:
        logger.info(f"Truncating {len(records)} records to {max_results}")
        records = records[:max_results]

    result = ResolverResult(components["full_name"], records, errors, sources_searched)
    logger.info(f"Court date search completed. {result.get_summary_message()}")
    return result
