"""
Arrest-log ingestion pass.

Locates the newest bulletin, downloads it, extracts its text and parses
arrest records. When the document path yields nothing, the index page's own
table rows are parsed instead.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bailx.config import Config
from bailx.extractor import parse_arrest_text, parse_index_table
from bailx.locator import collect_candidates, fetch_index, select_latest
from bailx.log import get_logger
from bailx.model import ArrestRecord, BailXError, BulletinReference, FetchError
from bailx.pdfio import extract_text
from bailx.web import download_bulletin

logger = get_logger(__name__)

METHOD_DOCUMENT = "document"
METHOD_INDEX_TABLE = "index_table"
METHOD_NONE = "none"


class IngestResult:
    """Outcome of one ingestion pass."""

    def __init__(self, records: List[ArrestRecord], bulletin: Optional[BulletinReference],
                 method: str, errors: List[str]):
        self.records = records
        self.bulletin = bulletin
        self.method = method
        self.errors = errors

    def get_summary_message(self) -> str:
        """Get a human-readable summary."""
        return f"Found {len(self.records)} records, {len(self.errors)} sources had errors."

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "records": self.records,
            "bulletin": self.bulletin.to_dict() if self.bulletin else None,
            "method": self.method,
            "errors": self.errors,
            "summary": self.get_summary_message(),
        }


def extract_bulletin(bulletin: BulletinReference, cfg: Config, now: Optional[datetime] = None) -> List[ArrestRecord]:
    """
    Download a bulletin and parse its arrest records.

    Args:
        bulletin: Bulletin to retrieve
        cfg: Configuration
        now: Ingestion time used for defaults

    Returns:
        Parsed records

    Raises:
        FetchError: If the download fails
        ParseError: If the document cannot be decoded
    """
    content = download_bulletin(bulletin.url, cfg)
    text = extract_text(content, bulletin.filename, cfg)
    return parse_arrest_text(text, cfg, now)


def ingest_latest_bulletin(cfg: Optional[Config] = None, now: Optional[datetime] = None) -> IngestResult:
    """
    Run one ingestion pass over the newest bulletin.

    Args:
        cfg: Configuration
        now: Ingestion time used for defaults

    Returns:
        Ingestion result; network and decode failures are reported in
        errors, never raised
    """
    cfg = cfg or Config()
    now = now or datetime.now()
    errors: List[str] = []

    try:
        html, index_url = fetch_index(cfg)
    except FetchError as e:
        error_msg = f"Error fetching bulletin index: {e}"
        logger.error(error_msg)
        return IngestResult([], None, METHOD_NONE, [error_msg])

    bulletin = select_latest(collect_candidates(html, index_url, cfg, now))

    if bulletin is not None:
        logger.info(f"Found recent bulletin: {bulletin.filename}")
        try:
            records = extract_bulletin(bulletin, cfg, now)
            if records:
                logger.info(f"Successfully extracted {len(records)} arrest records from {bulletin.filename}")
                return IngestResult(records, bulletin, METHOD_DOCUMENT, errors)
            logger.warning("No records extracted from bulletin, falling back to index table")
        except BailXError as e:
            error_msg = f"Error processing bulletin {bulletin.filename}: {e}"
            logger.error(f"{error_msg}, falling back to index table")
            errors.append(error_msg)
    else:
        logger.info("No bulletin found, falling back to index table")

    records = parse_index_table(html, cfg, now)
    method = METHOD_INDEX_TABLE if records else METHOD_NONE
    result = IngestResult(records, bulletin, method, errors)
    logger.info(result.get_summary_message())
    return result
