"""
bailx - court date lookup and arrest-log extraction.

Stateless extraction utilities for a bail-bond management server: a court
date resolver that queries external record sources by client name, and an
arrest-log pipeline that locates the newest published bulletin and extracts
structured arrest records from it.
"""

__version__ = "0.1.0"

from bailx.model import (
    ArrestRecord,
    BulletinReference,
    HearingRecord,
    LineKind,
    Severity,
)
from bailx.config import Config, load_config
from bailx.names import parse_client_name, name_variants, name_matches, filter_matching
from bailx.court import ResolverResult, search_court_dates
from bailx.locator import find_latest_bulletin
from bailx.extractor import classify_line, determine_severity, parse_arrest_text, parse_index_table
from bailx.ingest import IngestResult, ingest_latest_bulletin
from bailx.writers import write_json, write_csv, write_ndjson, write_outputs

__all__ = [
    "ArrestRecord",
    "BulletinReference",
    "HearingRecord",
    "LineKind",
    "Severity",
    "Config",
    "load_config",
    "parse_client_name",
    "name_variants",
    "name_matches",
    "filter_matching",
    "ResolverResult",
    "search_court_dates",
    "find_latest_bulletin",
    "classify_line",
    "determine_severity",
    "parse_arrest_text",
    "parse_index_table",
    "IngestResult",
    "ingest_latest_bulletin",
    "write_json",
    "write_csv",
    "write_ndjson",
    "write_outputs",
]
