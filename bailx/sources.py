"""
External court-record sources.

Each source turns one name query into zero or more HearingRecords tagged with
its display name. Network failures raise FetchError so the resolver can
isolate them per source; markup that does not look like a result table is
treated as zero hits.
"""

import re
import warnings
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning

from bailx.config import Config, CourtSourceConfig
from bailx.log import get_logger
from bailx.model import ClientName, HearingRecord
from bailx.names import parse_client_name
from bailx.web import fetch_text

logger = get_logger(__name__)

# Header text -> HearingRecord field
HEADER_FIELDS = [
    (re.compile(r"case\s*(no|num|number|#)|docket|case$", re.I), "case_number"),
    (re.compile(r"case\s*type|category|type", re.I), "case_type"),
    (re.compile(r"date", re.I), "hearing_date"),
    (re.compile(r"time", re.I), "hearing_time"),
    (re.compile(r"court|location|room|venue", re.I), "location"),
    (re.compile(r"charge|offense|description", re.I), "charges"),
    (re.compile(r"status|disposition", re.I), "status"),
    (re.compile(r"name|party|defendant", re.I), "name"),
]

SLASH_DATE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")
FEDERAL_CASE_NUMBER = re.compile(r"\b\d{1,2}:\d{2}-cv-\d+\b|\b\d{1,2}:\d{2}-cr-\d+\b")
DEFENDANT_CAPTION = re.compile(r"USA v\.\s+([A-Za-z\s,]+)", re.I)
CASE_TYPES = ("criminal", "traffic", "civil")
# Feed channel header item, e.g. "District of Hawaii - Recent Entries"
CHANNEL_TITLE_RE = re.compile(r"Recent Entries", re.I)

MISSING_DATE_AND_CASE = "Missing hearing date and case number"


def normalize_hearing_date(value: Optional[str]) -> Optional[str]:
    """
    Normalize M/D/YYYY or YYYY-MM-DD text to ISO format.

    Returns None when no valid date is present.
    """
    if not value:
        return None

    m = ISO_DATE.search(value)
    if m:
        year, month, day = m.groups()
    else:
        m = SLASH_DATE.search(value)
        if not m:
            return None
        month, day, year = m.groups()

    try:
        return datetime(int(year), int(month), int(day)).date().isoformat()
    except ValueError:
        return None


def normalize_case_type(value: Optional[str]) -> Optional[str]:
    """Map free text onto criminal / traffic / civil."""
    if not value:
        return None
    lowered = value.lower()
    for case_type in CASE_TYPES:
        if case_type in lowered:
            return case_type
    if re.search(r"\bcr\b|cr-", lowered):
        return "criminal"
    return None


def make_hearing_record(name: str, source: str, **fields) -> HearingRecord:
    """
    Build a HearingRecord, flagging low-value rows.

    Args:
        name: Subject name
        source: Source label
        **fields: Remaining HearingRecord fields

    Returns:
        New record
    """
    record: HearingRecord = {
        "name": name,
        "case_number": fields.get("case_number") or None,
        "hearing_date": fields.get("hearing_date") or None,
        "hearing_time": fields.get("hearing_time") or None,
        "location": fields.get("location") or None,
        "case_type": fields.get("case_type") or None,
        "charges": fields.get("charges") or None,
        "status": fields.get("status") or "scheduled",
        "source": source,
        "warnings": [],
    }
    if not record["hearing_date"] and not record["case_number"]:
        record["warnings"].append(MISSING_DATE_AND_CASE)
    return record


def _map_headers(headers: List[str]) -> Dict[int, str]:
    mapping = {}
    for index, header in enumerate(headers):
        for pattern, field in HEADER_FIELDS:
            if pattern.search(header) and field not in mapping.values():
                mapping[index] = field
                break
    return mapping


def parse_hearing_table(html: str, query_name: str, source_name: str) -> List[HearingRecord]:
    """
    Parse hearing rows out of a search-results page.

    Every table with a recognisable header row is read; each data row
    becomes one record. Rows without a name cell are attributed to the
    searched name.

    Args:
        html: Search-results markup
        query_name: Name that was searched
        source_name: Source label for the records

    Returns:
        Parsed records, empty for unrecognised markup
    """
    soup = BeautifulSoup(html or "", "html.parser")
    records = []

    for table in soup.find_all("table"):
        rows = table.find_all("tr")
        if len(rows) < 2:
            continue

        header_cells = rows[0].find_all(["th", "td"])
        mapping = _map_headers([c.get_text(" ", strip=True) for c in header_cells])
        if "hearing_date" not in mapping.values() and "case_number" not in mapping.values():
            logger.debug(f"{source_name}: skipping table without date or case column")
            continue

        for row in rows[1:]:
            cells = [c.get_text(" ", strip=True) for c in row.find_all(["td", "th"])]
            if not any(cells):
                continue

            values = {field: cells[i] for i, field in mapping.items() if i < len(cells) and cells[i]}
            records.append(make_hearing_record(
                values.get("name") or query_name,
                source_name,
                case_number=values.get("case_number"),
                hearing_date=normalize_hearing_date(values.get("hearing_date")),
                hearing_time=values.get("hearing_time"),
                location=values.get("location"),
                case_type=normalize_case_type(values.get("case_type") or values.get("case_number")),
                charges=values.get("charges"),
                status=values.get("status"),
            ))

    return records


class CourtSource:
    """Base class for a named external court-record source."""

    # False for feeds that ignore the query; they are read once per search
    searches_by_name = True

    def __init__(self, source_cfg: CourtSourceConfig, cfg: Config):
        self.name = source_cfg.name
        self.url = source_cfg.url
        self.search_path = source_cfg.search_path
        self.name_param = source_cfg.name_param
        self.enabled = source_cfg.enabled
        self.cfg = cfg

    @property
    def endpoint(self) -> str:
        return f"{self.url.rstrip('/')}{self.search_path}"

    def search(self, name: str) -> List[HearingRecord]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class HtmlCourtSource(CourtSource):
    """Source answering a name query with an HTML results table."""

    def search(self, name: str) -> List[HearingRecord]:
        logger.info(f"Searching {self.name} for {name}")
        html = fetch_text(
            self.endpoint,
            self.cfg,
            timeout=self.cfg.http.source_timeout,
            params={self.name_param: name},
        )
        records = parse_hearing_table(html, name, self.name)
        logger.info(f"{self.name}: {len(records)} hits for {name}")
        return records


class PublicRecordsSource(HtmlCourtSource):
    """Broader public-records aggregator, queried once with the full name."""

    pass


class RssCourtSource(CourtSource):
    """
    Court docket RSS feed.

    The feed is not searchable, so every item is fetched and kept when its
    title or description mentions the client.
    """

    searches_by_name = False

    def search(self, name: str) -> List[HearingRecord]:
        logger.info(f"Fetching RSS feed {self.endpoint} for {name}")
        xml_text = fetch_text(
            self.endpoint,
            self.cfg,
            timeout=self.cfg.http.source_timeout,
            accept=self.cfg.http.accept_rss,
        )
        records = parse_rss_feed(xml_text, parse_client_name(name), self.name)
        logger.info(f"{self.name}: {len(records)} matching feed items for {name}")
        return records


def _rss_item_matches(title: str, description: str, client: ClientName) -> bool:
    full_text = f"{title} {description}".lower()
    needles = [client["first_name"], client["last_name"], client["full_name"]]

    m = DEFENDANT_CAPTION.search(title)
    defendant = m.group(1).strip().lower() if m else ""

    for needle in needles:
        needle = needle.lower()
        if not needle:
            continue
        if needle in full_text:
            return True
        if defendant and needle in defendant:
            return True
    return False


def _pub_date_to_iso(pub_date: str) -> Optional[str]:
    if not pub_date:
        return None
    try:
        return parsedate_to_datetime(pub_date).date().isoformat()
    except (TypeError, ValueError):
        return normalize_hearing_date(pub_date)


def parse_rss_feed(xml_text: str, client: ClientName, source_name: str) -> List[HearingRecord]:
    """
    Extract hearing records for a client from a docket RSS feed.

    Args:
        xml_text: RSS document
        client: Parsed client name
        source_name: Source label for the records

    Returns:
        Matching records
    """
    # html.parser warns on XML input
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(xml_text or "", "html.parser")
    records = []

    for item in soup.find_all("item"):
        title = item.title.get_text(strip=True) if item.title else ""
        description = item.description.get_text(strip=True) if item.description else ""
        pub_date = item.pubdate.get_text(strip=True) if item.pubdate else ""

        if CHANNEL_TITLE_RE.search(title):
            continue
        if not _rss_item_matches(title, description, client):
            continue

        case_match = FEDERAL_CASE_NUMBER.search(title)
        charges = description[:100] + "..." if len(description) > 100 else description
        is_criminal = "criminal" in title.lower() or "cr-" in title.lower()

        records.append(make_hearing_record(
            client["full_name"],
            source_name,
            case_number=case_match.group(0) if case_match else None,
            hearing_date=normalize_hearing_date(description) or _pub_date_to_iso(pub_date),
            location=source_name,
            case_type="criminal" if is_criminal else "civil",
            charges=charges,
            status="Active",
        ))

    return records


SOURCE_TYPES = {
    "html": HtmlCourtSource,
    "rss": RssCourtSource,
    "public_records": PublicRecordsSource,
}


def build_source(source_cfg: CourtSourceConfig, cfg: Config) -> CourtSource:
    """
    Instantiate the source class for a configured source.

    Raises:
        ValueError: For an unknown source type
    """
    try:
        source_cls = SOURCE_TYPES[source_cfg.type]
    except KeyError:
        raise ValueError(f"Unknown court source type: {source_cfg.type}")
    return source_cls(source_cfg, cfg)
