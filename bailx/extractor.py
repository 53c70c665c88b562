"""
Bulletin extractor for bailx.

Arrest-log bulletins have no fixed layout, so records are recovered with a
single forward pass over the text lines. Each line is classified by an
ordered list of checks (first match wins) and a new record starts at every
all-caps name line.
"""

import re
from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import ArrestRecord, LineKind, Severity

logger = get_logger(__name__)

CHARGE_WORDS = [
    "ASSAULT", "THEFT", "BURGLARY", "ROBBERY", "DUI", "DRUG", "POSSESSION",
    "WARRANT", "TRESPASS", "FRAUD", "BATTERY", "VANDALISM",
]
CHARGE_HINT = re.compile("|".join(re.escape(w) for w in CHARGE_WORDS), re.IGNORECASE)

LOCATION_WORDS = ["HONOLULU", "OAHU", "HAWAII", "MAUI", "KAUAI"]
LOCATION_HINT = re.compile("|".join(LOCATION_WORDS), re.IGNORECASE)

# Whole words only, so surnames like DUIGNAN still open a record
NAME_CHARGE_HINT = re.compile(r"\b(?:%s)S?\b" % "|".join(CHARGE_WORDS))
NAME_LOCATION_HINT = re.compile(r"\b(?:%s)\b" % "|".join(LOCATION_WORDS))

# Report furniture that is all caps but never a person; matched against the whole line
HEADER_LINE = re.compile(
    r".*\b(?:ARREST|BOOKING)S?\s+(?:LOGS?|REPORTS?|BULLETINS?)\b.*"
    r"|.*\bPOLICE\s+DEPARTMENT\b.*"
    r"|.*\bREPORT"
    r"|PAGE\s+\d+(?:\s+OF\s+\d+)?"
    r"|(?:(?:NAME|AGE|DATE|TIME|CHARGES?|STATUS|LOCATION|ADDRESS|BOOKING|CASE|NO\.?)[\s,]*)+"
)

NAME_REGEX = re.compile(r"^[A-Z][A-Z ,'\-\.]{3,48}[A-Z\.]$")
BOOKING_REGEX = re.compile(
    r"\b(?:BOOKING|BK|CASE|ARREST)\b[\s#:]*(?:NO\.?|NUMBER)?[\s#:]*(?P<booking>(?=[A-Z\-]*\d)[A-Z0-9][A-Z0-9\-]*)",
    re.IGNORECASE,
)
DATE_REGEX = re.compile(r"\b(?P<month>\d{1,2})[-/](?P<day>\d{1,2})[-/](?P<year>\d{4})\b")
TIME_REGEX = re.compile(r"\b(?P<time>\d{1,2}:\d{2}(?:\s*[AP]M)?)", re.IGNORECASE)
AGE_REGEX = re.compile(r"\bAGE\b[:\s]*(?P<age>\d{1,3})|(?P<yrs>\d{1,3})\s*YRS?\b\.?", re.IGNORECASE)
ADDRESS_REGEX = re.compile(
    r"\d+\s+[A-Z\s]+(?:STREET|ST|AVENUE|AVE|ROAD|RD|DRIVE|DR|LANE|LN|BOULEVARD|BLVD|PLACE|PL|WAY|HWY)\b",
    re.IGNORECASE,
)

SEVERITY_TIERS = [
    (Severity.CRITICAL, ("murder", "homicide", "kidnapping")),
    (Severity.HIGH, ("assault", "robbery", "burglary")),
    (Severity.MEDIUM, ("theft", "drug", "dui")),
]

NO_CHARGES = "Charges not specified"
DEFAULT_TIME = "00:00"

LineValue = Union[str, int, None]


def is_name_line(line: str) -> bool:
    """
    Check if a line opens a new record.

    A name line is all uppercase letters and spaces (plus name punctuation),
    5 to 50 characters long, contains no whole charge or place word, and
    is not a report heading such as "ARREST LOG REPORT" or "NAME AGE
    CHARGES". Keywords inside a longer word do not count, so "DUIGNAN
    PATRICK" and "JIMMY PAGE" are names.

    Args:
        line: Trimmed line

    Returns:
        True if the line is a name line
    """
    if not 5 <= len(line) <= 50 or not NAME_REGEX.match(line):
        return False
    if NAME_CHARGE_HINT.search(line) or NAME_LOCATION_HINT.search(line):
        return False
    return not HEADER_LINE.fullmatch(line)


def normalize_date(month: str, day: str, year: str) -> Optional[str]:
    """
    Normalize date parts to YYYY-MM-DD.

    Returns None for impossible dates such as 13/45/2024.
    """
    try:
        return datetime(int(year), int(month), int(day)).date().isoformat()
    except ValueError:
        logger.debug(f"Ignoring invalid date {month}/{day}/{year}")
        return None


def classify_line(line: str) -> Tuple[LineKind, LineValue]:
    """
    Classify one trimmed bulletin line.

    Checks run in a fixed order and the first match wins, so a line fills
    at most one field.

    Args:
        line: Trimmed, non-blank line

    Returns:
        Tuple of (kind, captured value)
    """
    if is_name_line(line):
        return LineKind.NAME, line

    m = BOOKING_REGEX.search(line)
    if m:
        return LineKind.BOOKING, m.group("booking").upper()

    m = DATE_REGEX.search(line)
    if m:
        return LineKind.DATE, normalize_date(m.group("month"), m.group("day"), m.group("year"))

    m = TIME_REGEX.search(line)
    if m:
        return LineKind.TIME, re.sub(r"\s+", " ", m.group("time")).upper()

    m = AGE_REGEX.search(line)
    if m:
        return LineKind.AGE, int(m.group("age") or m.group("yrs"))

    if ADDRESS_REGEX.search(line):
        return LineKind.ADDRESS, line

    if CHARGE_HINT.search(line):
        return LineKind.CHARGE, line

    if LOCATION_HINT.search(line):
        return LineKind.LOCATION, line

    return LineKind.OTHER, line


def determine_severity(charges: List[str]) -> Severity:
    """
    Derive the severity tier from charge text.

    The highest tier with a keyword present wins; no match is low.

    Args:
        charges: Charge descriptions

    Returns:
        Severity tier
    """
    charge_text = " ".join(c for c in charges if c).lower()
    for severity, keywords in SEVERITY_TIERS:
        if any(keyword in charge_text for keyword in keywords):
            return severity
    return Severity.LOW


def _epoch_ms(now: datetime) -> int:
    return int(now.timestamp() * 1000)


def finalize_record(draft: Dict, index: int, cfg: Optional[Config] = None,
                    now: Optional[datetime] = None, used_ids: Optional[set] = None) -> ArrestRecord:
    """
    Fill defaults on an in-progress record.

    Args:
        draft: Fields captured so far; must contain "name"
        index: Position of the record within the batch
        cfg: Configuration
        now: Ingestion time, defaults to the current time
        used_ids: Identifiers already issued in this batch

    Returns:
        Finished record
    """
    cfg = cfg or Config()
    now = now or datetime.now()
    stamp = _epoch_ms(now)

    charges = list(draft.get("charges") or []) or [NO_CHARGES]
    booking_number = draft.get("booking_number")

    record_id = booking_number
    if not record_id or (used_ids is not None and record_id in used_ids):
        record_id = f"arrest_{stamp}_{index}"
    if used_ids is not None:
        used_ids.add(record_id)

    record: ArrestRecord = {
        "id": record_id,
        "name": draft.get("name") or "Name Unknown",
        "arrest_date": draft.get("arrest_date") or now.date().isoformat(),
        "arrest_time": draft.get("arrest_time") or DEFAULT_TIME,
        "location": draft.get("location") or cfg.bulletin.default_location,
        "charges": charges,
        "agency": cfg.bulletin.agency,
        "county": cfg.bulletin.county,
        "booking_number": booking_number or f"BK{str(stamp)[-8:]}",
        "status": "Active",
        "severity": determine_severity(charges).value,
        "age": draft.get("age"),
        "address": draft.get("address"),
    }
    return record


def parse_arrest_text(text: str, cfg: Optional[Config] = None, now: Optional[datetime] = None) -> List[ArrestRecord]:
    """
    Extract arrest records from bulletin text.

    Lines before the first name line are ignored. Malformed input yields
    fewer or sparser records, never an exception.

    Args:
        text: Plain text of the bulletin
        cfg: Configuration
        now: Ingestion time used for defaults

    Returns:
        Records in document order
    """
    cfg = cfg or Config()
    now = now or datetime.now()
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]

    records: List[ArrestRecord] = []
    used_ids: set = set()
    current: Optional[Dict] = None

    logger.info(f"Parsing {len(lines)} bulletin lines")

    for line in lines:
        kind, value = classify_line(line)
        logger.debug(f"{kind.value}: {line}")

        if kind == LineKind.NAME:
            if current is not None:
                records.append(finalize_record(current, len(records), cfg, now, used_ids))
            current = {"name": value, "charges": []}
            continue

        if current is None:
            continue

        if kind == LineKind.BOOKING:
            current["booking_number"] = value
        elif kind == LineKind.DATE:
            if value and not current.get("arrest_date"):
                current["arrest_date"] = value
        elif kind == LineKind.TIME:
            if not current.get("arrest_time"):
                current["arrest_time"] = value
        elif kind == LineKind.AGE:
            current["age"] = value
        elif kind == LineKind.ADDRESS:
            current["address"] = value
        elif kind == LineKind.CHARGE:
            current["charges"].append(value)
        elif kind == LineKind.LOCATION:
            if not current.get("location"):
                current["location"] = value

    if current is not None:
        records.append(finalize_record(current, len(records), cfg, now, used_ids))

    logger.info(f"Extracted {len(records)} arrest records")
    return records


def parse_index_table(html: str, cfg: Optional[Config] = None, now: Optional[datetime] = None) -> List[ArrestRecord]:
    """
    Extract arrest records from table rows on the bulletin index page.

    Lower-fidelity fallback: the first three cells of each row hold name,
    charges and booking number.

    Args:
        html: Index page markup
        cfg: Configuration
        now: Ingestion time used for defaults

    Returns:
        Records in row order
    """
    cfg = cfg or Config()
    now = now or datetime.now()
    soup = BeautifulSoup(html or "", "html.parser")

    records: List[ArrestRecord] = []
    used_ids: set = set()

    for index, row in enumerate(soup.select("table tr")):
        cells = row.find_all("td")
        if len(cells) < 3:
            continue

        name = cells[0].get_text(" ", strip=True)
        charges = cells[1].get_text(" ", strip=True)
        booking = cells[2].get_text(" ", strip=True)

        if not name or len(name) <= 3:
            continue

        draft = {
            "name": name,
            "charges": [charges] if charges else [],
            "booking_number": booking or None,
        }
        records.append(finalize_record(draft, index, cfg, now, used_ids))

    logger.info(f"Extracted {len(records)} arrest records from index table")
    return records
