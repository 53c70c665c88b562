"""
Bulletin locator.

Scans the publisher's arrest-log index page for document links and picks the
most recently published one.
"""

import os
import re
from datetime import datetime
from typing import List, Optional, Tuple
from urllib.parse import unquote, urljoin, urlparse

from bs4 import BeautifulSoup

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import BulletinReference, FetchError
from bailx.web import fetch_text

logger = get_logger(__name__)

MONTHS = {
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
}

# HPD files are named YYYY-MM-DD-HH-MM-SS_Arrest_Log.pdf
ISO_LINK_DATE = re.compile(
    r"(?<!\d)(?P<year>\d{4})[-_](?P<month>\d{1,2})[-_](?P<day>\d{1,2})"
    r"(?:[-_](?P<hour>\d{2})[-_](?P<minute>\d{2})[-_](?P<second>\d{2}))?(?!\d)"
)
SLASH_LINK_DATE = re.compile(r"(?<!\d)(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})(?!\d)")
LONG_LINK_DATE = re.compile(r"\b(?P<month>[A-Za-z]{3,9})\.?\s+(?P<day>\d{1,2}),?\s+(?P<year>\d{4})\b")


def _build_date(year: str, month, day: str, hour=None, minute=None, second=None) -> Optional[datetime]:
    try:
        return datetime(int(year), int(month), int(day), int(hour or 0), int(minute or 0), int(second or 0))
    except ValueError:
        return None


def infer_link_date(text: str) -> Optional[datetime]:
    """
    Infer a publication date from link text or a filename.

    Recognises YYYY-MM-DD / YYYY_MM_DD (optionally followed by -HH-MM-SS),
    M/D/YYYY and "Month D, YYYY".

    Args:
        text: Link text or filename

    Returns:
        Date with the time of day when the name carries one, otherwise
        midnight. None when no pattern matches
    """
    if not text:
        return None

    m = ISO_LINK_DATE.search(text)
    if m:
        found = (_build_date(m.group("year"), m.group("month"), m.group("day"),
                             m.group("hour"), m.group("minute"), m.group("second"))
                 or _build_date(m.group("year"), m.group("month"), m.group("day")))
        if found:
            return found

    m = SLASH_LINK_DATE.search(text)
    if m:
        found = _build_date(m.group("year"), m.group("month"), m.group("day"))
        if found:
            return found

    for m in LONG_LINK_DATE.finditer(text):
        month = MONTHS.get(m.group("month").lower())
        if month:
            found = _build_date(m.group("year"), month, m.group("day"))
            if found:
                return found

    return None


def _is_candidate(href: str, text: str, cfg: Config) -> bool:
    path = urlparse(href).path.lower()
    if any(path.endswith(ext) for ext in cfg.bulletin.document_extensions):
        return True
    haystack = f"{text} {href}".lower()
    return any(keyword in haystack for keyword in cfg.bulletin.link_keywords)


def collect_candidates(html: str, base_url: str, cfg: Optional[Config] = None,
                       now: Optional[datetime] = None) -> List[BulletinReference]:
    """
    Collect bulletin links from an index page.

    Args:
        html: Index page markup
        base_url: URL the page was fetched from; relative links resolve
            against its origin
        cfg: Configuration
        now: Timestamp given to links without a recognisable date

    Returns:
        Candidates in page order
    """
    cfg = cfg or Config()
    now = now or datetime.now()
    parsed = urlparse(base_url)
    origin = f"{parsed.scheme}://{parsed.netloc}/"
    soup = BeautifulSoup(html or "", "html.parser")
    candidates = []
    seen = set()

    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        if not href or href.startswith("#") or href.lower().startswith(("mailto:", "javascript:")):
            continue

        text = link.get_text(" ", strip=True)
        if not _is_candidate(href, text, cfg):
            continue

        url = urljoin(origin, href)
        if url in seen:
            continue
        seen.add(url)

        filename = unquote(os.path.basename(urlparse(url).path)) or text or url
        timestamp = infer_link_date(text)
        file_timestamp = infer_link_date(filename)
        # Filenames carry the time of day that link text usually omits
        if timestamp is None or (file_timestamp and file_timestamp.date() == timestamp.date()):
            timestamp = file_timestamp or timestamp
        candidates.append(BulletinReference(
            url=url,
            filename=filename,
            timestamp=timestamp or now,
            date_inferred=timestamp is not None,
        ))

    logger.debug(f"Found {len(candidates)} bulletin candidates on {base_url}")
    return candidates


def select_latest(candidates: List[BulletinReference]) -> Optional[BulletinReference]:
    """Return the candidate with the newest timestamp, first one on ties."""
    if not candidates:
        return None
    return sorted(candidates, key=lambda c: c.timestamp, reverse=True)[0]


def fetch_index(cfg: Config) -> Tuple[str, str]:
    """
    Fetch the configured index page.

    Returns:
        Tuple of (markup, url)

    Raises:
        FetchError: On network failure or a non-success status
    """
    url = cfg.bulletin.index_url
    logger.info(f"Fetching bulletin index {url}")
    return fetch_text(url, cfg, timeout=cfg.http.index_timeout), url


def find_latest_bulletin(cfg: Optional[Config] = None, now: Optional[datetime] = None) -> Optional[BulletinReference]:
    """
    Find the most recently published bulletin.

    Links without a date in their text are stamped with the current time and
    therefore rank as newest.

    Args:
        cfg: Configuration
        now: Current time override

    Returns:
        The newest bulletin, or None when none is available or the index
        page could not be fetched
    """
    cfg = cfg or Config()

    try:
        html, url = fetch_index(cfg)
    except FetchError as e:
        logger.error(f"Error fetching bulletin index: {e}")
        return None

    latest = select_latest(collect_candidates(html, url, cfg, now))
    if latest is None:
        logger.info("No bulletin links found on index page")
    else:
        logger.info(f"Found bulletin: {latest.filename} ({latest.timestamp.isoformat()})")
    return latest
