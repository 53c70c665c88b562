"""
Pytest configuration and fixtures.
"""

import os
import tempfile
from datetime import datetime
from typing import List
from unittest import mock

import pytest

from bailx.config import Config
from bailx.model import ArrestRecord, HearingRecord


@pytest.fixture
def sample_config() -> Config:
    """Return a configuration with no politeness delay."""
    config = Config()
    config.resolver.request_delay = 0
    return config


@pytest.fixture
def fixed_now() -> datetime:
    """Return a fixed ingestion time."""
    return datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def sample_bulletin_text() -> str:
    """Return the text of a two-entry bulletin."""
    return "\n".join([
        "HONOLULU POLICE DEPARTMENT",
        "ARREST LOG REPORT",
        "",
        "KEALOHA JOHN K",
        "BOOKING #: 2024-001234",
        "03/15/2024",
        "14:35",
        "AGE: 34",
        "1234 KAPIOLANI BLVD",
        "ASSAULT 3RD DEGREE",
        "THEFT 2ND DEGREE",
        "",
        "SMITH MARY ANN",
        "BK: 2024-001235",
        "03/16/2024",
        "DRUG POSSESSION",
        "WAIKIKI HONOLULU",
    ])


@pytest.fixture
def sample_index_html() -> str:
    """Return an index page with three dated bulletin links."""
    return """
    <html><body>
      <h1>Arrest Logs</h1>
      <ul>
        <li><a href="/files/arrest-log-a.pdf">Arrest Log 2024-01-01</a></li>
        <li><a href="/files/arrest-log-b.pdf">Arrest Log 2024-03-15</a></li>
        <li><a href="/files/arrest-log-c.pdf">Arrest Log 2024-02-20</a></li>
        <li><a href="/about">About HPD</a></li>
      </ul>
    </body></html>
    """


@pytest.fixture
def sample_index_table_html() -> str:
    """Return an index page whose arrests are listed in a table."""
    return """
    <html><body>
      <table>
        <tr><th>Name</th><th>Charges</th><th>Booking</th></tr>
        <tr><td>KAHALE DAVID</td><td>Burglary 1st Degree</td><td>2024-009001</td></tr>
        <tr><td>ABC</td><td>Theft</td><td>2024-009002</td></tr>
        <tr><td>LEE SUSAN</td><td>Trespass</td><td></td></tr>
      </table>
    </body></html>
    """


@pytest.fixture
def judiciary_html() -> str:
    """Return a judiciary search-results page for Travis Hong-Ah Nee."""
    return """
    <html><body>
      <table class="results">
        <tr>
          <th>Party Name</th><th>Case Number</th><th>Hearing Date</th><th>Time</th>
          <th>Courtroom</th><th>Charge</th><th>Status</th>
        </tr>
        <tr>
          <td>Travis Hong-Ah Nee</td><td>CR-2024-001895</td><td>03/20/2024</td><td>9:00 AM</td>
          <td>Circuit Court Room 3A</td><td>Theft in the Second Degree</td><td>Scheduled</td>
        </tr>
        <tr>
          <td>Travis Hong-Ah Nee</td><td>CR-2024-001895</td><td>04/15/2024</td><td>1:30 PM</td>
          <td>Circuit Court Room 3A</td><td>Theft in the Second Degree</td><td>Pending</td>
        </tr>
      </table>
    </body></html>
    """


@pytest.fixture
def sample_rss() -> str:
    """Return a district court docket feed."""
    return """<?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0">
      <channel>
        <title>District of Hawaii - Recent Entries</title>
        <item>
          <title>District of Hawaii - Recent Entries</title>
          <description>Feed header</description>
        </item>
        <item>
          <title>1:24-cr-00012 USA v. Nee, Travis</title>
          <description>ARRAIGNMENT set for 5/2/2024 before Magistrate Judge</description>
          <pubDate>Mon, 22 Apr 2024 10:00:00 GMT</pubDate>
        </item>
        <item>
          <title>1:24-cv-00345 Doe v. Acme Corp</title>
          <description>Order granting motion to dismiss</description>
          <pubDate>Tue, 23 Apr 2024 10:00:00 GMT</pubDate>
        </item>
      </channel>
    </rss>
    """


@pytest.fixture
def sample_arrest_records() -> List[ArrestRecord]:
    """Return a list of finished arrest records."""
    return [
        {
            "id": "2024-001234",
            "name": "KEALOHA JOHN K",
            "arrest_date": "2024-03-15",
            "arrest_time": "14:35",
            "location": "Honolulu, HI",
            "charges": ["ASSAULT 3RD DEGREE", "THEFT 2ND DEGREE"],
            "agency": "Honolulu Police Department",
            "county": "Honolulu",
            "booking_number": "2024-001234",
            "status": "Active",
            "severity": "high",
            "age": 34,
            "address": "1234 KAPIOLANI BLVD",
        },
        {
            "id": "2024-001235",
            "name": "SMITH MARY ANN",
            "arrest_date": "2024-03-16",
            "arrest_time": "00:00",
            "location": "WAIKIKI HONOLULU",
            "charges": ["DRUG POSSESSION"],
            "agency": "Honolulu Police Department",
            "county": "Honolulu",
            "booking_number": "2024-001235",
            "status": "Active",
            "severity": "medium",
            "age": None,
            "address": None,
        },
    ]


@pytest.fixture
def sample_hearing_records() -> List[HearingRecord]:
    """Return a list of hearing records."""
    return [
        {
            "name": "Travis Hong-Ah Nee",
            "case_number": "CR-2024-001895",
            "hearing_date": "2024-03-20",
            "hearing_time": "9:00 AM",
            "location": "Circuit Court Room 3A",
            "case_type": "criminal",
            "charges": "Theft in the Second Degree",
            "status": "Scheduled",
            "source": "Hawaii State Judiciary",
            "warnings": [],
        },
    ]


def make_response(text: str = "", status_code: int = 200, content: bytes = b"", headers=None):
    """Build a mock requests.Response."""
    response = mock.MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = headers or {}
    response.iter_content.return_value = [content] if content else []
    return response


@pytest.fixture
def response_factory():
    """Return the mock response builder."""
    return make_response


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield tmp_dir


@pytest.fixture
def temp_file():
    """Create a temporary file."""
    with tempfile.NamedTemporaryFile(delete=False) as tmp:
        tmp_path = tmp.name

    yield tmp_path

    if os.path.exists(tmp_path):
        os.unlink(tmp_path)
