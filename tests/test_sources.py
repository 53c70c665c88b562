"""
Tests for the court source module.
"""

import warnings
from unittest.mock import patch

import pytest
import requests
from bs4 import XMLParsedAsHTMLWarning

from bailx.config import CourtSourceConfig
from bailx.model import FetchError
from bailx.names import parse_client_name
from bailx.sources import (
    MISSING_DATE_AND_CASE,
    HtmlCourtSource,
    PublicRecordsSource,
    RssCourtSource,
    build_source,
    make_hearing_record,
    normalize_case_type,
    normalize_hearing_date,
    parse_hearing_table,
    parse_rss_feed,
)


@pytest.mark.parametrize("value,expected", [
    ("03/20/2024", "2024-03-20"),
    ("Hearing on 4/5/2024 at 9", "2024-04-05"),
    ("2024-04-15", "2024-04-15"),
    ("13/45/2024", None),
    ("TBD", None),
    (None, None),
])
def test_normalize_hearing_date(value, expected):
    """Test hearing date normalisation."""
    assert normalize_hearing_date(value) == expected


@pytest.mark.parametrize("value,expected", [
    ("Criminal", "criminal"),
    ("TRAFFIC INFRACTION", "traffic"),
    ("Civil", "civil"),
    ("CR-2024-001895", "criminal"),
    ("Probate", None),
    (None, None),
])
def test_normalize_case_type(value, expected):
    """Test case type normalisation."""
    assert normalize_case_type(value) == expected


def test_make_hearing_record_flags_low_value():
    """Test that a record with no date and no case number is flagged."""
    record = make_hearing_record("John Smith", "Test Court")

    assert record["source"] == "Test Court"
    assert record["status"] == "scheduled"
    assert record["warnings"] == [MISSING_DATE_AND_CASE]


def test_parse_hearing_table(judiciary_html):
    """Test parsing a judiciary results table."""
    records = parse_hearing_table(judiciary_html, "Travis Hong-Ah Nee", "Hawaii State Judiciary")

    assert len(records) == 2
    first, second = records
    assert first["name"] == "Travis Hong-Ah Nee"
    assert first["case_number"] == "CR-2024-001895"
    assert first["hearing_date"] == "2024-03-20"
    assert first["hearing_time"] == "9:00 AM"
    assert first["location"] == "Circuit Court Room 3A"
    assert first["case_type"] == "criminal"
    assert first["charges"] == "Theft in the Second Degree"
    assert first["status"] == "Scheduled"
    assert first["source"] == "Hawaii State Judiciary"
    assert first["warnings"] == []
    assert second["hearing_date"] == "2024-04-15"
    assert second["status"] == "Pending"


def test_parse_hearing_table_without_name_column():
    """Test that rows without a name cell take the searched name."""
    html = """
    <table>
      <tr><th>Case No.</th><th>Date</th></tr>
      <tr><td>1DTC-24-012345</td><td>6/1/2024</td></tr>
    </table>
    """
    records = parse_hearing_table(html, "Nee, Travis", "Honolulu County Court")

    assert len(records) == 1
    assert records[0]["name"] == "Nee, Travis"
    assert records[0]["case_number"] == "1DTC-24-012345"
    assert records[0]["hearing_date"] == "2024-06-01"


@pytest.mark.parametrize("html", [
    "",
    "<html><body><p>No results found</p></body></html>",
    "<table><tr><th>Name</th><th>Notes</th></tr><tr><td>X</td><td>Y</td></tr></table>",
    "<table><tr><td>unclosed",
])
def test_parse_hearing_table_unrecognised_markup(html):
    """Test that markup without a result table yields zero hits."""
    assert parse_hearing_table(html, "Travis Nee", "Test Court") == []


def test_parse_rss_feed(sample_rss):
    """Test extracting client items from a docket feed."""
    client = parse_client_name("Travis Hong-Ah Nee")

    records = parse_rss_feed(sample_rss, client, "Hawaii Federal District Court")

    assert len(records) == 1
    record = records[0]
    assert record["name"] == "Travis Hong-Ah Nee"
    assert record["case_number"] == "1:24-cr-00012"
    assert record["hearing_date"] == "2024-05-02"
    assert record["case_type"] == "criminal"
    assert record["status"] == "Active"
    assert record["location"] == "Hawaii Federal District Court"
    assert record["source"] == "Hawaii Federal District Court"


def test_parse_rss_feed_uses_pub_date_and_truncates():
    """Test the pubDate fallback and description truncation."""
    description = "Minute entry " + "x" * 120
    xml = f"""
    <rss><channel>
      <item>
        <title>1:24-cv-00777 Smith v. State of Hawaii</title>
        <description>{description}</description>
        <pubDate>Wed, 01 May 2024 08:00:00 GMT</pubDate>
      </item>
    </channel></rss>
    """

    records = parse_rss_feed(xml, parse_client_name("John Smith"), "Federal")

    assert len(records) == 1
    assert records[0]["hearing_date"] == "2024-05-01"
    assert records[0]["case_type"] == "civil"
    assert records[0]["charges"] == description[:100] + "..."


def test_parse_rss_feed_emits_no_parser_warning(sample_rss):
    """Test that reading an XML feed with the HTML parser stays quiet."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        records = parse_rss_feed(sample_rss, parse_client_name("Travis Hong-Ah Nee"), "Federal")

    assert len(records) == 1
    assert not [w for w in caught if issubclass(w.category, XMLParsedAsHTMLWarning)]


def test_parse_rss_feed_no_match(sample_rss):
    """Test a feed that never mentions the client."""
    assert parse_rss_feed(sample_rss, parse_client_name("Mary Kealoha"), "Federal") == []


@patch("bailx.web.requests.get")
def test_html_source_search(mock_get, sample_config, judiciary_html, response_factory):
    """Test querying an HTML source."""
    mock_get.return_value = response_factory(judiciary_html)
    source = HtmlCourtSource(
        CourtSourceConfig(name="Hawaii State Judiciary", url="https://www.courts.state.hi.us/", search_path="/search"),
        sample_config,
    )

    records = source.search("Nee, Travis")

    assert len(records) == 2
    args, kwargs = mock_get.call_args
    assert args[0] == "https://www.courts.state.hi.us/search"
    assert kwargs["params"] == {"name": "Nee, Travis"}
    assert kwargs["timeout"] == sample_config.http.source_timeout
    assert "Mozilla/5.0" in kwargs["headers"]["User-Agent"]


@patch("bailx.web.requests.get")
def test_html_source_http_error(mock_get, sample_config, response_factory):
    """Test that a non-success status raises FetchError."""
    mock_get.return_value = response_factory("Server Error", status_code=503)
    source = HtmlCourtSource(CourtSourceConfig(name="Down Court", url="https://down.example"), sample_config)

    with pytest.raises(FetchError, match="status: 503"):
        source.search("Travis Nee")


@patch("bailx.web.requests.get")
def test_html_source_timeout(mock_get, sample_config):
    """Test that a timeout raises FetchError."""
    mock_get.side_effect = requests.exceptions.Timeout("read timed out")
    source = HtmlCourtSource(CourtSourceConfig(name="Slow Court", url="https://slow.example"), sample_config)

    with pytest.raises(FetchError, match="Timeout"):
        source.search("Travis Nee")


@patch("bailx.web.requests.get")
def test_rss_source_search(mock_get, sample_config, sample_rss, response_factory):
    """Test querying an RSS source."""
    mock_get.return_value = response_factory(sample_rss)
    source = RssCourtSource(
        CourtSourceConfig(name="Federal", url="https://ecf.example", search_path="/rss", type="rss"),
        sample_config,
    )

    records = source.search("Travis Hong-Ah Nee")

    assert len(records) == 1
    kwargs = mock_get.call_args[1]
    assert kwargs["params"] is None
    assert "rss" in kwargs["headers"]["Accept"]


def test_build_source(sample_config):
    """Test mapping configured types to source classes."""
    built = [build_source(s, sample_config) for s in sample_config.resolver.sources]
    aggregator = build_source(sample_config.resolver.public_records, sample_config)

    assert [type(s) for s in built] == [HtmlCourtSource, RssCourtSource, HtmlCourtSource, HtmlCourtSource]
    assert isinstance(aggregator, PublicRecordsSource)
    assert built[1].searches_by_name is False
    assert built[0].endpoint == "https://www.courts.state.hi.us/search"


def test_build_source_unknown_type(sample_config):
    """Test that an unknown type is rejected."""
    with pytest.raises(ValueError, match="Unknown court source type"):
        build_source(CourtSourceConfig(name="X", url="https://x.example", type="soap"), sample_config)
