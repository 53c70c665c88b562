"""
Configuration module for bailx.
"""

import json
import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class HttpConfig(BaseModel):
    """
    Configuration for outbound HTTP requests.
    """

    user_agent: str = DEFAULT_USER_AGENT  # Browser-like User-Agent sent with every request
    accept_html: str = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    accept_rss: str = "application/rss+xml, application/xml, text/xml"
    index_timeout: float = 30.0  # Seconds, bulletin index page
    document_timeout: float = 60.0  # Seconds, bulletin document download
    source_timeout: float = 30.0  # Seconds, per court source query


class CourtSourceConfig(BaseModel):
    """
    Configuration for one external court-record source.
    """

    name: str  # Display name, used as the record source label
    url: str  # Base URL
    search_path: str = "/search"  # Path appended to the base URL
    type: str = "html"  # html / rss / public_records
    name_param: str = "name"  # Query parameter carrying the searched name
    enabled: bool = True


def _default_court_sources() -> List[CourtSourceConfig]:
    return [
        CourtSourceConfig(
            name="Hawaii State Judiciary",
            url="https://www.courts.state.hi.us",
            search_path="/search",
        ),
        CourtSourceConfig(
            name="Hawaii Federal District Court",
            url="https://ecf.hid.uscourts.gov",
            search_path="/cgi-bin/rss_outside.pl",
            type="rss",
        ),
        CourtSourceConfig(
            name="Honolulu County Court",
            url="https://www.honolulucourt.org",
            search_path="/case-search",
        ),
        CourtSourceConfig(
            name="Hawaii Criminal Cases",
            url="https://www.hawaiicriminalcases.com",
            search_path="/search",
        ),
    ]


def _default_public_records() -> CourtSourceConfig:
    return CourtSourceConfig(
        name="Hawaii Public Records",
        url="https://www.publicrecordsnow.com",
        search_path="/search",
        type="public_records",
    )


class ResolverConfig(BaseModel):
    """
    Configuration for the court date resolver.
    """

    sources: List[CourtSourceConfig] = Field(default_factory=_default_court_sources)
    public_records: Optional[CourtSourceConfig] = Field(default_factory=_default_public_records)
    request_delay: float = 1.0  # Seconds slept between sources
    max_results: Optional[int] = None  # Truncation cap on the final record list
    state: str = "Hawaii"
    county: str = "Honolulu"


class BulletinConfig(BaseModel):
    """
    Configuration for the arrest-log bulletin locator and extractor.
    """

    index_url: str = "https://www.honolulupd.org/information/arrest-logs/"
    document_extensions: List[str] = [".pdf", ".doc", ".docx", ".xls", ".xlsx", ".txt", ".csv"]
    link_keywords: List[str] = ["arrest", "booking"]
    max_document_bytes: int = 10 * 1024 * 1024  # 10 MiB
    agency: str = "Honolulu Police Department"
    county: str = "Honolulu"
    default_location: str = "Honolulu, HI"
    ocr_fallback: bool = False  # Whether to OCR pages without a text layer
    ocr_lang: str = "eng"


class OutputConfig(BaseModel):
    """
    Configuration for output.
    """

    json_path: Optional[str] = "./out/records.json"  # JSON output path
    csv_path: Optional[str] = "./out/records.csv"  # CSV output path
    ndjson_path: Optional[str] = None  # NDJSON output path (disabled by default)
    pretty_json: bool = True  # Whether to pretty-print JSON


class LoggingConfig(BaseModel):
    """
    Configuration for logging.
    """

    level: str = "INFO"  # Logging level (DEBUG/INFO/WARN/ERROR)


class Config(BaseModel):
    """
    Main configuration.
    """

    http: HttpConfig = Field(default_factory=HttpConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    bulletin: BulletinConfig = Field(default_factory=BulletinConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Optional[str] = None) -> Config:
    """
    Load configuration from a file.

    Args:
        path: Path to the configuration file

    Returns:
        Configuration object
    """
    if path:
        with open(path, "r") as f:
            if path.endswith(".yaml") or path.endswith(".yml"):
                config_dict = yaml.safe_load(f)
            elif path.endswith(".json"):
                config_dict = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {path}")

        return Config(**(config_dict or {}))

    default_locations = [
        "./config.yaml",
        "./config.yml",
        "./config.json",
        os.path.expanduser("~/.config/bailx/config.yaml"),
    ]

    for loc in default_locations:
        if os.path.exists(loc):
            return load_config(loc)

    return Config()
