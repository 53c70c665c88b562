"""
Data models for bailx.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, TypedDict


class HearingRecord(TypedDict, total=False):
    """
    Represents one court appearance discovered for a named person.
    """

    name: str  # Subject name, always populated
    case_number: Optional[str]  # e.g. "CR-2024-001895" or "1:24-cr-00012"
    hearing_date: Optional[str]  # ISO 8601 format (YYYY-MM-DD), may be None
    hearing_time: Optional[str]  # Free text, e.g. "9:00 AM"
    location: Optional[str]  # Courtroom or court name
    case_type: Optional[str]  # criminal / traffic / civil
    charges: Optional[str]  # Charge description
    status: Optional[str]  # Free text: scheduled / pending / Active
    source: str  # Display name of the source that produced the record
    warnings: List[str]  # Quality flags


class ArrestRecord(TypedDict, total=False):
    """
    Represents one booking entry extracted from an arrest-log bulletin.
    """

    id: str  # Booking number, or a generated fallback unique within the batch
    name: str  # Name line as printed, e.g. "KEALOHA JOHN K"
    arrest_date: str  # ISO 8601 format (YYYY-MM-DD)
    arrest_time: str  # "H:MM" with optional AM/PM, "00:00" when unknown
    location: str
    charges: List[str]  # At least one entry
    agency: str
    county: str
    booking_number: str
    status: str  # Always "Active" at extraction time
    severity: str  # One of Severity values
    age: Optional[int]
    address: Optional[str]


class ClientName(TypedDict):
    """
    Components of a client's full name.
    """

    first_name: str
    middle_name: str
    last_name: str
    full_name: str


class Severity(str, Enum):
    """
    Coarse charge severity tiers.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LineKind(Enum):
    """
    Line classes recognised by the bulletin extractor.
    """

    NAME = "name"
    BOOKING = "booking"
    DATE = "date"
    TIME = "time"
    AGE = "age"
    ADDRESS = "address"
    CHARGE = "charge"
    LOCATION = "location"
    OTHER = "other"


class BulletinReference:
    """A discovered arrest-log bulletin document."""

    def __init__(self, url: str, filename: str, timestamp: datetime, date_inferred: bool = True):
        self.url = url
        self.filename = filename
        self.timestamp = timestamp
        # False when the timestamp fell back to "now"
        self.date_inferred = date_inferred

    def to_dict(self) -> Dict[str, Any]:
        """Convert reference to dictionary."""
        return {
            "url": self.url,
            "filename": self.filename,
            "timestamp": self.timestamp.isoformat(),
            "date_inferred": self.date_inferred,
        }

    def __repr__(self) -> str:
        return f"BulletinReference({self.filename!r}, {self.timestamp.isoformat()})"


class BailXError(Exception):
    """Base class for all bailx exceptions."""

    pass


class FetchError(BailXError):
    """Exception raised when an external fetch fails or returns a non-success status."""

    pass


class ParseError(BailXError):
    """Exception raised when a retrieved document cannot be decoded."""

    pass


class ConfigError(BailXError):
    """Exception raised for configuration errors."""

    pass


class OutputError(BailXError):
    """Exception raised for output errors."""

    pass
