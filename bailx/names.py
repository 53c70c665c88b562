"""
Client name handling for court record searches.
"""

import re
from typing import Iterable, List

from bailx.model import ClientName, HearingRecord


def parse_client_name(full_name: str) -> ClientName:
    """
    Split a free-text full name into first, middle and last components.

    The first token is the first name, the last token the last name and any
    interior tokens form the middle name. A single token yields a first name
    only.

    Args:
        full_name: Name such as "Travis Hong-Ah Nee"

    Returns:
        Name components
    """
    trimmed = (full_name or "").strip()
    parts = trimmed.split()

    return {
        "first_name": parts[0] if parts else "",
        "middle_name": " ".join(parts[1:-1]) if len(parts) > 2 else "",
        "last_name": parts[-1] if len(parts) > 1 else "",
        "full_name": trimmed,
    }


def name_variants(components: ClientName) -> List[str]:
    """
    Build the ordered set of name forms sent to each source.

    The middle name is dropped in the "First Last" form to widen recall.

    Args:
        components: Parsed client name

    Returns:
        De-duplicated list of search strings
    """
    first = components["first_name"]
    last = components["last_name"]

    candidates = [components["full_name"]]
    if first and last:
        candidates.append(f"{last}, {first}")
        candidates.append(f"{first} {last}")

    variants = []
    for candidate in candidates:
        if candidate and candidate not in variants:
            variants.append(candidate)
    return variants


def _tokens(name: str) -> List[str]:
    return [t for t in re.split(r"[\s,]+", (name or "").lower()) if t]


def name_matches(record_name: str, client_name: str) -> bool:
    """
    Coarse check that a discovered record name belongs to the client.

    Both names are tokenized; the check passes when a client token appears
    in the record for the first-name position and for the last-name
    position. Any single overlapping token satisfies both, so common
    surnames produce false positives.

    Args:
        record_name: Name printed on the discovered record
        client_name: Name that was searched for

    Returns:
        True if the names overlap
    """
    client_parts = _tokens(client_name)
    found_parts = _tokens(record_name)

    first_name_match = any(part in found_parts for part in client_parts)
    last_name_match = any(part in found_parts for part in client_parts)

    return first_name_match and last_name_match


def filter_matching(records: Iterable[HearingRecord], client_name: str) -> List[HearingRecord]:
    """Keep the records whose name passes name_matches."""
    return [r for r in records if name_matches(r.get("name", ""), client_name)]
