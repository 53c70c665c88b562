"""
Output writers for bailx.
"""

import csv
import json
import os
import re
from typing import Dict, List, Mapping, Sequence

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import OutputError, Severity

logger = get_logger(__name__)

ARREST = "arrest"
HEARING = "hearing"

ARREST_FIELDS = ["id", "name", "arrest_date", "arrest_time", "location", "charge", "severity",
                 "agency", "county", "booking_number", "status", "age", "address"]
HEARING_FIELDS = ["name", "case_number", "hearing_date", "hearing_time", "location", "case_type",
                  "charges", "status", "source"]

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SEVERITIES = {s.value for s in Severity}


def write_outputs(records: Sequence[Mapping], cfg: Config, kind: str = ARREST) -> None:
    """
    Write records to all configured output formats.

    Args:
        records: Arrest or hearing records
        cfg: Application configuration
        kind: "arrest" or "hearing"
    """
    logger.info(f"Writing {len(records)} {kind} records to outputs")

    for error in validate_records(records, kind):
        logger.warning(f"Validation error: {error}")

    if cfg.output.json_path:
        write_json(records, cfg.output.json_path, cfg.output.pretty_json)

    if cfg.output.csv_path:
        write_csv(records, cfg.output.csv_path, kind)

    if cfg.output.ndjson_path:
        write_ndjson(records, cfg.output.ndjson_path)


def _ensure_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)


def write_json(records: Sequence[Mapping], path: str, pretty: bool = True) -> None:
    """
    Write records to a JSON file.

    Args:
        records: Records to write
        path: Output file path
        pretty: Whether to pretty-print the JSON
    """
    logger.info(f"Writing JSON to {path}")

    try:
        _ensure_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(list(records), f, indent=2 if pretty else None, ensure_ascii=False)
        logger.info(f"Wrote {len(records)} records to {path}")
    except Exception as e:
        logger.error(f"Error writing JSON to {path}: {e}")
        raise OutputError(f"Error writing JSON to {path}: {e}")


def _arrest_rows(records: Sequence[Mapping]) -> List[Dict]:
    rows = []
    for record in records:
        base = {field: record.get(field, "") for field in ARREST_FIELDS if field != "charge"}
        # One row per charge
        for charge in record.get("charges", []) or [""]:
            row = dict(base)
            row["charge"] = charge
            rows.append(row)
    return rows


def _hearing_rows(records: Sequence[Mapping]) -> List[Dict]:
    return [{field: record.get(field, "") for field in HEARING_FIELDS} for record in records]


def write_csv(records: Sequence[Mapping], path: str, kind: str = ARREST) -> None:
    """
    Write records to a CSV file.

    Arrest records produce one row per charge; hearing records one row each.

    Args:
        records: Records to write
        path: Output file path
        kind: "arrest" or "hearing"
    """
    logger.info(f"Writing CSV to {path}")

    if kind == ARREST:
        fieldnames, rows = ARREST_FIELDS, _arrest_rows(records)
    elif kind == HEARING:
        fieldnames, rows = HEARING_FIELDS, _hearing_rows(records)
    else:
        raise OutputError(f"Unknown record kind: {kind}")

    try:
        _ensure_dir(path)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            for row in rows:
                writer.writerow({k: "" if v is None else v for k, v in row.items()})
        logger.info(f"Wrote {len(rows)} rows to {path}")
    except Exception as e:
        logger.error(f"Error writing CSV to {path}: {e}")
        raise OutputError(f"Error writing CSV to {path}: {e}")


def write_ndjson(records: Sequence[Mapping], path: str) -> None:
    """
    Write records to an NDJSON file, one record per line.

    Args:
        records: Records to write
        path: Output file path
    """
    logger.info(f"Writing NDJSON to {path}")

    try:
        _ensure_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
        logger.info(f"Wrote {len(records)} lines to {path}")
    except Exception as e:
        logger.error(f"Error writing NDJSON to {path}: {e}")
        raise OutputError(f"Error writing NDJSON to {path}: {e}")


def validate_records(records: Sequence[Mapping], kind: str = ARREST) -> List[str]:
    """
    Validate records before writing outputs.

    Args:
        records: Records to validate
        kind: "arrest" or "hearing"

    Returns:
        List of validation errors
    """
    errors = []

    if kind == ARREST:
        seen_ids = set()
        for i, record in enumerate(records):
            if not record.get("name"):
                errors.append(f"Record {i}: Missing name")
            if record.get("id") in seen_ids:
                errors.append(f"Record {i}: Duplicate id: {record.get('id')}")
            seen_ids.add(record.get("id"))
            if not record.get("charges"):
                errors.append(f"Record {i}: No charges")
            if record.get("severity") not in SEVERITIES:
                errors.append(f"Record {i}: Invalid severity: {record.get('severity')}")
            arrest_date = record.get("arrest_date")
            if arrest_date and not ISO_DATE.match(arrest_date):
                errors.append(f"Record {i}: Invalid arrest date format: {arrest_date}")
    else:
        for i, record in enumerate(records):
            if not record.get("name"):
                errors.append(f"Record {i}: Missing name")
            if not record.get("source"):
                errors.append(f"Record {i}: Missing source")
            hearing_date = record.get("hearing_date")
            if hearing_date and not ISO_DATE.match(hearing_date):
                errors.append(f"Record {i}: Invalid hearing date format: {hearing_date}")

    return errors


def redact_records(records: Sequence[Mapping], redact_address: bool = False) -> List[Dict]:
    """
    Redact sensitive information from records.

    Args:
        records: Records to redact
        redact_address: Whether to redact street addresses

    Returns:
        Redacted copies
    """
    logger.info(f"Redacting records (redact_address={redact_address})")

    redacted = []
    for record in records:
        copy = dict(record)
        if redact_address and copy.get("address"):
            copy["address"] = "[REDACTED]"
        redacted.append(copy)
    return redacted
