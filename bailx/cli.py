"""
Command-line interface for bailx.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from bailx.config import load_config
from bailx.court import search_court_dates
from bailx.extractor import parse_arrest_text
from bailx.ingest import ingest_latest_bulletin
from bailx.locator import find_latest_bulletin
from bailx.log import configure_logging
from bailx.pdfio import extract_text
from bailx.writers import ARREST, HEARING, redact_records, write_outputs

logger = logging.getLogger(__name__)


def process_command(args: argparse.Namespace) -> int:
    """
    Process command-line arguments.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    config = load_config(args.config)
    configure_logging(config, args.log_level)

    if args.command == "court":
        options = {}
        if args.max_results is not None:
            options["max_results"] = args.max_results
        result = search_court_dates(args.name, options, config)

        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
        else:
            print(f"\n{result.get_summary_message()}")
            for i, record in enumerate(result.hearing_records, 1):
                print(f"\n--- Hearing {i} ---")
                print(f"Name: {record['name']}")
                print(f"Case #: {record.get('case_number') or '-'}")
                print(f"Date: {record.get('hearing_date') or '-'} {record.get('hearing_time') or ''}")
                print(f"Location: {record.get('location') or '-'}")
                print(f"Source: {record['source']}")
            for error in result.errors:
                print(f"! {error}")

        if args.write:
            write_outputs(result.hearing_records, config, HEARING)
        return 0 if result.success else 1

    elif args.command == "locate":
        bulletin = find_latest_bulletin(config)
        if bulletin is None:
            logger.error("No bulletin available")
            return 1
        print(json.dumps(bulletin.to_dict(), indent=2))
        return 0

    elif args.command == "ingest":
        result = ingest_latest_bulletin(config)
        records = redact_records(result.records, args.redact_address)
        if args.json:
            payload = result.to_dict()
            payload["records"] = records
            print(json.dumps(payload, indent=2))
        else:
            print(result.get_summary_message())
        if records:
            write_outputs(records, config, ARREST)
        return 0 if records or not result.errors else 1

    elif args.command == "parse":
        path = Path(args.file)
        if not path.is_file():
            logger.error(f"File not found: {path}")
            return 1

        text = extract_text(path.read_bytes(), path.name, config)
        records = redact_records(parse_arrest_text(text, config), args.redact_address)
        write_outputs(records, config, ARREST)
        logger.info(f"Processed {path.name}, extracted {len(records)} records")
        return 0

    logger.error("No command given")
    return 1


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(description="Court date and arrest-log extraction")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    court_parser = subparsers.add_parser("court", help="Search court sources for a client's hearings")
    court_parser.add_argument("name", help="Client full name (First Middle Last)")
    court_parser.add_argument("--max-results", type=int, help="Cap on returned records")
    court_parser.add_argument("--json", action="store_true", help="Output as JSON")
    court_parser.add_argument("--write", action="store_true", help="Write records to configured outputs")

    subparsers.add_parser("locate", help="Show the most recent arrest-log bulletin")

    ingest_parser = subparsers.add_parser("ingest", help="Ingest the most recent arrest-log bulletin")
    ingest_parser.add_argument("--json", action="store_true", help="Output as JSON")
    ingest_parser.add_argument("--redact-address", action="store_true", help="Redact address information")

    parse_parser = subparsers.add_parser("parse", help="Parse a local bulletin file")
    parse_parser.add_argument("file", help="Bulletin file (PDF, text or HTML)")
    parse_parser.add_argument("--redact-address", action="store_true", help="Redact address information")

    args = parser.parse_args()

    try:
        return process_command(args)
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
