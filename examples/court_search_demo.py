#!/usr/bin/env python3
"""
Demonstration of the court date resolver.

Searches the configured court sources for a client and prints each hearing
found, followed by the raw JSON result.
"""

import json
import sys

from bailx.config import load_config
from bailx.court import search_court_dates
from bailx.log import configure_logging
from bailx.names import filter_matching


def main() -> int:
    name = sys.argv[1] if len(sys.argv) > 1 else "Travis Hong-Ah Nee"

    config = load_config()
    configure_logging(config)

    result = search_court_dates(name, {"max_results": 20}, config)
    print(f"\n{result.get_summary_message()}")

    for i, record in enumerate(filter_matching(result.hearing_records, name), 1):
        print(f"\n--- Hearing {i} ---")
        print(f"Case #: {record.get('case_number') or '-'}")
        print(f"Date: {record.get('hearing_date') or '-'} {record.get('hearing_time') or ''}")
        print(f"Location: {record.get('location') or '-'}")
        print(f"Source: {record['source']}")
        for warning in record.get("warnings", []):
            print(f"Warning: {warning}")

    print("\nRaw JSON:")
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
