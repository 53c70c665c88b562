#!/usr/bin/env python3
"""
Ingest the newest arrest-log bulletin and write the records.
"""

import os
import sys

from bailx import Config, ingest_latest_bulletin, write_csv, write_json
from bailx.log import configure_logging


def main():
    """
    Basic ingestion example.
    """
    os.makedirs("./out", exist_ok=True)

    cfg = Config()
    cfg.bulletin.ocr_fallback = True
    configure_logging(cfg)

    result = ingest_latest_bulletin(cfg)
    print(result.get_summary_message())
    if result.bulletin:
        print(f"Bulletin: {result.bulletin.url} ({result.method})")
    for error in result.errors:
        print(f"Error: {error}")

    if not result.records:
        return 1

    for record in result.records[:5]:
        print(f"{record['arrest_date']} {record['name']}: {', '.join(record['charges'])} [{record['severity']}]")

    write_json(result.records, "./out/arrests.json", pretty=True)
    print("Wrote JSON to ./out/arrests.json")

    write_csv(result.records, "./out/arrests.csv")
    print("Wrote CSV to ./out/arrests.csv")
    return 0


if __name__ == "__main__":
    sys.exit(main())
