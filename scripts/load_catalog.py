#!/usr/bin/env python3
"""
Bulk load a catalog JSON fixture into Supabase tables.

The fixture maps table names to lists of records, the same format the
memory backend reads (see data/sample_catalog.json).

Usage:
    # From project root, with venv active:
    PYTHONPATH=src python scripts/load_catalog.py data/sample_catalog.json

    # Dry run - just count records per table:
    PYTHONPATH=src python scripts/load_catalog.py data/sample_catalog.json --dry-run

    # Load a single table:
    PYTHONPATH=src python scripts/load_catalog.py data/sample_catalog.json --table diamonds
"""

import argparse
import json
import sys
import time
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from config.database import get_supabase_client


def load_fixture(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object of table -> records")
    return payload


def upsert_table(supabase, table: str, records: list, batch_size: int, retries: int) -> int:
    """Upsert records in batches. Returns the number of records written."""
    written = 0
    for i in range(0, len(records), batch_size):
        batch = records[i : i + batch_size]
        for attempt in range(1, retries + 1):
            try:
                supabase.table(table).upsert(batch).execute()
                written += len(batch)
                break
            except Exception as e:
                print(f"  [RETRY {attempt}/{retries}] {table} batch at {i}: {e}")
                if attempt == retries:
                    raise
                time.sleep(attempt)
    return written


def main():
    parser = argparse.ArgumentParser(description="Load a catalog fixture into Supabase")
    parser.add_argument("fixture", type=Path, help="JSON fixture (table -> records)")
    parser.add_argument("--dry-run", action="store_true", help="Just count, don't write")
    parser.add_argument("--table", type=str, help="Only load this table")
    parser.add_argument("--batch-size", type=int, default=200, help="Records per upsert (default 200)")
    parser.add_argument("--retries", type=int, default=3, help="Max retries per batch on failure")
    args = parser.parse_args()

    fixture = load_fixture(args.fixture)
    tables = {args.table: fixture.get(args.table, [])} if args.table else fixture

    print(f"Fixture: {args.fixture}")
    for table, records in tables.items():
        print(f"  {table}: {len(records)} records")

    if args.dry_run:
        print("\nDone (dry run).")
        return

    supabase = get_supabase_client()
    t_start = time.time()
    total = 0
    for table, records in tables.items():
        if not records:
            continue
        written = upsert_table(supabase, table, records, args.batch_size, args.retries)
        print(f"  [OK] {table}: {written} upserted")
        total += written

    print(f"\nLoaded {total} records in {time.time() - t_start:.1f}s")


if __name__ == "__main__":
    main()
