#!/usr/bin/env python3
"""
Botaguas Export Script

Signs in as an operator and exports the inventory from Supabase to CSV.

Credentials come from --email/--password or the BOTAGUAS_OPERATOR_EMAIL and
BOTAGUAS_OPERATOR_PASSWORD environment variables (a .env file is honoured).

Usage:
    python export_botaguas.py --output botaguas.csv
    python export_botaguas.py --brand FORD --year 2012 --output ford_2012.csv
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.catalog_view import filter_records
from domain.errors import StoreUnavailable
from repositories.auth_repository import (
    AuthenticationFailed,
    release_operator,
    resolve_operator,
    sign_in,
    sign_out,
)
from repositories.botagua_repository import list_botaguas
from services.csv_export_service import CSV_COLUMNS, generate_inventory_csv


def _fetch_records(access_token: str, args: argparse.Namespace):
    """Filtered records for the signed-in operator, or None if the token is rejected."""
    operator = resolve_operator(access_token)
    if operator is None:
        return None

    try:
        return filter_records(
            list_botaguas(operator),
            brand=args.brand,
            model=args.model,
            year=args.year,
        )
    finally:
        release_operator(operator)


def main() -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Export the botaguas inventory from Supabase to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export everything to stdout
  python export_botaguas.py

  # Export every FORD part
  python export_botaguas.py --brand FORD --output ford.csv

  # Export parts that fit a 2012 FOCUS
  python export_botaguas.py --model FOCUS --year 2012 --output focus_2012.csv
        """
    )

    parser.add_argument("--output", "-o", help="Path to output CSV file (default: stdout)")
    parser.add_argument("--brand", "-b", help="Filter by exact brand (e.g., FORD)")
    parser.add_argument("--model", "-m", help="Filter by exact model (e.g., FOCUS)")
    parser.add_argument("--year", "-y", type=int, help="Filter by a year inside the part's year range")
    parser.add_argument("--email", default=os.getenv("BOTAGUAS_OPERATOR_EMAIL"), help="Operator email")
    parser.add_argument("--password", default=os.getenv("BOTAGUAS_OPERATOR_PASSWORD"), help="Operator password")

    args = parser.parse_args()

    if not args.email or not args.password:
        print("Operator credentials missing: pass --email/--password or set "
              "BOTAGUAS_OPERATOR_EMAIL/BOTAGUAS_OPERATOR_PASSWORD", file=sys.stderr)
        return 2

    try:
        session = sign_in(args.email, args.password)
    except AuthenticationFailed as e:
        print(f"Sign-in failed: {e}", file=sys.stderr)
        return 1
    except StoreUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        records = _fetch_records(session.access_token, args)
    except StoreUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        try:
            sign_out(session.access_token)
        except StoreUnavailable as e:
            print(f"Warning: sign-out failed: {e}", file=sys.stderr)

    if records is None:
        print("Session was rejected right after sign-in", file=sys.stderr)
        return 1

    content = generate_inventory_csv(records)
    if args.output:
        with open(args.output, "w", newline="", encoding="utf-8") as f:
            f.write(content)
        print(f"✓ Exported {len(records)} records ({len(CSV_COLUMNS)} columns) to {args.output}")
    else:
        sys.stdout.write(content)

    return 0


if __name__ == "__main__":
    sys.exit(main())
