#!/usr/bin/env python3
"""
Main CLI entrypoint for the Spend Sight expense tracker.
"""

import argparse
import datetime as dt
import sys
from pathlib import Path

from spend_sight.core.aggregation import daily_points, weekly_points, summarize
from spend_sight.core.config import load_config, week_start_index
from spend_sight.core.database import load_receipts
from spend_sight.core.ocr import OCRUnavailableError
from spend_sight.core.parsers import parse_receipt
from spend_sight.core.processor import ReceiptProcessor
from spend_sight.core.reporting import (format_insights, format_receipt_line,
                                        write_csv, build_insights_pdf)
from spend_sight.core.utils import money_fmt


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spend-sight",
        description="Scan paper receipts, track spending, and chart daily/weekly totals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan two receipts into the Groceries category
  spend-sight scan --category Groceries ./photos/costco.jpg ./photos/metro.pdf

  # Try the extractor on OCR text without saving anything
  spend-sight parse ./receipt.txt

  # Last 30 days and 12 weeks, plus a PDF report
  spend-sight insights --pdf insights.pdf
        """
    )
    parser.add_argument("--config", default="./spend_sight.json",
                        help="JSON settings file (default: ./spend_sight.json)")
    parser.add_argument("--db",
                        help="SQLite receipt database (default: from config, or SPEND_SIGHT_DB env var)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed parsing information for debugging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Extract fields from OCR text (file or - for stdin)")
    p.add_argument("file")

    p = sub.add_parser("scan", help="OCR receipt images/PDFs and save them")
    p.add_argument("files", nargs="+")
    p.add_argument("--category", help="Category label (default: from config)")
    p.add_argument("--dry-run", action="store_true", help="Show what would be saved without saving")

    sub.add_parser("list", help="List saved receipts, newest first")

    p = sub.add_parser("show", help="Show one receipt with its scanned text")
    p.add_argument("id")

    p = sub.add_parser("rescan", help="Replace a receipt's extracted fields with a new scan")
    p.add_argument("id")
    p.add_argument("file")

    p = sub.add_parser("edit", help="Correct a saved receipt by hand")
    p.add_argument("id")
    p.add_argument("--store")
    p.add_argument("--date", type=dt.date.fromisoformat, help="YYYY-MM-DD")
    p.add_argument("--total")
    p.add_argument("--category")

    p = sub.add_parser("delete", help="Delete a saved receipt")
    p.add_argument("id")

    p = sub.add_parser("insights", help="Daily and weekly spending summary")
    p.add_argument("--days", type=int, help="Daily window (default: from config)")
    p.add_argument("--weeks", type=int, help="Weekly window (default: from config)")
    p.add_argument("--pdf", help="Also write a PDF report to this path")
    p.add_argument("--csv", help="Also export all receipts to this CSV path")

    return parser


def _print_parsed(parsed):
    print(f"Store: {parsed.store_name or '(none)'}")
    print(f"Date:  {parsed.date.isoformat() if parsed.date else '(none)'}")
    print(f"Total: {money_fmt(parsed.total) or '(none)'}")
    if parsed.items:
        print("Items:")
        for item in parsed.items:
            print(f"  {item.name[:40]:<40} {money_fmt(item.price):>10}")


def cmd_parse(args, config) -> int:
    if args.file == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.file).read_text(encoding="utf-8")
    _print_parsed(parse_receipt(text))
    return 0


def cmd_insights(args, config, db_path: Path) -> int:
    days = args.days if args.days is not None else config["daily_window"]
    weeks = args.weeks if args.weeks is not None else config["weekly_window"]
    receipts = load_receipts(db_path)

    daily = daily_points(receipts, days)
    weekly = weekly_points(receipts, weeks, week_start=week_start_index(config))
    summary = summarize(daily)
    print(format_insights(daily, weekly, summary))

    if args.pdf:
        build_insights_pdf(daily, weekly, summary, Path(args.pdf))
        print(f"[INFO] Wrote {args.pdf}")
    if args.csv:
        write_csv(receipts, Path(args.csv))
        print(f"[INFO] Wrote {len(receipts)} receipt(s) to {args.csv}")
    return 0


def run(args, config, db_path: Path) -> int:
    if args.command == "parse":
        return cmd_parse(args, config)
    if args.command == "insights":
        if args.days is not None and args.days < 0 or args.weeks is not None and args.weeks < 0:
            print("[ERROR] --days and --weeks must not be negative")
            return 1
        return cmd_insights(args, config, db_path)
    if args.command == "list":
        receipts = load_receipts(db_path)
        if not receipts:
            print("[INFO] No receipts saved yet")
        for r in receipts:
            print(format_receipt_line(r))
        return 0

    processor = ReceiptProcessor(
        db_path=db_path,
        default_category=config["default_category"],
        categories=config["categories"],
        verbose=args.verbose,
    )

    if args.command == "scan":
        for f in args.files:
            receipt, parsed = processor.scan(Path(f), category=args.category, save=not args.dry_run)
            _print_parsed(parsed)
            print(format_receipt_line(receipt))
        return 0

    if args.command == "show":
        receipt = processor.get(args.id)
        print(format_receipt_line(receipt))
        print("Scanned Receipt:")
        for line in receipt.raw_text.splitlines():
            print(f"  {line}")
        return 0

    if args.command == "rescan":
        print(format_receipt_line(processor.rescan(args.id, Path(args.file))))
        return 0

    if args.command == "edit":
        receipt = processor.edit(args.id, store_name=args.store, date=args.date,
                                 total=args.total, category=args.category)
        print(format_receipt_line(receipt))
        return 0

    if args.command == "delete":
        if not processor.delete(args.id):
            print(f"[ERROR] No receipt with id {args.id}")
            return 1
        return 0

    return 1


def main(argv=None):
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ValueError as e:
        print(f"[ERROR] Invalid config {args.config}: {e}")
        return 1

    db_path = Path(args.db or config["db_path"])

    try:
        return run(args, config, db_path)
    except KeyError as e:
        print(f"[ERROR] {e.args[0]}")
        return 1
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] {e}")
        return 1
    except OCRUnavailableError as e:
        print(f"[ERROR] OCR is not available: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
