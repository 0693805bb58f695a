"""
Receipt scanning orchestration: OCR -> extraction -> storage.
"""

import datetime as dt
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG
from .database import (init_receipts_db, insert_receipt, update_receipt,
                       delete_receipt, get_receipt)
from .models import ParsedReceipt, Receipt
from .ocr import extract_text
from .parsers import parse_receipt
from .utils import ZERO, money_fmt, to_decimal

UNKNOWN_STORE = "Unknown Store"


class ReceiptProcessor:
    """Scans receipts into the store and applies rescans and manual corrections."""

    def __init__(self, db_path: Path,
                 default_category: str = DEFAULT_CONFIG["default_category"],
                 categories: Optional[List[str]] = None,
                 verbose: bool = False):
        """
        Initialize receipt processor.

        Args:
            db_path: SQLite file holding saved receipts
            default_category: Category used when none is given
            categories: Allowed category labels
            verbose: Whether to show verbose debugging output
        """
        self.db_path = db_path
        self.default_category = default_category
        self.categories = categories or list(DEFAULT_CONFIG["categories"])
        self.verbose = verbose

        db_path.parent.mkdir(parents=True, exist_ok=True)
        init_receipts_db(self.db_path)

    def _check_category(self, category: Optional[str]) -> str:
        category = category or self.default_category
        if category not in self.categories:
            raise ValueError(f"Unknown category {category!r}; choose from: {', '.join(self.categories)}")
        return category

    def build_receipt(self, parsed: ParsedReceipt, raw_text: str,
                      category: Optional[str] = None,
                      receipt_id: Optional[str] = None) -> Receipt:
        """
        Map extracted fields onto a Receipt.

        A missing store name becomes "Unknown Store" and a missing total 0. A missing
        date stays empty so it can be corrected by hand.
        """
        receipt = Receipt(
            store_name=parsed.store_name or UNKNOWN_STORE,
            total=parsed.total if parsed.total is not None else ZERO,
            date=parsed.date,
            category=self._check_category(category),
            raw_text=raw_text,
        )
        if receipt_id:
            receipt.id = receipt_id
        return receipt

    def _read(self, path: Path) -> Tuple[str, ParsedReceipt]:
        print(f"[INFO] Processing {path.name}")
        text = extract_text(path)
        parsed = parse_receipt(text)

        if self.verbose:
            print(f"  [DEBUG] Store: '{parsed.store_name or '(none)'}'")
            print(f"  [DEBUG] Date: {parsed.date.isoformat() if parsed.date else '(none)'}")
            print(f"  [DEBUG] Total: {money_fmt(parsed.total) or '(none)'}")
            print(f"  [DEBUG] Items: {len(parsed.items)}")
            if not parsed.store_name:
                print(f"  [DEBUG] First 5 lines of OCR text:")
                for i, line in enumerate(text.splitlines()[:5], 1):
                    print(f"    {i}: {line[:80]}")
        if parsed.total is None:
            print(f"[WARN] Could not extract total from {path.name}. Check OCR quality.")
        if parsed.date is None:
            print(f"[WARN] Could not extract date from {path.name}.")

        return text, parsed

    def scan(self, path: Path, category: Optional[str] = None,
             save: bool = True) -> Tuple[Receipt, ParsedReceipt]:
        """OCR and parse one file, saving the result unless save is False."""
        category = self._check_category(category)
        text, parsed = self._read(path)
        receipt = self.build_receipt(parsed, text, category)
        if save:
            insert_receipt(self.db_path, receipt)
            print(f"[INFO] Saved receipt {receipt.id}")
        return receipt, parsed

    def get(self, receipt_id: str) -> Receipt:
        """Fetch a saved receipt, raising KeyError for an unknown id."""
        receipt = get_receipt(self.db_path, receipt_id)
        if receipt is None:
            raise KeyError(f"No receipt with id {receipt_id}")
        return receipt

    def rescan(self, receipt_id: str, path: Path) -> Receipt:
        """
        Replace a saved receipt's extracted fields with a fresh scan.

        Id and category are kept as saved, even if the category has since been
        dropped from the configured list.
        """
        existing = self.get(receipt_id)
        text, parsed = self._read(path)
        receipt = self.build_receipt(parsed, text, receipt_id=existing.id)
        receipt.category = existing.category
        update_receipt(self.db_path, receipt)
        print(f"[INFO] Rescan replaced receipt {receipt.id}")
        return receipt

    def edit(self, receipt_id: str, store_name: Optional[str] = None,
             date: Optional[dt.date] = None, total=None,
             category: Optional[str] = None) -> Receipt:
        """Manually correct fields of a saved receipt."""
        receipt = self.get(receipt_id)
        if store_name is not None:
            receipt.store_name = store_name
        if date is not None:
            receipt.date = date
        if total is not None:
            total = to_decimal(total)
            if total < 0:
                raise ValueError(f"Receipt total cannot be negative: {total}")
            receipt.total = total
        if category is not None:
            receipt.category = self._check_category(category)
        update_receipt(self.db_path, receipt)
        return receipt

    def delete(self, receipt_id: str) -> bool:
        deleted = delete_receipt(self.db_path, receipt_id)
        if deleted:
            print(f"[INFO] Deleted receipt {receipt_id}")
        return deleted
