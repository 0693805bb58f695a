"""
Database operations for receipt storage.
"""

import sqlite3
import datetime as dt
from pathlib import Path
from typing import List, Optional

from .models import Receipt
from .utils import to_decimal

_COLUMNS = "id, date, store_name, total, category, raw_text"


def init_receipts_db(db_path: Path):
    """Initialize SQLite database for saved receipts."""
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute("""
        CREATE TABLE IF NOT EXISTS receipts (
            id TEXT PRIMARY KEY,
            date TEXT,
            store_name TEXT,
            total TEXT NOT NULL,
            category TEXT,
            raw_text TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """)
        # Add index for date-ordered listing
        cur.execute("""
        CREATE INDEX IF NOT EXISTS idx_receipts_date
        ON receipts(date)
        """)
        conn.commit()


def _row_to_receipt(row) -> Receipt:
    return Receipt(
        id=row[0],
        date=dt.date.fromisoformat(row[1]) if row[1] else None,
        store_name=row[2] or "",
        total=to_decimal(row[3]),
        category=row[4] or "Other",
        raw_text=row[5] or "",
    )


def _row_values(receipt: Receipt):
    d = receipt.to_dict()
    return (d["date"], d["store_name"], d["total"], d["category"], d["raw_text"], d["id"])


def insert_receipt(db_path: Path, receipt: Receipt):
    """Save a new receipt."""
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute("""
            INSERT INTO receipts (date, store_name, total, category, raw_text, id)
            VALUES (?, ?, ?, ?, ?, ?)
        """, _row_values(receipt))
        conn.commit()


def update_receipt(db_path: Path, receipt: Receipt) -> bool:
    """Overwrite a saved receipt's fields. Returns False if the id is unknown."""
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute("""
            UPDATE receipts
            SET date = ?, store_name = ?, total = ?, category = ?, raw_text = ?
            WHERE id = ?
        """, _row_values(receipt))
        conn.commit()
        return cur.rowcount > 0


def delete_receipt(db_path: Path, receipt_id: str) -> bool:
    """Delete a receipt. Returns False if the id is unknown."""
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute("DELETE FROM receipts WHERE id = ?", (receipt_id,))
        conn.commit()
        return cur.rowcount > 0


def get_receipt(db_path: Path, receipt_id: str) -> Optional[Receipt]:
    """Fetch one receipt by id."""
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute(f"SELECT {_COLUMNS} FROM receipts WHERE id = ?", (receipt_id,))
        row = cur.fetchone()
    return _row_to_receipt(row) if row else None


def load_receipts(db_path: Path) -> List[Receipt]:
    """
    Load every saved receipt, newest date first and undated receipts last.

    A database that doesn't exist yet holds no receipts.
    """
    if not db_path.exists():
        return []
    with sqlite3.connect(db_path.as_posix()) as conn:
        cur = conn.cursor()
        cur.execute(f"""
            SELECT {_COLUMNS} FROM receipts
            ORDER BY date IS NULL, date DESC, created_at DESC
        """)
        rows = cur.fetchall()
    return [_row_to_receipt(r) for r in rows]
