"""
Data models for receipt extraction and spend aggregation.
"""

import datetime as dt
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from .utils import ZERO


@dataclass(frozen=True)
class ParsedItem:
    """One priced line from a receipt."""
    name: str
    price: Decimal


@dataclass(frozen=True)
class ParsedReceipt:
    """Best-effort fields extracted from OCR text. Any field may be missing."""
    store_name: Optional[str] = None
    date: Optional[dt.date] = None
    total: Optional[Decimal] = None
    items: Tuple[ParsedItem, ...] = ()


@dataclass
class Receipt:
    """Represents a saved receipt."""
    store_name: str
    total: Decimal
    date: Optional[dt.date] = None
    category: str = "Other"
    raw_text: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self):
        if self.total < 0:
            raise ValueError(f"Receipt total cannot be negative: {self.total}")

    def to_dict(self):
        """Convert to a flat dictionary (dates as ISO strings, money as text)."""
        return {
            "id": self.id,
            "date": self.date.isoformat() if self.date else None,
            "store_name": self.store_name,
            "total": f"{self.total:.2f}",
            "category": self.category,
            "raw_text": self.raw_text,
        }


@dataclass(frozen=True)
class SpendPoint:
    """Summed spend for one day or week bucket."""
    bucket_start: dt.date
    amount: Decimal = ZERO


@dataclass(frozen=True)
class SpendSummary:
    total: Decimal
    average: Decimal
    points: int
