"""
Utility functions and constants for receipt extraction.
"""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

# File type constants
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}
PDF_EXTS = {".pdf"}

# Keywords that mark the line carrying the amount due
TOTAL_KEYWORDS = (
    "total", "grand total", "amount", "amount due", "balance due",
    "total due", "amount payable", "due",
)

# Lines never considered by the largest-amount fallback
TOTAL_FALLBACK_EXCLUDE = ("tax", "hst", "gst", "subtotal")

# Lines that can't be the store name
STORE_BLACKLIST = ("total", "subtotal", "tax", "visa", "mastercard", "debit", "cash", "change")

# Lines that are never line items
ITEM_SKIP_WORDS = (
    "total", "subtotal", "tax", "hst", "gst", "balance",
    "visa", "debit", "change", "tender",
)

STORE_SCAN_LINES = 8
# The largest-amount fallback starts 3/5 of the way down the receipt
TOTAL_FALLBACK_START = (3, 5)

# Pattern constants for parsing
DATE_PATTERNS = [
    r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b",            # YYYY-MM-DD or YYYY/MM/DD
    r"\b(\d{1,2})[-/](\d{1,2})[-/](\d{4}|\d{2})\b",      # MM/DD/YYYY or MM/DD/YY
]

DATE_SHAPE_PATTERNS = [
    r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}",
    r"\d{4}[-/]\d{1,2}[-/]\d{1,2}",
]

PHONE_PATTERN = r"\(?\d{3}\)?[\s-]?\d{3}[\s-]?\d{4}"

# $12.34, CAD 12.34, 1,234.56, 1 234.56, 1234.56
MONEY_PATTERN = r"(?:\$|CAD\s*)?(\d{1,3}(?:[, ]\d{3})*\.\d{2}|\d+\.\d{2})(?!\d)"

ITEM_PRICE_PATTERN = r"(\d+\.\d{2})\s*$"

CURRENCY_MARKER_PATTERN = r"\$|\bCAD\b"

# OCR dash variants: figure dash, en dash, em dash, horizontal bar, minus sign
DASH_VARIANTS = "‒–—―−"

# A token that is "really" a number once O/o are read as zeros
NUMERIC_TOKEN_PATTERN = r"^\$?[\dOo.,:/-]+$"

WEEKDAYS = {
    "monday": 0, "tuesday": 1, "wednesday": 2, "thursday": 3,
    "friday": 4, "saturday": 5, "sunday": 6,
}

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def normalize_amount(s: str) -> Optional[Decimal]:
    """Normalize amount string to Decimal, dropping grouping separators."""
    if not s:
        return None
    s = s.replace(",", "").replace(" ", "")
    try:
        return Decimal(s)
    except InvalidOperation:
        return None


def to_decimal(value) -> Decimal:
    """Coerce a user or database value to a finite Decimal rounded to cents."""
    if isinstance(value, float):
        value = repr(value)
    try:
        d = value if isinstance(value, Decimal) else Decimal(str(value).strip().lstrip("$").replace(",", ""))
        if not d.is_finite():
            raise ValueError(f"Not a money amount: {value!r}")
        return d.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Not a money amount: {value!r}")


def money_fmt(v: Optional[Decimal]) -> str:
    """Format amount as currency."""
    return f"${v:,.2f}" if v is not None else ""


def collapse_spaces(s: str) -> str:
    return re.sub(r"\s{2,}", " ", s).strip()
