"""
Spend Sight

Turn OCR text from paper receipts into structured spending data and
daily/weekly spend series.
"""

__version__ = "1.0.0"
__author__ = "Spend Sight Contributors"

from spend_sight.core.models import ParsedItem, ParsedReceipt, Receipt, SpendPoint
from spend_sight.core.parsers import parse_receipt
from spend_sight.core.aggregation import daily_points, weekly_points, summarize

__all__ = ["ParsedItem", "ParsedReceipt", "Receipt", "SpendPoint",
           "parse_receipt", "daily_points", "weekly_points", "summarize"]
