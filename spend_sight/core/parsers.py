"""
Parsers for extracting information from receipt text.

Everything here is a pure function of its input. Missing fields come back as
None (or an empty list) rather than raising.
"""

import re
import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Optional, List, Sequence

from .models import ParsedItem, ParsedReceipt
from .utils import (DATE_PATTERNS, DATE_SHAPE_PATTERNS, PHONE_PATTERN, MONEY_PATTERN,
                    ITEM_PRICE_PATTERN, CURRENCY_MARKER_PATTERN, NUMERIC_TOKEN_PATTERN,
                    DASH_VARIANTS, TOTAL_KEYWORDS, TOTAL_FALLBACK_EXCLUDE,
                    TOTAL_FALLBACK_START, STORE_BLACKLIST, STORE_SCAN_LINES,
                    ITEM_SKIP_WORDS, normalize_amount, collapse_spaces)

_DASHES = str.maketrans({c: "-" for c in DASH_VARIANTS})
_ZEROS = str.maketrans({"O": "0", "o": "0"})


def _fix_numeric_token(m: re.Match) -> str:
    token = m.group(0)
    if re.match(NUMERIC_TOKEN_PATTERN, token) and any(c.isdigit() for c in token):
        return token.translate(_ZEROS)
    return token


def normalize_text(text: str) -> str:
    """
    Clean up common OCR artifacts before any pattern matching.

    Dash variants become "-". O/o are read as zero only inside tokens that are
    otherwise numeric ("1O.99", "2O26-O2-24"), so words like "COSTCO" survive.
    """
    if not text:
        return ""
    text = text.translate(_DASHES)
    return re.sub(r"\S+", _fix_numeric_token, text)


def split_lines(text: str) -> List[str]:
    """Return non-empty, trimmed lines."""
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def extract_last_money_value(line: str) -> Optional[Decimal]:
    """
    Return the right-most money amount on a line.

    Receipts right-align the amount that matters, so "2 x 3.50  7.00" gives 7.00.
    """
    matches = list(re.finditer(MONEY_PATTERN, line, flags=re.IGNORECASE))
    if not matches:
        return None
    return normalize_amount(matches[-1].group(1))


def extract_total(text: str, keywords: Sequence[str] = TOTAL_KEYWORDS) -> Optional[Decimal]:
    """
    Extract the total amount from receipt text.

    1) Bottom-up, the first keyword line that carries an amount wins.
    2) Fallback: the largest amount in the bottom 40% of the receipt, ignoring
       tax and subtotal lines.
    """
    lines = split_lines(text)

    for ln in reversed(lines):
        lower = ln.lower()
        if any(k in lower for k in keywords):
            value = extract_last_money_value(ln)
            if value is not None:
                return value

    num, den = TOTAL_FALLBACK_START
    start = len(lines) * num // den
    candidates = []
    for ln in lines[start:]:
        lower = ln.lower()
        if any(w in lower for w in TOTAL_FALLBACK_EXCLUDE):
            continue
        value = extract_last_money_value(ln)
        if value is not None:
            candidates.append(value)

    return max(candidates) if candidates else None


def looks_like_date(line: str) -> bool:
    return any(re.search(p, line) for p in DATE_SHAPE_PATTERNS)


def looks_like_phone(line: str) -> bool:
    # 123-456-7890, (123) 456-7890, 1234567890
    return re.search(PHONE_PATTERN, line) is not None


def extract_store_name(lines: Sequence[str],
                       blacklist: Sequence[str] = STORE_BLACKLIST) -> Optional[str]:
    """
    Best guess at the store name: the first mostly-alphabetic line near the top
    that isn't a total, payment, date or phone line. Falls back to the first line.
    """
    for ln in lines[:STORE_SCAN_LINES]:
        lower = ln.lower()
        if any(w in lower for w in blacklist):
            continue
        if looks_like_date(ln) or looks_like_phone(ln):
            continue
        if len(ln) < 3:
            continue

        letters = sum(c.isalpha() for c in ln)
        if letters >= max(3, len(ln) // 2):
            return ln

    return lines[0] if lines else None


def extract_date(text: str) -> Optional[dt.date]:
    """
    Extract the transaction date.

    Year-first dates are tried before short dates. Short dates are always read
    month/day/year; a two-digit year follows strptime's %y century rule.
    Only the first match of each pattern is considered.
    """
    for i, pat in enumerate(DATE_PATTERNS):
        m = re.search(pat, text)
        if not m:
            continue
        try:
            if i == 0:
                y, mo, d = m.groups()
            else:
                mo, d, y = m.groups()
                if len(y) == 2:
                    y = dt.datetime.strptime(y, "%y").year
            return dt.date(int(y), int(mo), int(d))
        except ValueError:
            continue
    return None


def extract_items(lines: Sequence[str],
                  skip_words: Sequence[str] = ITEM_SKIP_WORDS) -> List[ParsedItem]:
    """Pull "name ... 3.49" lines out as items, in receipt order."""
    items = []
    for ln in lines:
        lower = ln.lower()
        if any(w in lower for w in skip_words):
            continue

        m = re.search(ITEM_PRICE_PATTERN, ln)
        if not m:
            continue
        try:
            price = Decimal(m.group(1))
        except InvalidOperation:
            continue

        name = re.sub(CURRENCY_MARKER_PATTERN, "", ln[:m.start(1)])
        name = collapse_spaces(name)
        if len(name) < 2:
            continue

        items.append(ParsedItem(name=name, price=price))
    return items


def parse_receipt(raw_text: str) -> ParsedReceipt:
    """Run the full extraction over raw OCR text."""
    text = normalize_text(raw_text)
    lines = split_lines(text)
    if not lines:
        return ParsedReceipt()

    return ParsedReceipt(
        store_name=extract_store_name(lines),
        date=extract_date(text),
        total=extract_total(text),
        items=tuple(extract_items(lines)),
    )
