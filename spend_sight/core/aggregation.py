"""
Bucket saved receipts into contiguous daily and weekly spend series.
"""

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from .models import Receipt, SpendPoint, SpendSummary
from .utils import WEEKDAYS, ZERO

SUNDAY = WEEKDAYS["sunday"]


def _as_date(value) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    return value


def day_bucket(value) -> dt.date:
    """Start-of-day bucket for a date or datetime."""
    return _as_date(value)


def week_bucket(value, week_start: int = SUNDAY) -> dt.date:
    """Start-of-week bucket; week_start uses date.weekday() numbering (Monday=0)."""
    d = _as_date(value)
    return d - dt.timedelta(days=(d.weekday() - week_start) % 7)


def _bucketed_points(receipts: Iterable[Receipt], buckets: List[dt.date],
                     key: Callable[[dt.date], dt.date]) -> List[SpendPoint]:
    in_window = set(buckets)
    totals: Dict[dt.date, Decimal] = defaultdict(lambda: ZERO)

    for r in receipts:
        if r.date is None:
            continue
        bucket = key(r.date)
        if bucket not in in_window:
            continue
        totals[bucket] += r.total

    return [SpendPoint(bucket_start=b, amount=totals.get(b, ZERO)) for b in buckets]


def _check_window(size: int):
    if size < 0:
        raise ValueError(f"Window size must be zero or positive, got {size}")


def daily_points(receipts: Iterable[Receipt], days: int,
                 today: Optional[dt.date] = None) -> List[SpendPoint]:
    """
    Spend per calendar day for the last `days` days, ending today inclusive.

    Days without receipts are emitted with a zero amount, so the result always
    has exactly `days` points in ascending order.
    """
    _check_window(days)
    today = _as_date(today or dt.date.today())
    start = today - dt.timedelta(days=days - 1)
    buckets = [start + dt.timedelta(days=i) for i in range(days)]
    return _bucketed_points(receipts, buckets, day_bucket)


def weekly_points(receipts: Iterable[Receipt], weeks: int,
                  today: Optional[dt.date] = None,
                  week_start: int = SUNDAY) -> List[SpendPoint]:
    """
    Spend per calendar week for the last `weeks` weeks, ending with the current week.

    Same gap-filling rules as daily_points.
    """
    _check_window(weeks)
    current = week_bucket(today or dt.date.today(), week_start)
    start = current - dt.timedelta(weeks=weeks - 1)
    buckets = [start + dt.timedelta(weeks=i) for i in range(weeks)]
    return _bucketed_points(receipts, buckets, lambda d: week_bucket(d, week_start))


def summarize(points: List[SpendPoint]) -> SpendSummary:
    """Total and per-point average of a series."""
    total = sum((p.amount for p in points), ZERO)
    average = total / len(points) if points else ZERO
    return SpendSummary(total=total, average=average, points=len(points))
