"""
Console, CSV and PDF reporting for saved receipts and spend series.
"""

import csv
import datetime as dt
from pathlib import Path
from typing import List

from .models import Receipt, SpendPoint, SpendSummary
from .utils import money_fmt


def format_receipt_line(r: Receipt) -> str:
    """One-line listing of a receipt."""
    date = r.date.isoformat() if r.date else "(no date)"
    return f"{r.id}  {date:<10}  {(r.store_name or 'Unknown Store')[:28]:<28}  {r.category:<12}  {money_fmt(r.total):>10}"


def format_insights(daily: List[SpendPoint], weekly: List[SpendPoint],
                    summary: SpendSummary) -> str:
    """Text summary of the daily and weekly series."""
    out = [
        f"Last {summary.points} days",
        f"  Total Spent: {money_fmt(summary.total)}",
        f"  Daily Avg:   {money_fmt(summary.average)}",
        "",
        "Daily Spending",
    ]
    if not any(p.amount for p in daily):
        out.append("  No receipts yet. Scan a receipt to start tracking.")
    else:
        for p in daily:
            out.append(f"  {p.bucket_start.strftime('%b %d')}  {money_fmt(p.amount):>10}")

    if weekly:
        out.append("")
        out.append("Weekly Spending")
        for p in weekly:
            out.append(f"  Week of {p.bucket_start.strftime('%b %d')}  {money_fmt(p.amount):>10}")
    return "\n".join(out)


def write_csv(receipts: List[Receipt], out_csv: Path):
    """Write receipts to CSV file."""
    fieldnames = ["id", "date", "store_name", "total", "category"]
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in receipts:
            row = r.to_dict()
            w.writerow({k: row.get(k) for k in fieldnames})


def build_insights_pdf(daily: List[SpendPoint], weekly: List[SpendPoint],
                       summary: SpendSummary, out_pdf: Path,
                       title: str = "Spending Insights"):
    """
    Build a one-page insights PDF: summary, daily bar chart, weekly totals.

    Args:
        daily: Daily spend series
        weekly: Weekly spend series
        summary: Summary of the daily series
        out_pdf: Output PDF path
        title: Report title
    """
    from reportlab.lib.pagesizes import letter
    from reportlab.pdfgen import canvas
    from reportlab.lib.units import inch
    from reportlab.lib.colors import HexColor

    c = canvas.Canvas(out_pdf.as_posix(), pagesize=letter)
    width, height = letter

    # Title
    y = height - 1 * inch
    c.setFont("Helvetica-Bold", 16)
    c.drawString(1 * inch, y, title)
    y -= 0.3 * inch
    c.setFont("Helvetica", 10)
    timestamp = dt.datetime.now().isoformat(timespec='seconds')
    c.drawString(1 * inch, y, f"Generated: {timestamp}")
    y -= 0.4 * inch

    # Summary
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, f"Last {summary.points} days")
    y -= 0.25 * inch
    c.setFont("Helvetica", 10)
    c.drawString(1.1 * inch, y, f"Total Spent: {money_fmt(summary.total)}")
    c.drawString(3.6 * inch, y, f"Daily Avg: {money_fmt(summary.average)}")
    y -= 0.45 * inch

    # Daily bar chart
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, "Daily Spending")
    y -= 0.2 * inch
    chart_h = 2.5 * inch
    chart_w = width - 2 * inch
    base_y = y - chart_h
    c.line(1 * inch, base_y, 1 * inch + chart_w, base_y)

    peak = max((p.amount for p in daily), default=0)
    if daily and peak > 0:
        slot = chart_w / len(daily)
        c.setFillColor(HexColor("#4a7bd0"))
        for i, p in enumerate(daily):
            bar_h = float(p.amount / peak) * chart_h
            if bar_h > 0:
                c.rect(1 * inch + i * slot + slot * 0.15, base_y, slot * 0.7, bar_h, stroke=0, fill=1)
        c.setFillColor("black")
        c.setFont("Helvetica", 7)
        # Label every 7th day, like the chart axis in the app
        for i in range(0, len(daily), 7):
            c.drawString(1 * inch + i * slot, base_y - 0.15 * inch,
                         daily[i].bucket_start.strftime("%b %d"))
    else:
        c.setFont("Helvetica", 10)
        c.drawString(1.1 * inch, base_y + chart_h / 2,
                     "No receipts yet. Scan a receipt to start tracking.")
    y = base_y - 0.5 * inch

    # Weekly totals
    c.setFont("Helvetica-Bold", 12)
    c.drawString(1 * inch, y, "Weekly Spending")
    y -= 0.25 * inch
    c.setFont("Helvetica", 10)
    for p in weekly:
        c.drawString(1.1 * inch, y, f"Week of {p.bucket_start.strftime('%b %d, %Y')}")
        c.drawRightString(4.5 * inch, y, money_fmt(p.amount))
        y -= 0.2 * inch
        if y < 0.8 * inch:
            c.showPage()
            y = height - 1 * inch
            c.setFont("Helvetica", 10)

    c.showPage()
    c.save()
