"""
financial_year.py — April–March financial year helpers
A financial year is labelled by the calendar year in which it starts.
"""

from datetime import date


def financial_year(d: date) -> int:
    """Financial year containing ``d``: April onwards belongs to the current year."""
    return d.year if d.month >= 4 else d.year - 1


def current_financial_year(today: date | None = None) -> int:
    return financial_year(today or date.today())


def financial_year_bounds(fy: int) -> tuple[date, date]:
    """First and last day of financial year ``fy`` (inclusive)."""
    return date(fy, 4, 1), date(fy + 1, 3, 31)


def financial_year_label(fy: int) -> str:
    """2024 -> 'FY 2024-25'."""
    return f"FY {fy}-{(fy + 1) % 100:02d}"


def financial_year_months(fy: int) -> list[tuple[int, int]]:
    """(calendar_year, month) pairs from April through the following March."""
    return [(fy, m) for m in range(4, 13)] + [(fy + 1, m) for m in range(1, 4)]
