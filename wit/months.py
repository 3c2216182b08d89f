"""Calendar month-key (YYYY-MM) helpers."""

from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_month(value: str) -> tuple[int, int]:
    dt = datetime.strptime(value, "%Y-%m")
    return dt.year, dt.month


def month_index(value: str) -> int:
    year, month = parse_month(value)
    return year * 12 + month


def format_month(index: int) -> str:
    year, month = divmod(index - 1, 12)
    return f"{year:04d}-{month + 1:02d}"


def add_months(value: str, months: int) -> str:
    return format_month(month_index(value) + months)


def month_span(first: str, last: str) -> int:
    """Inclusive number of calendar months from ``first`` through ``last``."""
    return month_index(last) - month_index(first) + 1


def month_of(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_bounds(value: str) -> tuple[date, date]:
    year, month = parse_month(value)
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


def format_month_readable(value: str | None) -> str:
    if not value:
        return ""
    year, month = parse_month(value)
    return f"{calendar.month_name[month]} {year}"
