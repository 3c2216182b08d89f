"""Attribution of pay-period earnings to a calendar month."""

from __future__ import annotations

import calendar
from datetime import date
from typing import Iterable

from .months import month_bounds
from .schema import PayPeriod


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def attributed_income(amount: float, start: date | str, end: date | str, target_month: str) -> float:
    """Return the share of ``amount`` earned inside ``target_month``.

    Earnings accrue uniformly per day over the inclusive range ``[start, end]``.
    A reversed range contributes nothing. No rounding is applied.
    """
    start_day = _as_date(start)
    end_day = _as_date(end)
    if end_day < start_day:
        return 0.0

    month_start, month_end = month_bounds(target_month)
    overlap_start = max(start_day, month_start)
    overlap_end = min(end_day, month_end)
    if overlap_start > overlap_end:
        return 0.0

    total_days = (end_day - start_day).days + 1
    overlap_days = (overlap_end - overlap_start).days + 1
    return amount * (overlap_days / total_days)


def net_amount(period: PayPeriod, earnings_type: str = "wages") -> float:
    """Countable earnings for one period.

    Self-employment earnings are revenue less business expenses; a loss counts as zero.
    """
    amount = period.amount
    if earnings_type == "self_employment" and period.expenses:
        amount -= period.expenses
    return max(0.0, amount)


def attributed_total(periods: Iterable[PayPeriod], target_month: str, earnings_type: str = "wages") -> float:
    total = 0.0
    for period in periods:
        total += attributed_income(net_amount(period, earnings_type), period.start_date, period.end_date, target_month)
    return total
