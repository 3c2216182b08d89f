"""Semantic validation of work histories before they reach the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
import re
from typing import Iterable

from .months import month_index, month_of
from .schema import History

MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
EARNINGS_TYPES = {"wages", "self_employment"}


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_month_key(value: str) -> bool:
    return bool(MONTH_RE.match(value))


def _parse_day(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _check_enum(result: ValidationResult, path: str, value: str, allowed: Iterable[str]) -> None:
    allowed_set = set(allowed)
    if value not in allowed_set:
        expected = ", ".join(sorted(allowed_set))
        result.errors.append(f"{path}: '{value}' is not valid; expected one of [{expected}]")


def _check_rules(result: ValidationResult, history: History) -> None:
    rules = history.rules
    if rules.twp_threshold < 0:
        result.errors.append("rules.twp_threshold: must be >= 0")
    if rules.sga_threshold < 0:
        result.errors.append("rules.sga_threshold: must be >= 0")
    for name in ("twp_duration", "epe_duration", "twp_rolling_window", "grace_period_months"):
        if getattr(rules, name) < 1:
            result.errors.append(f"rules.{name}: must be >= 1")
    if rules.twp_rolling_window < rules.twp_duration:
        result.errors.append("rules.twp_rolling_window: must be >= twp_duration")
    if rules.sga_threshold < rules.twp_threshold:
        result.warnings.append("rules.sga_threshold: below twp_threshold is unusual but allowed")


def validate_history(history: History, today: date | None = None) -> ValidationResult:
    result = ValidationResult()
    current_index = month_index(month_of(today or date.today()))

    _check_enum(result, "earnings_type", history.earnings_type, EARNINGS_TYPES)
    _check_rules(result, history)

    seen_months: set[str] = set()
    seen_ids: set[str] = set()
    for idx, entry in enumerate(history.entries):
        base = f"entries[{idx}]"
        if entry.id in seen_ids:
            result.errors.append(f"{base}.id: duplicate id '{entry.id}'")
        seen_ids.add(entry.id)

        if entry.income < 0:
            result.errors.append(f"{base}.income: must be >= 0")

        if not _is_month_key(entry.month):
            result.errors.append(f"{base}.month: '{entry.month}' is not valid; expected YYYY-MM")
            continue
        if entry.month in seen_months:
            result.errors.append(f"{base}.month: duplicate month '{entry.month}'")
        seen_months.add(entry.month)
        if month_index(entry.month) > current_index:
            result.warnings.append(f"{base}.month: '{entry.month}' is in the future")

    for idx, period in enumerate(history.pay_periods):
        base = f"pay_periods[{idx}]"
        if period.amount < 0:
            result.errors.append(f"{base}.amount: must be >= 0")
        if period.expenses is not None:
            if period.expenses < 0:
                result.errors.append(f"{base}.expenses: must be >= 0")
            elif history.earnings_type == "wages":
                result.warnings.append(f"{base}.expenses: ignored for wages")

        start = _parse_day(period.start_date)
        end = _parse_day(period.end_date)
        if start is None:
            result.errors.append(f"{base}.start_date: '{period.start_date}' is not valid; expected YYYY-MM-DD")
        if end is None:
            result.errors.append(f"{base}.end_date: '{period.end_date}' is not valid; expected YYYY-MM-DD")
        if start is not None and end is not None and end < start:
            result.warnings.append(f"{base}.start_date/{base}.end_date: end_date before start_date contributes nothing")

    return result
