"""Text and JSON reporting of engine results."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from enum import Enum
import json
from pathlib import Path
from typing import Any

from .engine import CalculationResult, Phase, epe_months_elapsed
from .months import format_month_readable, month_span
from .rules import DEFAULT_RULES, BenefitRules


def format_currency(amount: float) -> str:
    return f"${amount:,.0f}"


def _milestone(value: str | None) -> str:
    return format_month_readable(value) if value else "-"


def render_summary(result: CalculationResult, today: date, rules: BenefitRules = DEFAULT_RULES) -> str:
    lines = [
        f"Current phase: {result.current_phase.label}",
        f"Trial work months used: {result.twp_months_used} of {rules.twp_duration}",
        f"TWP completed: {_milestone(result.twp_completed_date)}",
        f"EPE: {_milestone(result.epe_start_date)} through {_milestone(result.epe_end_date)}",
        f"Grace period start: {_milestone(result.grace_period_start_date)}",
    ]
    if result.epe_start_date and result.epe_end_date and result.current_phase is not Phase.TWP:
        total = month_span(result.epe_start_date, result.epe_end_date)
        lines.append(f"EPE months elapsed: {epe_months_elapsed(result, today)} of {total}")

    if result.entries:
        lines.append("")
        lines.append(f"{'Month':<16}{'Income':>10}  {'Phase':<32}Status")
        for entry in result.entries:
            lines.append(
                f"{format_month_readable(entry.month):<16}{format_currency(entry.income):>10}  "
                f"{entry.phase_at_time.label:<32}{entry.benefit_status.label}"
            )
    return "\n".join(lines)


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def result_to_dict(result: CalculationResult) -> dict[str, Any]:
    return json.loads(json.dumps(asdict(result), default=_json_default))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
