"""History schema dataclasses and JSON loading."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
import math
from pathlib import Path
import random
import string
from typing import Any

from .rules import DEFAULT_RULES, FLOAT_FIELDS, INT_FIELDS, BenefitRules

ID_ALPHABET = string.ascii_lowercase + string.digits


class SchemaError(ValueError):
    """Raised when raw JSON cannot be parsed into schema objects."""


def _expect_dict(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"{path}: expected object")
    return value


def _expect_list(value: Any, path: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"{path}: expected array")
    return value


def _expect_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"{path}: expected number")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise SchemaError(f"{path}: expected finite number")
    return number


def _expect_string(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{path}: expected string")
    return value


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        raise SchemaError(f"{path}.{key}: missing required field")
    return data[key]


def _optional(data: dict[str, Any], key: str, default: Any = None) -> Any:
    return data.get(key, default)


def new_entry_id() -> str:
    return "".join(random.choices(ID_ALPHABET, k=9))


@dataclass(frozen=True, slots=True)
class WorkEntry:
    id: str
    month: str
    income: float
    note: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "WorkEntry":
        entry_id = _optional(data, "id")
        note = _optional(data, "note")
        return cls(
            id=str(entry_id) if entry_id is not None else new_entry_id(),
            month=str(_require(data, "month", path)),
            income=_expect_number(_require(data, "income", path), f"{path}.income"),
            note=_expect_string(note, f"{path}.note") if note is not None else None,
        )


@dataclass(frozen=True, slots=True)
class PayPeriod:
    amount: float
    start_date: str
    end_date: str
    expenses: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: str) -> "PayPeriod":
        expenses = _optional(data, "expenses")
        return cls(
            amount=_expect_number(_require(data, "amount", path), f"{path}.amount"),
            start_date=str(_require(data, "start_date", path)),
            end_date=str(_require(data, "end_date", path)),
            expenses=_expect_number(expenses, f"{path}.expenses") if expenses is not None else None,
        )


def parse_rules(data: dict[str, Any], path: str = "rules") -> BenefitRules:
    """Overlay a ``rules`` object on the default benefit-year rules."""
    known = set(INT_FIELDS) | set(FLOAT_FIELDS)
    for key in data:
        if key not in known:
            raise SchemaError(f"{path}.{key}: unknown rule")
    overrides: dict[str, Any] = {}
    for key in FLOAT_FIELDS:
        if key in data:
            overrides[key] = _expect_number(data[key], f"{path}.{key}")
    for key in INT_FIELDS:
        if key in data:
            value = _expect_number(data[key], f"{path}.{key}")
            if not value.is_integer():
                raise SchemaError(f"{path}.{key}: expected whole number")
            overrides[key] = int(value)
    return replace(DEFAULT_RULES, **overrides)


@dataclass(slots=True)
class History:
    entries: list[WorkEntry] = field(default_factory=list)
    pay_periods: list[PayPeriod] = field(default_factory=list)
    earnings_type: str = "wages"
    rules: BenefitRules = DEFAULT_RULES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "History":
        return cls(
            entries=[
                WorkEntry.from_dict(_expect_dict(item, f"entries[{idx}]"), f"entries[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "entries", []), "entries"))
            ],
            pay_periods=[
                PayPeriod.from_dict(_expect_dict(item, f"pay_periods[{idx}]"), f"pay_periods[{idx}]")
                for idx, item in enumerate(_expect_list(_optional(data, "pay_periods", []), "pay_periods"))
            ],
            earnings_type=_expect_string(_optional(data, "earnings_type", "wages"), "earnings_type"),
            rules=parse_rules(_expect_dict(_optional(data, "rules", {}), "rules")),
        )


def load_history(path: str | Path) -> History:
    """Load history JSON into strongly-typed dataclasses."""
    source = Path(path)
    raw = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise SchemaError("history: root must be a JSON object")
    return History.from_dict(raw)
