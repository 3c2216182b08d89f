"""Benefit-year work-incentive thresholds and durations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BenefitRules:
    benefit_year: int = 2025
    # Monthly earnings at or above which a month is a trial work (service) month.
    twp_threshold: float = 1050.0
    # Monthly earnings at or above which a month is substantial gainful activity.
    sga_threshold: float = 1620.0
    twp_duration: int = 9
    epe_duration: int = 36
    twp_rolling_window: int = 60
    grace_period_months: int = 3


DEFAULT_RULES = BenefitRules()

INT_FIELDS = ("benefit_year", "twp_duration", "epe_duration", "twp_rolling_window", "grace_period_months")
FLOAT_FIELDS = ("twp_threshold", "sga_threshold")
