"""Month-by-month SSDI work-incentive phase and benefit-status engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
import logging
from typing import Iterable

from .months import add_months, month_index, month_of, month_span
from .rules import DEFAULT_RULES, BenefitRules
from .schema import WorkEntry

logger = logging.getLogger(__name__)


class Phase(Enum):
    TWP = "Trial Work Period"
    EPE = "Extended Period of Eligibility"
    POST_EPE = "Post-Eligibility"
    UNKNOWN = "Not Started"

    @property
    def label(self) -> str:
        return self.value


class BenefitStatus(Enum):
    PAID = "Check Received"
    SUSPENDED = "Check Suspended"
    GRACE = "Grace Period (Paid)"
    TERMINATED = "Benefits Terminated"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


@dataclass(slots=True)
class AnalyzedEntry:
    id: str
    month: str
    income: float
    note: str | None
    is_twp_month: bool
    is_sga_month: bool
    phase_at_time: Phase
    benefit_status: BenefitStatus


@dataclass(slots=True)
class CalculationResult:
    current_phase: Phase
    twp_months_used: int
    twp_completed_date: str | None
    epe_start_date: str | None
    epe_end_date: str | None
    grace_period_start_date: str | None
    entries: list[AnalyzedEntry]


@dataclass(slots=True)
class _RunState:
    service_months: list[str] = field(default_factory=list)
    twp_completed_date: str | None = None
    epe_start_date: str | None = None
    epe_end_date: str | None = None
    grace_period_start_date: str | None = None


def _phase_for_month(index: int, state: _RunState) -> Phase:
    if state.twp_completed_date is None or index <= month_index(state.twp_completed_date):
        return Phase.TWP
    if state.epe_end_date is not None and index > month_index(state.epe_end_date):
        return Phase.POST_EPE
    return Phase.EPE


def _twp_window_complete(service_months: list[str], rules: BenefitRules) -> bool:
    """True when the latest ``twp_duration`` service months fit inside the rolling window."""
    if len(service_months) < rules.twp_duration:
        return False
    window = service_months[-rules.twp_duration:]
    return month_span(window[0], window[-1]) <= rules.twp_rolling_window


def _record_service_month(month: str, state: _RunState, rules: BenefitRules) -> None:
    state.service_months.append(month)
    if state.twp_completed_date is not None or not _twp_window_complete(state.service_months, rules):
        return
    state.twp_completed_date = month
    state.epe_start_date = add_months(month, 1)
    state.epe_end_date = add_months(state.epe_start_date, rules.epe_duration - 1)
    logger.debug(
        "TWP completed %s after %d service months; EPE %s through %s",
        month,
        len(state.service_months),
        state.epe_start_date,
        state.epe_end_date,
    )


def _in_grace_period(index: int, state: _RunState, rules: BenefitRules) -> bool:
    if state.grace_period_start_date is None:
        return False
    start = month_index(state.grace_period_start_date)
    return start <= index <= start + rules.grace_period_months - 1


def _epe_status(month: str, index: int, is_sga: bool, state: _RunState, rules: BenefitRules) -> BenefitStatus:
    if _in_grace_period(index, state, rules):
        return BenefitStatus.GRACE
    if is_sga and state.grace_period_start_date is None:
        state.grace_period_start_date = month
        logger.debug("Grace period started %s", month)
        return BenefitStatus.GRACE
    return BenefitStatus.SUSPENDED if is_sga else BenefitStatus.PAID


def _benefit_status(
    phase: Phase,
    month: str,
    index: int,
    is_sga: bool,
    state: _RunState,
    rules: BenefitRules,
) -> BenefitStatus:
    if phase is Phase.TWP:
        # Income never affects payment during the trial work period.
        return BenefitStatus.PAID
    if phase is Phase.EPE:
        return _epe_status(month, index, is_sga, state, rules)
    if phase is Phase.POST_EPE:
        return BenefitStatus.TERMINATED if is_sga else BenefitStatus.PAID
    return BenefitStatus.UNKNOWN


def _current_phase(today: date, state: _RunState) -> Phase:
    if state.epe_start_date is None or state.epe_end_date is None:
        return Phase.TWP
    current = month_index(month_of(today))
    if current < month_index(state.epe_start_date):
        return Phase.TWP
    if current <= month_index(state.epe_end_date):
        return Phase.EPE
    return Phase.POST_EPE


def calculate_status(
    entries: Iterable[WorkEntry],
    *,
    today: date | None = None,
    rules: BenefitRules = DEFAULT_RULES,
) -> CalculationResult:
    """Classify every reported month and derive the history's milestones.

    Entries are walked oldest first; months without an entry are skipped, never
    treated as zero income. ``today`` only affects ``current_phase`` and defaults
    to the system date. The input entries are not modified. The returned
    ``entries`` are most recent first.
    """
    if today is None:
        today = date.today()

    state = _RunState()
    analyzed: list[AnalyzedEntry] = []
    for entry in sorted(entries, key=lambda item: month_index(item.month)):
        index = month_index(entry.month)
        is_twp_month = entry.income >= rules.twp_threshold
        is_sga_month = entry.income >= rules.sga_threshold
        phase = _phase_for_month(index, state)

        if phase is Phase.TWP and is_twp_month:
            _record_service_month(entry.month, state, rules)

        status = _benefit_status(phase, entry.month, index, is_sga_month, state, rules)
        analyzed.append(
            AnalyzedEntry(
                id=entry.id,
                month=entry.month,
                income=entry.income,
                note=entry.note,
                is_twp_month=is_twp_month,
                is_sga_month=is_sga_month,
                phase_at_time=phase,
                benefit_status=status,
            )
        )

    twp_months_used = rules.twp_duration if state.twp_completed_date else len(state.service_months)
    analyzed.reverse()
    return CalculationResult(
        current_phase=_current_phase(today, state),
        twp_months_used=twp_months_used,
        twp_completed_date=state.twp_completed_date,
        epe_start_date=state.epe_start_date,
        epe_end_date=state.epe_end_date,
        grace_period_start_date=state.grace_period_start_date,
        entries=analyzed,
    )


def epe_months_elapsed(result: CalculationResult, today: date) -> int:
    """Number of EPE months that have begun as of ``today`` (0 through the EPE length)."""
    if result.epe_start_date is None or result.epe_end_date is None:
        return 0
    total = month_span(result.epe_start_date, result.epe_end_date)
    elapsed = month_index(month_of(today)) - month_index(result.epe_start_date) + 1
    return max(0, min(total, elapsed))
