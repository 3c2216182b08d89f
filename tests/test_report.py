from datetime import date

from tests.helpers import make_entries, monthly
from wit.engine import calculate_status
from wit.report import format_currency, render_summary, result_to_dict, write_json

TODAY = date(2026, 10, 19)


def test_format_currency_rounds_to_whole_dollars():
    assert format_currency(1300) == "$1,300"
    assert format_currency(583.333) == "$583"
    assert format_currency(0) == "$0"


def test_summary_for_history_still_in_trial_work_period():
    result = calculate_status(make_entries(monthly("2025-01", 3, 1300)), today=TODAY)
    text = render_summary(result, TODAY)

    assert "Current phase: Trial Work Period" in text
    assert "Trial work months used: 3 of 9" in text
    assert "TWP completed: -" in text
    assert "EPE months elapsed" not in text
    assert "March 2025" in text


def test_summary_lists_entries_most_recent_first():
    rows = monthly("2024-01", 9, 1300) + [("2024-10", 2000)]
    text = render_summary(calculate_status(make_entries(rows), today=TODAY), TODAY)
    lines = text.splitlines()
    header = lines.index(next(line for line in lines if line.startswith("Month")))

    assert lines[header + 1].startswith("October 2024")
    assert "Grace Period (Paid)" in lines[header + 1]
    assert lines[-1].startswith("January 2024")
    assert "Check Received" in lines[-1]


def test_result_to_dict_uses_enum_names(tmp_path):
    result = calculate_status(make_entries(monthly("2024-01", 9, 1300)), today=TODAY)
    payload = result_to_dict(result)

    assert payload["current_phase"] == "EPE"
    assert payload["twp_months_used"] == 9
    assert payload["entries"][0]["phase_at_time"] == "TWP"
    assert payload["entries"][0]["benefit_status"] == "PAID"
    assert payload["grace_period_start_date"] is None

    path = tmp_path / "out.json"
    write_json(path, payload)
    assert '"epe_end_date": "2027-09"' in path.read_text(encoding="utf-8")
