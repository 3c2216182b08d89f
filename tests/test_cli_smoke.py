import json

import pytest

from tests.helpers import SAMPLE_HISTORY, clone_history, write_history
from wit.__main__ import main


def test_validate_mode_exits_zero(capsys):
    code = main([str(SAMPLE_HISTORY), "--validate", "--as-of", "2026-10-19"])

    assert code == 0
    assert "History is valid." in capsys.readouterr().out


def test_invalid_history_returns_one(tmp_path, sample_history_dict, capsys):
    data = clone_history(sample_history_dict)
    data["entries"][1]["month"] = data["entries"][0]["month"]
    path = write_history(tmp_path, data)

    code = main([str(path), "--validate"])

    assert code == 1
    assert "ERROR: entries[1].month: duplicate month '2024-01'" in capsys.readouterr().err


def test_missing_history_file_returns_two(tmp_path):
    missing = tmp_path / "nope.json"
    code = main([str(missing)])
    assert code == 2


def test_malformed_json_returns_two(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    code = main([str(path)])

    assert code == 2
    assert "Failed to load history" in capsys.readouterr().err


def test_summary_reports_current_phase(capsys):
    code = main([str(SAMPLE_HISTORY), "--as-of", "2026-10-19"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Current phase: Extended Period of Eligibility" in out
    assert "Trial work months used: 9 of 9" in out
    assert "Grace period start: October 2024" in out
    assert "EPE months elapsed: 25 of 36" in out


def test_output_writes_json_result(tmp_path):
    output_path = tmp_path / "result.json"
    code = main([str(SAMPLE_HISTORY), "--as-of", "2026-10-19", "-o", str(output_path)])

    assert code == 0
    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert payload["current_phase"] == "EPE"
    assert payload["twp_completed_date"] == "2024-09"
    assert payload["entries"][0]["month"] == "2025-02"
    assert payload["entries"][1]["benefit_status"] == "SUSPENDED"


def test_attribute_prints_prorated_total(capsys):
    code = main([str(SAMPLE_HISTORY), "--attribute", "2025-03", "--as-of", "2026-10-19"])

    assert code == 0
    assert "Attributed to March 2025: $850 (850.00)" in capsys.readouterr().out


def test_bad_as_of_date_is_rejected_by_parser():
    with pytest.raises(SystemExit) as excinfo:
        main([str(SAMPLE_HISTORY), "--as-of", "October"])
    assert excinfo.value.code == 2


def test_verbose_logs_milestones(caplog):
    with caplog.at_level("DEBUG", logger="wit"):
        code = main([str(SAMPLE_HISTORY), "--as-of", "2026-10-19", "-v"])

    assert code == 0
    assert "TWP completed 2024-09" in caplog.text
    assert "Grace period started 2024-10" in caplog.text


@pytest.mark.parametrize(
    "mutator",
    [
        lambda d: d.update({"earnings_type": ["wages"]}),
        lambda d: d["entries"][0].update({"income": float("nan")}),
        lambda d: d["entries"][0].update({"note": 5}),
    ],
)
def test_malformed_values_return_two(tmp_path, sample_history_dict, mutator, capsys):
    data = clone_history(sample_history_dict)
    mutator(data)
    path = write_history(tmp_path, data)

    code = main([str(path), "--validate"])

    assert code == 2
    assert "Failed to load history" in capsys.readouterr().err
