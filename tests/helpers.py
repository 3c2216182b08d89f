import copy
import json
from pathlib import Path

from wit.schema import WorkEntry

SAMPLE_HISTORY = Path(__file__).resolve().parent.parent / "sample_history.json"


def write_history(tmp_path: Path, data: dict, filename: str = "history.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_history(data: dict) -> dict:
    return copy.deepcopy(data)


def make_entries(rows: list[tuple[str, float]]) -> list[WorkEntry]:
    return [WorkEntry(id=f"e{idx}", month=month, income=income) for idx, (month, income) in enumerate(rows)]


def monthly(first: str, count: int, income: float) -> list[tuple[str, float]]:
    year, month = (int(part) for part in first.split("-"))
    rows = []
    for _ in range(count):
        rows.append((f"{year:04d}-{month:02d}", income))
        month += 1
        if month > 12:
            month = 1
            year += 1
    return rows
