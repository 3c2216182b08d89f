import json

import pytest

from tests.helpers import SAMPLE_HISTORY


@pytest.fixture
def sample_history_dict() -> dict:
    return json.loads(SAMPLE_HISTORY.read_text(encoding="utf-8"))
