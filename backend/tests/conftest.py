import sys
from pathlib import Path

import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from schemas import TherapeuticSession  # noqa: E402


@pytest.fixture(autouse=True)
def _no_telemetry_writes(monkeypatch):
    monkeypatch.setenv("COMPLIANCE_TELEMETRY_ENABLED", "0")
    yield


@pytest.fixture
def session() -> TherapeuticSession:
    return TherapeuticSession(session_id="s-1", user_id="u-1")
