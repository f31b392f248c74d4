import sys
from pathlib import Path

import pytest

# Ensure the repo root (parent of this file) is importable when running pytest from anywhere
THIS_DIR = Path(__file__).resolve().parent
ROOT_DIR = THIS_DIR.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from session import VentilationSession  # noqa: E402


@pytest.fixture()
def session() -> VentilationSession:
    return VentilationSession()


@pytest.fixture()
def decreasing_session(session: VentilationSession) -> VentilationSession:
    session.submit_reading("10:00", "1000")
    session.submit_reading("10:10", "800")
    return session
