"""
Shared fixtures for the RechargeKit test suite.
"""

from pathlib import Path
import sys

import pytest

# Make the repo root importable when running `pytest` from a checkout
REPO_ROOT = Path(__file__).parent.parent.resolve()
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rechargekit_core.config import DEFAULT_INPUTS  # noqa: E402
from rechargekit_core.io import SubmissionStore  # noqa: E402


@pytest.fixture()
def baseline_inputs():
    """10 acres, 2 in/day, 120 days: the spreadsheet's worked example."""
    return DEFAULT_INPUTS


@pytest.fixture()
def baseline_payload():
    """Same example as a JSON request body."""
    return {
        "landAcres": 10,
        "infiltrationInPerDay": 2,
        "rechargeDays": 120,
        "avgBasinDepthFt": 4,
        "capexPerAcre": 20000,
        "omPerAcreFoot": 20,
        "waterPricePerAF": 250,
        "pumpingKWhPerAF": 150,
        "electricityPerKWh": 0.18,
    }


@pytest.fixture()
def store(tmp_path):
    """Submission store writing into a temporary folder."""
    return SubmissionStore(tmp_path / "data" / "submissions.csv")
