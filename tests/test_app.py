"""
Streamlit app smoke test (headless, via streamlit's AppTest).
"""

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from streamlit.testing.v1 import AppTest  # noqa: E402

APP_PATH = Path(__file__).parent.parent / "app.py"


def test_app_renders_and_releases_figures(tmp_path, monkeypatch):
    monkeypatch.setenv("RECHARGEKIT_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("RECHARGEKIT_REPORTS_DIR", str(tmp_path / "reports"))
    plt.close("all")

    at = AppTest.from_file(str(APP_PATH), default_timeout=60)
    at.run()
    at.run()

    assert not at.exception
    assert len(at.error) == 0
    # Both charts are closed after rendering, so reruns do not accumulate figures
    assert plt.get_fignums() == []
