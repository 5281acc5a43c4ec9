"""
PDF report smoke tests.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from rechargekit_core.engine import compute  # noqa: E402
from rechargekit_core.report import (  # noqa: E402
    _plain_language_summary,
    _results_data,
    _sensitivity_rows,
    generate_pdf_report,
)
from rechargekit_core.scenarios import build_sensitivity_table, cumulative_cash_flow  # noqa: E402


def test_report_with_table_and_figure(tmp_path, baseline_inputs):
    result = compute(baseline_inputs)
    table = build_sensitivity_table(baseline_inputs, "land_acres", [5.0, 10.0, 20.0])
    flows = cumulative_cash_flow(result, years=10)
    fig, ax = plt.subplots()
    ax.bar(flows["year"], flows["cumulative"])

    out = generate_pdf_report(baseline_inputs, result, tmp_path / "out" / "report.pdf", fig=fig, table=table)
    plt.close(fig)

    data = (tmp_path / "out" / "report.pdf").read_bytes()
    assert out.endswith("report.pdf")
    assert data.startswith(b"%PDF")


def test_report_without_payback(tmp_path, baseline_inputs):
    inputs = baseline_inputs.replace(water_price_per_af=0.0)
    out = generate_pdf_report(inputs, compute(inputs), tmp_path / "report.pdf")
    assert (tmp_path / "report.pdf").stat().st_size > 0
    assert out


def test_summary_wording(baseline_inputs):
    ok = _plain_language_summary(baseline_inputs, compute(baseline_inputs))
    assert "200 acre-feet" in ok
    assert "4.9 years" in ok

    losing = baseline_inputs.replace(water_price_per_af=0.0)
    text = _plain_language_summary(losing, compute(losing))
    assert "never recovered" in text
    assert "not positive" in text


def test_summary_for_zero_land_does_not_blame_costs(baseline_inputs):
    empty = baseline_inputs.replace(land_acres=0.0)
    text = _plain_language_summary(empty, compute(empty))

    assert "not covered" not in text
    assert "net annual cash flow of $0" in text


def test_currency_digits_reach_every_money_cell(baseline_inputs):
    result = compute(baseline_inputs)
    rows = dict(_results_data(result, currency_digits=2)[1:])
    assert rows["CAPEX (one-time)"] == "$200,000.00"

    table = build_sensitivity_table(baseline_inputs, "land_acres", [10.0])
    header, first = _sensitivity_rows(table, currency_digits=2)
    assert first[header.index("Capex")] == "$200,000.00"

    assert "$200,000.00" in _plain_language_summary(baseline_inputs, result, currency_digits=2)


def test_report_accepts_currency_digits(tmp_path, baseline_inputs):
    generate_pdf_report(baseline_inputs, compute(baseline_inputs), tmp_path / "r.pdf", currency_digits=2)
    assert (tmp_path / "r.pdf").read_bytes().startswith(b"%PDF")
