"""
rechargekit_core.report
-----------------------
Create a simple PDF report using ReportLab.

What this file provides
-----------------------
- generate_pdf_report(inputs, result, out_path, fig=None, table=None, currency_digits=0) -> str

Inputs
------
- inputs : RechargeInputs
    Printed as the "Inputs" table so the report stands on its own.
- result : RechargeResult
    Already parity-adjusted (callers use `parity.evaluate`).
- fig : matplotlib.figure.Figure | None
    Optional plot to embed (the app passes the cash-flow chart).
- table : pandas.DataFrame | None
    Optional sensitivity table from `scenarios.build_sensitivity_table`.
- out_path : str | Path
    Where to write the PDF.

Output
------
- Returns the path to the written PDF (as str). Creates parent folders if missing.

Notes
-----
- We rasterize the Matplotlib figure into PNG bytes and place it into the PDF.
- Layout is deliberately plain; it replaces "print the web page".
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from .formatting import fmt_currency, fmt_number, fmt_payback, results_rows
from .version import __version__

# (label, attribute, unit) rows for the inputs table, in form order
_INPUT_ROWS = [
    ("Basin area", "land_acres", "acres"),
    ("Infiltration rate", "infiltration_in_per_day", "in/day"),
    ("Recharge season", "recharge_days", "days"),
    ("Average basin depth", "avg_basin_depth_ft", "ft"),
    ("Construction (CAPEX)", "capex_per_acre", "$/acre"),
    ("O&M cost", "om_per_acre_foot", "$/AF"),
    ("Water value / credit", "water_price_per_af", "$/AF"),
    ("Pumping energy", "pumping_kwh_per_af", "kWh/AF"),
    ("Electricity price", "electricity_per_kwh", "$/kWh"),
]

# Compact set of sensitivity columns that fits the page width
_TABLE_COLUMNS = ["value", "seasonal_af", "capex", "net_annual", "simple_payback_yrs"]

_TABLE_STYLE = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#e6e6e6")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f7f7f7")]),
    ]
)


def _figure_to_png_bytes(fig) -> BytesIO:
    """
    Convert a Matplotlib Figure to an in-memory PNG.

    We use bytes (not temp files) to keep this cross-platform and simple.
    """
    bio = BytesIO()
    fig.savefig(bio, format="png", dpi=200, bbox_inches="tight")
    bio.seek(0)
    return bio


def _plain_language_summary(inputs, result, currency_digits: int = 0) -> str:
    """
    Build a short, plain-language summary paragraph.

    Keeps wording simple: how much water, what it costs, when it pays back.
    """
    money_fmt = lambda v: fmt_currency(v, currency_digits)  # noqa: E731
    recharge = (
        f"A {fmt_number(inputs.land_acres, 1)}-acre basin infiltrating "
        f"{fmt_number(inputs.infiltration_in_per_day, 2)} in/day over "
        f"{fmt_number(inputs.recharge_days, 0)} days recharges about "
        f"{fmt_number(result.seasonal_af, 0)} acre-feet per season."
    )
    if result.has_payback:
        money = (
            f" After O&M and pumping it nets about {money_fmt(result.net_annual)} a year, "
            f"so the {money_fmt(result.capex)} construction cost pays back in roughly "
            f"{fmt_payback(result.simple_payback_yrs)}."
        )
    else:
        money = (
            f" Recharge credits ({money_fmt(result.revenue)}) less annual costs "
            f"({money_fmt(result.total_annual_cost)}) leave a net annual cash flow of "
            f"{money_fmt(result.net_annual)}, which is not positive, so the "
            f"{money_fmt(result.capex)} construction cost is never recovered."
        )
    return recharge + money


def _sensitivity_rows(table, currency_digits: int = 0):
    """Header + formatted rows for the sensitivity table."""
    cols = [c for c in _TABLE_COLUMNS if c in table.columns]
    swept = str(table["field"].iloc[0]) if "field" in table.columns and len(table) else "value"

    header = [swept.replace("_", " ").title() if c == "value" else c.replace("_", " ").title() for c in cols]
    data = [header]
    for _, row in table.iterrows():
        cells = []
        for c in cols:
            if c == "simple_payback_yrs":
                cells.append(fmt_payback(row[c]))
            elif c in ("capex", "net_annual"):
                cells.append(fmt_currency(row[c], currency_digits))
            else:
                cells.append(fmt_number(row[c], 2))
        data.append(cells)
    return data


def _results_data(result, currency_digits: int = 0):
    """Header + formatted rows for the results table."""
    return [["Result", "Value"]] + [list(r) for r in results_rows(result, currency_digits)]


def generate_pdf_report(inputs, result, out_path, fig=None, table=None, currency_digits: int = 0) -> str:
    """
    Create a concise PDF report containing:
    - Title + version
    - Plain-language summary
    - Inputs table and results table
    - Optional sensitivity table and figure

    Money is shown with `currency_digits` decimals (the app passes
    `AppConfig.currency_digits` so the PDF matches the screen).

    Returns
    -------
    str
        The absolute path to the created PDF.

    Errors and how to handle
    ------------------------
    - If the parent folder is missing, we create it.
    - If the sensitivity table is empty, that section is skipped.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(out_path),
        pagesize=letter,
        title="Recharge Basin Assessment",
        author="RechargeKit",
    )
    styles = getSampleStyleSheet()
    story = []

    # Title
    story.append(Paragraph("Recharge Basin Assessment", styles["Title"]))
    story.append(Paragraph(f"RechargeKit v{__version__}", styles["Normal"]))
    story.append(Spacer(1, 0.4 * cm))

    # Summary paragraph
    story.append(Paragraph("Summary", styles["Heading2"]))
    story.append(Paragraph(_plain_language_summary(inputs, result, currency_digits), styles["BodyText"]))
    story.append(Spacer(1, 0.5 * cm))

    # Inputs
    story.append(Paragraph("Inputs", styles["Heading2"]))
    data = [["Parameter", "Value", "Unit"]]
    for label, attr, unit in _INPUT_ROWS:
        data.append([label, fmt_number(getattr(inputs, attr), 2), unit])
    tbl = Table(data, hAlign="LEFT")
    tbl.setStyle(_TABLE_STYLE)
    story.append(tbl)
    story.append(Spacer(1, 0.5 * cm))

    # Results
    story.append(Paragraph("Results", styles["Heading2"]))
    tbl = Table(_results_data(result, currency_digits), hAlign="LEFT")
    tbl.setStyle(_TABLE_STYLE)
    story.append(tbl)
    story.append(Spacer(1, 0.5 * cm))

    # Sensitivity
    if table is not None and len(table) > 0:
        story.append(Paragraph("Sensitivity", styles["Heading2"]))
        tbl = Table(_sensitivity_rows(table, currency_digits), hAlign="LEFT")
        tbl.setStyle(_TABLE_STYLE)
        story.append(tbl)
        story.append(Spacer(1, 0.5 * cm))

    # Figure
    if fig is not None:
        story.append(Paragraph("Figures", styles["Heading2"]))
        story.append(Image(_figure_to_png_bytes(fig), width=16 * cm, height=9 * cm))
        story.append(Spacer(1, 0.4 * cm))

    story.append(
        Paragraph(
            "Prototype calculator only. Validate inputs and assumptions with your "
            "water district or consultant.",
            styles["Italic"],
        )
    )

    doc.build(story)

    return str(out_path.resolve())
