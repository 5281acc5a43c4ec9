"""
app.py — Streamlit UI for RechargeKit (recharge basin assessment)

Audience
--------
Farmers and water managers in California's Central Valley deciding whether
to set land aside as a groundwater recharge basin. Every input is labelled
with its unit.

What this app does (end-to-end)
-------------------------------
1) Sidebar inputs: land & recharge, soil preset (or a location suggestion),
   economics, pumping. "Reset defaults" restores the baseline example.
2) Run the calculator through the parity stage (`evaluate`).
3) Show hydraulic cards, the cost/revenue breakdown and simple payback.
4) Sensitivity: sweep one input and plot net annual cash flow and payback.
5) Cumulative cash-flow chart, CSV download, optional saving of the inputs.
6) Generate a PDF report (summary + tables + chart).

Design
------
- US customary units: acres, in/day, ft, AF, $.
- Closed-form, single-season model (no transient infiltration, no discounting).
- Streamlit reruns on every widget change, so we keep the last figure/table
  in st.session_state for the PDF button.
"""

from __future__ import annotations

import math
import traceback
from dataclasses import asdict

import streamlit as st

from rechargekit_core.config import DEFAULT_INPUTS, FIELD_ALIASES, RechargeInputs, build_config
from rechargekit_core.formatting import fmt_number, fmt_payback, results_rows
from rechargekit_core.io import SubmissionStore
from rechargekit_core.parity import evaluate
from rechargekit_core.scenarios import build_sensitivity_table, cumulative_cash_flow
from rechargekit_core.soils import (
    DEFAULT_SOIL_KEY,
    SOIL_PRESETS,
    geocode_place,
    get_soil,
    suggest_soil_for_location,
)
from rechargekit_core.version import __version__

cfg = build_config()


# ------------------------------------------------------------
# Session state: form values live here so "Reset" and the soil
# selector can overwrite them.
# ------------------------------------------------------------
def _reset_defaults():
    for name, value in asdict(DEFAULT_INPUTS).items():
        st.session_state[name] = float(value)
    st.session_state["soil_key"] = DEFAULT_SOIL_KEY


def _apply_soil():
    soil = get_soil(st.session_state["soil_key"])
    st.session_state["infiltration_in_per_day"] = soil.in_per_day


def _suggest_soil():
    lat, lon = st.session_state["lat"], st.session_state["lon"]
    try:
        if st.session_state["place"].strip():
            lat, lon = geocode_place(st.session_state["place"])
        soil = suggest_soil_for_location(lat, lon)
    except Exception as e:
        st.session_state["suggest_msg"] = ("error", f"Location lookup failed: {e}")
        return
    st.session_state["soil_key"] = soil.key
    st.session_state["infiltration_in_per_day"] = soil.in_per_day
    st.session_state["suggest_msg"] = (
        "ok",
        f"Lat {lat:.4f}, Lng {lon:.4f}: suggested {soil.label} ({soil.in_per_day} in/day)",
    )


if "land_acres" not in st.session_state:
    _reset_defaults()


# ------------------------------------------------------------
# Page & Sidebar: user inputs
# ------------------------------------------------------------
st.set_page_config(page_title="Recharge Basin Assessment", layout="wide")

st.sidebar.title("RechargeKit")
st.sidebar.caption(f"Version {__version__}")

st.sidebar.header("Land & Recharge")
st.sidebar.number_input("Basin area (acres)", min_value=0.0, step=1.0, key="land_acres")

soil_keys = [s.key for s in SOIL_PRESETS]
st.sidebar.selectbox(
    "Soil type",
    options=soil_keys,
    format_func=lambda k: get_soil(k).label,
    key="soil_key",
    on_change=_apply_soil,
    help="Choose a soil profile to prefill a typical infiltration rate. You can still edit the rate below.",
)

with st.sidebar.expander("Suggest soil from location"):
    st.text_input("Place (OSM geocoding)", value="", key="place", help="Example: 'Fresno, California'.")
    st.number_input("Latitude", value=36.5, format="%.4f", key="lat")
    st.number_input("Longitude", value=-119.5, format="%.4f", key="lon")
    st.button("Suggest soil", on_click=_suggest_soil)
    msg = st.session_state.pop("suggest_msg", None)
    if msg is not None:
        level, text = msg
        (st.success if level == "ok" else st.error)(text)

st.sidebar.number_input(
    "Average infiltration rate (in/day)",
    min_value=0.0,
    step=0.1,
    key="infiltration_in_per_day",
    help="Use field data or Web Soil Survey to refine.",
)
st.sidebar.number_input("Recharge season (days)", min_value=0.0, step=1.0, key="recharge_days")
st.sidebar.number_input(
    "Average basin depth (ft)",
    min_value=0.0,
    step=0.5,
    key="avg_basin_depth_ft",
    help="Only used for the rough excavation volume.",
)

st.sidebar.header("Economics")
st.sidebar.number_input("Construction CAPEX ($/acre)", min_value=0.0, step=500.0, key="capex_per_acre")
st.sidebar.number_input("O&M cost ($/AF)", min_value=0.0, step=1.0, key="om_per_acre_foot")
st.sidebar.number_input("Water value / credit ($/AF)", min_value=0.0, step=5.0, key="water_price_per_af")

st.sidebar.header("Pumping (optional)")
st.sidebar.number_input("Energy use (kWh/AF)", min_value=0.0, step=5.0, key="pumping_kwh_per_af")
st.sidebar.number_input(
    "Electricity price ($/kWh)", min_value=0.0, step=0.01, format="%.3f", key="electricity_per_kwh"
)

st.sidebar.button("Reset defaults", on_click=_reset_defaults)
save_btn = st.sidebar.button("Save my inputs", help="Stores these inputs (not the results) with a timestamp.")

# Heading
st.title("Recharge Basin Assessment")
st.write(
    "Groundwater recharge basins capture surface water and let it soak back into the "
    "ground to replenish aquifers. This tool estimates recharge volume, costs, and "
    "simple payback when setting aside land for a basin."
)


# ------------------------------------------------------------
# Main: a single function that renders results once
# ------------------------------------------------------------
def run_once():
    """
    Compute and render results for the current sidebar values.

    Steps
    -----
    1) Build RechargeInputs from session state and evaluate (compute + parity).
    2) Render hydraulics and economics.
    3) Sensitivity sweep + plots.
    4) CSV export and session state for the PDF section.
    """
    inputs = RechargeInputs(**{name: float(st.session_state[name]) for name in FIELD_ALIASES})
    result = evaluate(inputs, cfg.parity)

    # 2) Results
    st.subheader("Hydraulics")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Average flow", f"{fmt_number(result.cfs, 3)} cfs", help=f"{fmt_number(result.gpm, 1)} gpm")
    c2.metric("Daily recharge", f"{fmt_number(result.daily_af, 3)} AF/day")
    c3.metric("Seasonal recharge", f"{fmt_number(result.seasonal_af, 2)} AF")
    c4.metric("Rough excavation", f"{fmt_number(result.excavation_yd3, 0)} yd³")

    st.subheader("Economics")
    rows = results_rows(result, cfg.currency_digits)[5:]
    st.table({"Item": [r[0] for r in rows], "Value": [r[1] for r in rows]})
    if not result.has_payback:
        st.warning("Net annual cash flow is not positive: the basin never pays back at these inputs.")

    # 3) Sensitivity
    import matplotlib.pyplot as plt

    st.subheader("Sensitivity")
    labels = {
        "land_acres": "Basin area (acres)",
        "infiltration_in_per_day": "Infiltration rate (in/day)",
        "recharge_days": "Recharge season (days)",
        "water_price_per_af": "Water value ($/AF)",
        "electricity_per_kwh": "Electricity price ($/kWh)",
    }
    field = st.selectbox("Input to vary", options=list(labels), format_func=labels.get, key="sweep_field")
    base = float(getattr(inputs, field))
    span = base if base > 0 else 1.0
    lo, hi = max(0.0, base - 0.5 * span), base + 0.5 * span
    values = [lo + i * (hi - lo) / 10 for i in range(11)]
    table = build_sensitivity_table(inputs, field, values, cfg.parity)

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(table["value"], table["net_annual"], marker="o", linewidth=2)
    ax.axhline(0.0, color="grey", linewidth=1)
    ax.set_xlabel(labels[field])
    ax.set_ylabel("Net annual cash flow ($)")
    ax.set_title("Net annual cash flow")
    ax.grid(True, linestyle="--", alpha=0.4)
    st.pyplot(fig)
    plt.close(fig)

    pretty = table[["value", "seasonal_af", "capex", "net_annual", "simple_payback_yrs"]].copy()
    pretty["simple_payback_yrs"] = pretty["simple_payback_yrs"].map(fmt_payback)
    st.dataframe(pretty.rename(columns={"value": labels[field]}))

    # --- Cumulative cash flow ---
    st.subheader("Cumulative cash flow")
    horizon = 20
    if result.has_payback:
        horizon = max(horizon, int(math.ceil(result.simple_payback_yrs)) + 2)
    flows = cumulative_cash_flow(result, years=min(horizon, 100))

    fig2, ax2 = plt.subplots(figsize=(6, 4))
    ax2.bar(flows["year"], flows["cumulative"], color=["#d95f02" if v < 0 else "#1b9e77" for v in flows["cumulative"]])
    ax2.axhline(0.0, color="grey", linewidth=1)
    ax2.set_xlabel("Year")
    ax2.set_ylabel("Cumulative cash ($)")
    ax2.set_title(f"Simple payback: {fmt_payback(result.simple_payback_yrs)}")
    ax2.grid(True, linestyle="--", alpha=0.4)
    st.pyplot(fig2)
    # Closed figures can still be saved for the PDF
    plt.close(fig2)

    # --- CSV Export ---
    st.subheader("Export results")
    csv_bytes = table.to_csv(index=False).encode("utf-8")
    st.download_button(
        label="Download sensitivity table as CSV",
        data=csv_bytes,
        file_name="rechargekit_sensitivity.csv",
        mime="text/csv",
        help="Saves the table to a CSV file you can open in Excel.",
    )

    # ---- Persist last results for the PDF section ----
    st.session_state["last_results"] = {
        "inputs": inputs,
        "result": result,
        "table": table,
        "fig": fig2,
    }
    return inputs


try:
    current_inputs = run_once()
except Exception as exc:
    st.error(f"An error occurred: {exc}")
    st.code("".join(traceback.format_exc()), language="text")
    current_inputs = None

if save_btn and current_inputs is not None:
    try:
        record = SubmissionStore(cfg.submissions_path).save(current_inputs)
        st.sidebar.success(f"Saved at {record['dateSubmitted']}")
    except Exception as e:
        st.sidebar.error(f"Saving failed: {e}")


# ------------------------------------------------------------
# PDF section — safe across reruns
# ------------------------------------------------------------
st.subheader("PDF report")
if "last_results" in st.session_state:
    from rechargekit_core.report import generate_pdf_report

    last = st.session_state["last_results"]
    pdf_path = cfg.reports_folder / "recharge_basin_report.pdf"

    if st.button("Generate PDF"):
        try:
            out_file = generate_pdf_report(
                inputs=last["inputs"],
                result=last["result"],
                out_path=pdf_path,
                fig=last["fig"],
                table=last["table"],
                currency_digits=cfg.currency_digits,
            )
            with open(out_file, "rb") as f:
                st.download_button(
                    label="Download PDF report",
                    data=f.read(),
                    file_name="recharge_basin_report.pdf",
                    mime="application/pdf",
                )
            st.success(f"Report created: {out_file}")
        except Exception as e:
            st.error(f"PDF generation failed: {e}")


# ------------------------------------------------------------
# Glossary
# ------------------------------------------------------------
with st.expander("Abbreviations & Units"):
    st.markdown(
        "- **AF**: Acre-Foot, volume of water covering one acre to a depth of 1 ft (43,560 ft³)\n"
        "- **cfs**: Cubic Feet per Second (flow rate)\n"
        "- **gpm**: Gallons per Minute (flow rate)\n"
        "- **O&M**: Operation and Maintenance cost\n"
        "- **CAPEX**: Capital Expenditure (cost to build)\n"
        "- **kWh**: Kilowatt-hour (unit of electric energy)\n"
        "- **in/day**: Inches per Day (infiltration rate)\n"
        "- **yd³**: Cubic Yard (27 ft³, used for earthwork volume)\n"
        "- **Simple payback**: CAPEX divided by net annual cash flow; none when cash flow is not positive"
    )

st.caption(
    "Prototype calculator only. Refine infiltration rates using NRCS Web Soil Survey and field "
    "tests, and validate assumptions with your water district or consultant."
)
