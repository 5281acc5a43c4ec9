"""
rechargekit_core.scenarios
--------------------------
Scenario tables built on top of the calculator.

Goal
----
A single calculation answers "what does *this* basin do?". Farmers usually
ask the next question: "what if it were bigger, the soil slower, or the
credit price lower?". These helpers:
- sweep one input over a list of values and tabulate the results
- lay out a cumulative cash flow over a number of years

Inputs and units
----------------
- Same units as `RechargeInputs` (acres, in/day, days, ft, $, kWh).
- Tables are pandas DataFrames with snake_case result columns.
"""

from __future__ import annotations

import math
from dataclasses import asdict, fields
from typing import Iterable

import pandas as pd

from .config import RechargeInputs
from .parity import DEFAULT_PARITY, ParityFactors, evaluate

SWEEPABLE_FIELDS = [f.name for f in fields(RechargeInputs)]


def _validate_field(name: str) -> None:
    """
    Internal helper: ensure `name` is an input we can sweep.

    Raises
    ------
    ValueError: if `name` is not a RechargeInputs field.
    """
    if name not in SWEEPABLE_FIELDS:
        raise ValueError(f"Cannot sweep '{name}'. Expected one of: {SWEEPABLE_FIELDS}")


def build_sensitivity_table(
    inputs: RechargeInputs,
    field: str,
    values: Iterable[float],
    factors: ParityFactors = DEFAULT_PARITY,
) -> pd.DataFrame:
    """
    Re-run the calculator for each value of one input.

    Parameters
    ----------
    inputs : RechargeInputs
        Base case; every other field stays fixed.
    field : str
        snake_case input to vary (e.g., "land_acres").
    values : iterable of float
        Values to test. Negative values are floored at 0; nan is kept and
        propagates into the results, as in `engine.compute`.
    factors : ParityFactors
        Parity correction applied to each run.

    Returns
    -------
    pandas.DataFrame
        One row per value, sorted by value. Columns: `field` (the swept
        input's name), `value`, then every result field.

    Notes
    -----
    - nan rows sort last.
    - Duplicate values are kept; the table is one row per requested value.
    - An empty `values` gives an empty table with the expected columns.
    """
    _validate_field(field)

    rows = []
    for v in values:
        v = float(v)
        if not math.isnan(v):
            v = max(0.0, v)
        result = evaluate(inputs.replace(**{field: v}), factors)
        row = {"field": field, "value": v}
        row.update(asdict(result))
        rows.append(row)

    if not rows:
        from .engine import RESULT_ALIASES

        return pd.DataFrame(columns=["field", "value", *RESULT_ALIASES])

    return pd.DataFrame(rows).sort_values("value", kind="stable").reset_index(drop=True)


def cumulative_cash_flow(result, years: int = 20) -> pd.DataFrame:
    """
    Year-by-year cumulative cash position for a constant net annual cash flow.

    Year 0 is the construction year (−capex). Each later year adds
    `net_annual`. No discounting, no escalation: it is the picture behind
    the simple payback number.

    Returns
    -------
    pandas.DataFrame with columns: year, cash_flow, cumulative
    """
    n = max(1, int(years))
    rows = []
    for year in range(n + 1):
        flow = -result.capex if year == 0 else result.net_annual
        rows.append(
            {
                "year": year,
                "cash_flow": flow,
                "cumulative": -result.capex + year * result.net_annual,
            }
        )
    return pd.DataFrame(rows)
