"""
rechargekit_core.engine
-----------------------
Recharge basin calculator: physical inputs -> hydraulic and financial results.

Audience
--------
Farm advisors and water managers who can read Python. We keep formulas
explicit and use the same US customary units as the reference spreadsheet:
- acres for land, ft² for surface area
- in/day and ft/day for infiltration
- acre-feet (AF) for volumes, cfs and gpm for flow
- dollars for money

What's here
-----------
1) Hydraulics:
   A_ft2  = acres * 43560
   i_ft   = in_per_day / 12
   AF/day = (A_ft2 * i_ft) / 43560
   AF/season = AF/day * days
   excavation_yd3 = (A_ft2 * depth_ft) / 27
   cfs = (AF/day * 43560) / 86400 ; gpm = cfs * 448.831
2) Economics (single season, no discounting):
   capex, revenue, O&M, pumping cost, net annual cash flow, simple payback

This is *not* a hydrological simulator: no transient infiltration, no
clogging, no evaporation losses. One closed-form pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

from .config import RechargeInputs, coerce_float
from .constants import FT2_PER_ACRE, FT3_PER_YD3, GPM_PER_CFS, IN_PER_FT, SEC_PER_DAY

# snake_case attribute -> camelCase wire name
RESULT_ALIASES: Dict[str, str] = {
    "surface_area_ft2": "surfaceAreaFt2",
    "infil_ft_per_day": "infilFtPerDay",
    "daily_af": "dailyAF",
    "seasonal_af": "seasonalAF",
    "excavation_yd3": "excavationYd3",
    "daily_cubic_ft": "dailyCubicFt",
    "cfs": "cfs",
    "gpm": "gpm",
    "capex": "capex",
    "revenue": "revenue",
    "om": "om",
    "pumping_cost": "pumpingCost",
    "total_annual_cost": "totalAnnualCost",
    "net_annual": "netAnnual",
    "simple_payback_yrs": "simplePaybackYrs",
}


@dataclass(frozen=True)
class RechargeResult:
    """
    Everything `compute` derives from one set of inputs.

    Hydraulics
    ----------
    surface_area_ft2 : basin surface area (ft²)
    infil_ft_per_day : infiltration rate (ft/day)
    daily_af : recharge per day (AF/day)
    seasonal_af : recharge per season (AF)
    excavation_yd3 : rough earthwork volume (yd³)
    daily_cubic_ft : recharge per day (ft³/day)
    cfs, gpm : average flow (ft³/s and gal/min), useful for pipe sizing

    Economics
    ---------
    capex : one-time construction cost ($)
    revenue : value of recharge credits per season ($)
    om : variable O&M per season ($)
    pumping_cost : electricity for pumping per season ($)
    total_annual_cost : om + pumping_cost ($)
    net_annual : revenue - total_annual_cost ($)
    simple_payback_yrs : capex / net_annual (years), or `math.inf` when the
        basin never pays back (net_annual <= 0)
    """
    # --- hydraulics ---
    surface_area_ft2: float
    infil_ft_per_day: float
    daily_af: float
    seasonal_af: float
    excavation_yd3: float
    daily_cubic_ft: float
    cfs: float
    gpm: float

    # --- economics ---
    capex: float
    revenue: float
    om: float
    pumping_cost: float
    total_annual_cost: float
    net_annual: float
    simple_payback_yrs: float

    @property
    def has_payback(self) -> bool:
        """False when payback is the unbounded sentinel (or nan)."""
        return math.isfinite(self.simple_payback_yrs)

    def to_dict(self) -> Dict[str, float]:
        """camelCase mapping, hydraulics first then economics."""
        return {RESULT_ALIASES[f.name]: getattr(self, f.name) for f in fields(self)}


def simple_payback(capex: float, net_annual: float) -> float:
    """
    Years to recover `capex` from a constant `net_annual` cash flow.

    A non-positive (or nan) net cash flow never recovers the investment, so
    the answer is `math.inf`. Callers check `math.isfinite` before formatting.
    """
    if net_annual > 0:
        return capex / net_annual
    return math.inf


def compute(inputs: RechargeInputs) -> RechargeResult:
    """
    Run the recharge basin calculation once.

    Parameters
    ----------
    inputs : RechargeInputs
        Land, infiltration, season, cost and pumping parameters.

    Returns
    -------
    RechargeResult
        Fresh, immutable result. Identical inputs always give identical results.

    Notes
    -----
    - Never raises. Values that are not numbers become nan and flow through
      the arithmetic; validation belongs to the caller (see `api.parse_inputs`).
    - Step 3 keeps the spreadsheet's form `(ft² * ft/day) / 43560` rather than
      the shorter `acres * ft/day`, so cells can be traced one-to-one.
    """
    acres = coerce_float(inputs.land_acres)
    in_per_day = coerce_float(inputs.infiltration_in_per_day)
    days = coerce_float(inputs.recharge_days)
    depth_ft = coerce_float(inputs.avg_basin_depth_ft)

    # 1) Geometry / hydraulics
    surface_area_ft2 = acres * FT2_PER_ACRE
    infil_ft_per_day = in_per_day / IN_PER_FT

    # Daily acre-feet = (ft² * ft/day) / ft² per acre
    daily_af = (surface_area_ft2 * infil_ft_per_day) / FT2_PER_ACRE
    seasonal_af = daily_af * days

    # Rough excavation for the average basin depth
    excavation_yd3 = (surface_area_ft2 * depth_ft) / FT3_PER_YD3

    # Average daily volume and flow conversions
    daily_cubic_ft = daily_af * FT2_PER_ACRE  # AF/day -> ft³/day
    cfs = daily_cubic_ft / SEC_PER_DAY
    gpm = cfs * GPM_PER_CFS

    # 2) Economics
    capex = coerce_float(inputs.capex_per_acre) * acres
    revenue = seasonal_af * coerce_float(inputs.water_price_per_af)
    om = seasonal_af * coerce_float(inputs.om_per_acre_foot)
    pumping_cost = (
        seasonal_af
        * coerce_float(inputs.pumping_kwh_per_af)
        * coerce_float(inputs.electricity_per_kwh)
    )

    total_annual_cost = om + pumping_cost
    net_annual = revenue - total_annual_cost

    return RechargeResult(
        surface_area_ft2=surface_area_ft2,
        infil_ft_per_day=infil_ft_per_day,
        daily_af=daily_af,
        seasonal_af=seasonal_af,
        excavation_yd3=excavation_yd3,
        daily_cubic_ft=daily_cubic_ft,
        cfs=cfs,
        gpm=gpm,
        capex=capex,
        revenue=revenue,
        om=om,
        pumping_cost=pumping_cost,
        total_annual_cost=total_annual_cost,
        net_annual=net_annual,
        simple_payback_yrs=simple_payback(capex, net_annual),
    )


def compute_from_mapping(data: Mapping[str, Any] | None) -> RechargeResult:
    """Shortcut for dict-shaped inputs (camelCase or snake_case keys)."""
    return compute(RechargeInputs.from_mapping(data))
