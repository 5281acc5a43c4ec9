"""
rechargekit_core.parity
-----------------------
Parity adjustment: scale selected results so they match a reference
spreadsheet, without touching the core formulas or the UI.

Why this exists
---------------
If a reference workbook turns out to use hidden safety factors, rounding or
per-district adjustments, they get encoded *here* as plain multipliers. All
callers route results through `evaluate` (or `adjust`), so a future
correction needs no caller changes.

All factors are 1.0 today. There is no known divergence from the reference
workbook, so do not invent calibration values.

What's here
-----------
- ParityFactors: one multiplier per adjustable field (frozen dataclass)
- adjust(result, factors): apply the multipliers to a result
- evaluate(inputs, factors): compute + adjust in one call
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

# camelCase wire name -> snake_case attribute, for the adjustable subset only
_PARITY_ALIASES = {
    "dailyAF": "daily_af",
    "seasonalAF": "seasonal_af",
    "cfs": "cfs",
    "revenue": "revenue",
    "om": "om",
    "pumpingCost": "pumping_cost",
}


@dataclass(frozen=True)
class ParityFactors:
    """
    Multipliers applied to a result by `adjust`.

    Each factor scales exactly one result field. Fields not listed here
    (gpm, net annual, payback, ...) are never re-derived after adjustment.
    """
    daily_af: float = 1.0
    seasonal_af: float = 1.0
    cfs: float = 1.0
    revenue: float = 1.0
    om: float = 1.0
    pumping_cost: float = 1.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ParityFactors":
        """
        Build factors from a dict keyed by camelCase or snake_case names.

        Raises
        ------
        ValueError: on unknown keys or non-numeric factors.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, raw in (data or {}).items():
            name = _PARITY_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(
                    f"Unknown parity factor '{key}'. Expected one of: {sorted(_PARITY_ALIASES)}"
                )
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                raise ValueError(f"Parity factor '{key}' must be a number, got {raw!r}") from None
        return cls(**values)

    @property
    def is_identity(self) -> bool:
        return all(getattr(self, f.name) == 1.0 for f in fields(self))


DEFAULT_PARITY = ParityFactors()


def adjust(result, factors: ParityFactors = DEFAULT_PARITY):
    """
    Return a new result with the parity multipliers applied.

    Parameters
    ----------
    result : RechargeResult
        Raw calculator output. Not modified.
    factors : ParityFactors, default all 1.0
        Multipliers for daily_af, seasonal_af, cfs, revenue, om, pumping_cost.

    Returns
    -------
    RechargeResult
        Same values except the six adjustable fields, each multiplied by
        its factor.
    """
    return replace(
        result,
        daily_af=result.daily_af * factors.daily_af,
        seasonal_af=result.seasonal_af * factors.seasonal_af,
        cfs=result.cfs * factors.cfs,
        revenue=result.revenue * factors.revenue,
        om=result.om * factors.om,
        pumping_cost=result.pumping_cost * factors.pumping_cost,
    )


def evaluate(inputs, factors: ParityFactors = DEFAULT_PARITY):
    """
    The one entry point for callers: compute, then adjust.

    The UI, the request handler, the scenario tables and the report all
    call this rather than `engine.compute` directly.
    """
    from .engine import compute  # local import: engine -> config -> parity

    return adjust(compute(inputs), factors)
