"""
rechargekit_core.config
-----------------------
Configuration objects (dataclasses) and tiny helpers.

Audience
--------
Farm advisors and water managers who can read Python but may not write it
every day.

Why this file exists
--------------------
We keep *all* user inputs in one place so the rest of the code can receive
a single `RechargeInputs` object instead of nine separate parameters. The
app-level settings (folders, display digits, parity factors) live in a
second object, `AppConfig`, so the calculator never sees them.

Units
-----
- Land area: acres
- Infiltration: inches per day (in/day)
- Depth: feet (ft)
- Money: dollars ($), per acre or per acre-foot (AF)
- Energy: kilowatt-hours (kWh)

Design choices
--------------
- Field names are snake_case in Python and camelCase on the wire (JSON),
  matching the field names farmers' spreadsheets and the web form use.
- Every input defaults to 0.0; zero is a valid (degenerate) input.
- Create output folders early to avoid "No such file or directory" errors.
"""

from __future__ import annotations

import math
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping

from .parity import DEFAULT_PARITY, ParityFactors

# snake_case attribute -> camelCase wire name
FIELD_ALIASES: Dict[str, str] = {
    "land_acres": "landAcres",
    "infiltration_in_per_day": "infiltrationInPerDay",
    "recharge_days": "rechargeDays",
    "avg_basin_depth_ft": "avgBasinDepthFt",
    "capex_per_acre": "capexPerAcre",
    "om_per_acre_foot": "omPerAcreFoot",
    "water_price_per_af": "waterPricePerAF",
    "pumping_kwh_per_af": "pumpingKWhPerAF",
    "electricity_per_kwh": "electricityPerKWh",
}


def coerce_float(value: Any) -> float:
    """
    Turn a loosely-typed value into a float without raising.

    - None or "" -> 0.0 (missing field)
    - numbers and numeric strings -> float
    - anything else -> nan (propagates through the arithmetic)
    """
    if value is None:
        return 0.0
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


# ------------------------
# Calculator inputs
# ------------------------
@dataclass(frozen=True)
class RechargeInputs:
    """
    All inputs needed for one recharge basin calculation.

    Land & recharge
    ---------------
    land_acres : float
        Basin footprint (acres).
    infiltration_in_per_day : float
        Vertical infiltration rate (in/day). Web Soil Survey or field
        tests give better numbers than the soil presets.
    recharge_days : float
        Length of the recharge season (days).
    avg_basin_depth_ft : float
        Average excavation depth (ft). Only used for the rough earthwork volume.

    Economics
    ---------
    capex_per_acre : float
        One-time construction cost ($/acre).
    om_per_acre_foot : float
        Variable operation & maintenance cost ($/AF recharged).
    water_price_per_af : float
        Value credited per acre-foot recharged ($/AF).

    Pumping
    -------
    pumping_kwh_per_af : float
        Pumping energy intensity (kWh/AF).
    electricity_per_kwh : float
        Electricity price ($/kWh).
    """
    # --- land & recharge ---
    land_acres: float = 0.0
    infiltration_in_per_day: float = 0.0
    recharge_days: float = 0.0
    avg_basin_depth_ft: float = 0.0

    # --- economics ---
    capex_per_acre: float = 0.0
    om_per_acre_foot: float = 0.0
    water_price_per_af: float = 0.0

    # --- pumping ---
    pumping_kwh_per_af: float = 0.0
    electricity_per_kwh: float = 0.0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "RechargeInputs":
        """
        Build inputs from a dict keyed by camelCase or snake_case names.

        This is the *lenient* path: missing keys become 0.0 and text that is
        not a number becomes nan. Use `rechargekit_core.api.parse_inputs`
        when you want a validation error instead.
        """
        data = data or {}
        values = {}
        for name, alias in FIELD_ALIASES.items():
            raw = data.get(alias, data.get(name))
            values[name] = coerce_float(raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, float]:
        """camelCase mapping, in form order."""
        return {FIELD_ALIASES[f.name]: getattr(self, f.name) for f in fields(self)}

    def replace(self, **changes: float) -> "RechargeInputs":
        """Return a copy with some fields changed (snake_case names)."""
        current = asdict(self)
        unknown = set(changes) - set(current)
        if unknown:
            raise ValueError(f"Unknown input field(s): {sorted(unknown)}")
        current.update({k: float(v) for k, v in changes.items()})
        return RechargeInputs(**current)


# Baseline example (10 acres of loam, 120-day season). The UI's
# "Reset defaults" button returns to these values.
DEFAULT_INPUTS = RechargeInputs(
    land_acres=10.0,
    infiltration_in_per_day=2.0,
    recharge_days=120.0,
    avg_basin_depth_ft=4.0,
    capex_per_acre=20_000.0,
    om_per_acre_foot=20.0,
    water_price_per_af=250.0,
    pumping_kwh_per_af=150.0,
    electricity_per_kwh=0.18,
)


# ------------------------
# App configuration
# ------------------------
@dataclass
class AppConfig:
    """
    Settings for the app, the request handler and the report.

    data_folder : Path
        Where raw submissions are stored.
    reports_folder : Path
        Where PDF reports are written.
    submissions_file : str
        CSV file name (inside `data_folder`) for saved submissions.
    currency_digits / number_digits : int
        Decimal digits used when formatting money and plain numbers.
    parity : ParityFactors
        Correction factors routed into `parity.adjust`. Identity by default.
    """
    data_folder: Path = Path("data")
    reports_folder: Path = Path("reports")
    submissions_file: str = "submissions.csv"

    currency_digits: int = 0
    number_digits: int = 2

    parity: ParityFactors = field(default_factory=lambda: DEFAULT_PARITY)

    @property
    def submissions_path(self) -> Path:
        return self.data_folder / self.submissions_file


def ensure_folders(cfg: AppConfig) -> None:
    """
    Create data/report folders if they do not exist.

    This function has **no return**; it modifies the filesystem only.
    """
    for p in [cfg.data_folder, cfg.reports_folder]:
        p.mkdir(parents=True, exist_ok=True)


def build_config(
    data_folder: str | Path | None = None,
    reports_folder: str | Path | None = None,
    currency_digits: int = 0,
    number_digits: int = 2,
    parity: ParityFactors | None = None,
) -> AppConfig:
    """
    Convenience constructor with safe defaults.

    - Folders fall back to $RECHARGEKIT_DATA_DIR / $RECHARGEKIT_REPORTS_DIR,
      then to ./data and ./reports.
    - We also ensure folders exist.
    """
    if data_folder is None:
        data_folder = os.environ.get("RECHARGEKIT_DATA_DIR", "data")
    if reports_folder is None:
        reports_folder = os.environ.get("RECHARGEKIT_REPORTS_DIR", "reports")

    cfg = AppConfig(
        data_folder=Path(data_folder),
        reports_folder=Path(reports_folder),
        currency_digits=max(0, int(currency_digits)),
        number_digits=max(0, int(number_digits)),
        parity=parity if parity is not None else DEFAULT_PARITY,
    )
    ensure_folders(cfg)
    return cfg
