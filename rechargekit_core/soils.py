"""
rechargekit_core.soils
----------------------
Soil presets and an advisory location lookup for the infiltration rate.

Audience
--------
Farm advisors. The numbers here are *typical* steady infiltration rates for
broad texture classes, meant to prefill the form. Field tests and the NRCS
Web Soil Survey should replace them before any real decision.

Units
-----
- Infiltration rate in inches per day (in/day)
- Latitude / longitude in decimal degrees (EPSG:4326)

What's here
-----------
1) SOIL_PRESETS and get_soil(key)
2) suggest_soil_for_location(lat, lon): a coarse Central Valley rule
3) geocode_place(place): place name -> (lat, lon) via OpenStreetMap
4) parse_soil_rates_csv(file_like): load your own soil table
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True)
class SoilPreset:
    """
    A texture class with a typical infiltration rate.

    key : str
        Short identifier used by the UI (e.g., "loam").
    label : str
        Human-friendly name shown in the selector.
    in_per_day : float
        Typical infiltration rate (in/day).
    """
    key: str
    label: str
    in_per_day: float


# Order matters: the location rule below picks presets by position.
SOIL_PRESETS: List[SoilPreset] = [
    SoilPreset("sand", "Sand", 12.0),
    SoilPreset("sandy_loam", "Sandy loam", 4.0),
    SoilPreset("loam", "Loam", 2.0),
    SoilPreset("silt_loam", "Silt loam", 1.0),
    SoilPreset("clay_loam", "Clay loam", 0.5),
    SoilPreset("clay", "Clay", 0.2),
]

DEFAULT_SOIL_KEY = "loam"


def get_soil(key: str, presets: Sequence[SoilPreset] = SOIL_PRESETS) -> SoilPreset:
    """
    Look up a preset by key.

    Raises
    ------
    KeyError: if no preset has that key.
    """
    for soil in presets:
        if soil.key == key:
            return soil
    raise KeyError(f"Unknown soil '{key}'. Expected one of: {[s.key for s in presets]}")


def suggest_soil_for_location(
    lat: float, lon: float, presets: Sequence[SoilPreset] = SOIL_PRESETS
) -> SoilPreset:
    """
    Suggest a soil preset for a clicked location.

    This is a demonstration rule for California's Central Valley, not a soil
    survey query: north of 37°N -> first preset, 35–37°N -> second preset,
    further south -> fourth preset. Longitude is accepted for a future real
    lookup but unused today.

    The suggestion is advisory only; the user can still edit the rate.
    """
    lat = float(lat)
    if lat > 37.0:
        idx = 0
    elif lat > 35.0:
        idx = 1
    else:
        idx = 3
    # Short custom tables fall back to their last row
    return presets[min(idx, len(presets) - 1)]


def geocode_place(place: str) -> Tuple[float, float]:
    """
    Geocode a place name to its centroid (lat, lon) using OpenStreetMap.

    We import OSMnx here so the module stays light if someone only needs the
    presets.

    Raises
    ------
    Whatever OSMnx raises when the place cannot be found or Nominatim is
    unreachable; the UI reports it.
    """
    import osmnx as ox

    g = ox.geocode_to_gdf(place)
    c = g.geometry.iloc[0].centroid
    return float(c.y), float(c.x)


def parse_soil_rates_csv(file_like) -> List[SoilPreset]:
    """
    Read a soil table with columns like:
        key,label,in_per_day
    or  soil,name,infiltration_in_per_day

    Parameters
    ----------
    file_like : path or file-like
        Anything that pandas.read_csv can handle.

    Returns
    -------
    list[SoilPreset], in file order.

    Errors you might see and how to fix
    -----------------------------------
    - ValueError: missing columns
      -> Ensure there is a key column and a rate column (case-insensitive),
         using one of the accepted variants below.
    - Rows with a non-numeric or negative rate are skipped with a warning.
    """
    df = pd.read_csv(file_like)
    # Normalize headers for easy matching
    df.columns = [str(c).strip().lower() for c in df.columns]

    key_col = next((c for c in ["key", "soil", "soil_key", "texture"] if c in df.columns), None)
    label_col = next((c for c in ["label", "name", "description"] if c in df.columns), None)
    rate_col = next(
        (c for c in ["in_per_day", "inperday", "infiltration_in_per_day", "rate"] if c in df.columns),
        None,
    )

    if key_col is None or rate_col is None:
        raise ValueError("Soil table must include columns like 'key' and 'in_per_day'.")

    rates = pd.to_numeric(df[rate_col], errors="coerce")
    presets = []
    skipped = 0
    for (_, row), rate in zip(df.iterrows(), rates):
        if pd.isna(rate) or float(rate) < 0.0:
            skipped += 1
            continue
        key = str(row[key_col]).strip()
        label = str(row[label_col]).strip() if label_col is not None else key.replace("_", " ").title()
        presets.append(SoilPreset(key, label, float(rate)))

    if skipped:
        warnings.warn(f"Skipped {skipped} soil row(s) with a missing or negative infiltration rate.")
    if not presets:
        raise ValueError("Soil table has no rows with a usable infiltration rate.")
    return presets
