"""
rechargekit_core.api
--------------------
Request handling for the "calculate" endpoint, independent of any web
framework.

What a request looks like
-------------------------
A JSON object with the camelCase input names, e.g.

    {"landAcres": 10, "infiltrationInPerDay": 2, "rechargeDays": 120, ...}

Missing fields (or null) count as 0. Anything else that is not a
non-negative finite number is rejected with HTTP 400.

What a response looks like
--------------------------
- 200: {"ok": true, "results": {...camelCase result fields...}}
       A payback that never happens is sent as null (strict JSON has no Infinity).
- 400: {"ok": false, "error": "Invalid input", "details": [...]}
- 500: {"ok": false, "error": "Server error"}   (storage failure etc.)

Any web layer (Flask, FastAPI, a serverless function) only has to pass the
parsed JSON body in and send `(status, body)` back out.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import RechargeInputs
from .parity import DEFAULT_PARITY, ParityFactors, evaluate

logger = logging.getLogger(__name__)


def _rate(alias: str, description: str):
    return Field(default=0.0, ge=0.0, allow_inf_nan=False, alias=alias, description=description)


class CalculationRequest(BaseModel):
    """Validated calculator inputs, as received over the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    land_acres: float = _rate("landAcres", "Basin footprint (acres)")
    infiltration_in_per_day: float = _rate("infiltrationInPerDay", "Infiltration rate (in/day)")
    recharge_days: float = _rate("rechargeDays", "Recharge season length (days)")
    avg_basin_depth_ft: float = _rate("avgBasinDepthFt", "Average basin depth (ft)")
    capex_per_acre: float = _rate("capexPerAcre", "Construction cost ($/acre)")
    om_per_acre_foot: float = _rate("omPerAcreFoot", "O&M cost ($/AF)")
    water_price_per_af: float = _rate("waterPricePerAF", "Water value / credit ($/AF)")
    pumping_kwh_per_af: float = _rate("pumpingKWhPerAF", "Pumping energy (kWh/AF)")
    electricity_per_kwh: float = _rate("electricityPerKWh", "Electricity price ($/kWh)")

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero(cls, v):
        # JSON true/false would otherwise pass as 1.0/0.0
        if isinstance(v, bool):
            raise ValueError("must be a number, not a boolean")
        return 0.0 if v is None else v

    def to_inputs(self) -> RechargeInputs:
        return RechargeInputs(**self.model_dump(by_alias=False))


def parse_inputs(payload: Mapping[str, Any] | None) -> RechargeInputs:
    """
    Validate a request body and return typed inputs.

    Raises
    ------
    pydantic.ValidationError: if any field is not a non-negative finite number.
    TypeError: if the body is not a JSON object.
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise TypeError(f"Request body must be a JSON object, got {type(payload).__name__}")
    return CalculationRequest.model_validate(dict(payload)).to_inputs()


def _json_safe(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None


def serialize_result(result) -> Dict[str, Optional[float]]:
    """camelCase result mapping with non-finite numbers replaced by None."""
    return {k: _json_safe(v) for k, v in result.to_dict().items()}


def handle_calculate(
    payload: Mapping[str, Any] | None,
    store=None,
    factors: ParityFactors = DEFAULT_PARITY,
) -> Tuple[int, Dict[str, Any]]:
    """
    Validate, persist, calculate.

    Parameters
    ----------
    payload : dict
        Parsed JSON body.
    store : SubmissionStore | None
        Where to save the raw inputs. Skipped when None.
    factors : ParityFactors
        Parity correction passed through to `evaluate`.

    Returns
    -------
    (status, body) : (int, dict)
    """
    try:
        inputs = parse_inputs(payload)
    except ValidationError as e:
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        return 400, {"ok": False, "error": "Invalid input", "details": details}
    except TypeError as e:
        return 400, {"ok": False, "error": "Invalid input", "details": [{"field": "", "message": str(e)}]}

    try:
        if store is not None:
            store.save(inputs)
        result = evaluate(inputs, factors)
        return 200, {"ok": True, "results": serialize_result(result)}
    except Exception:
        logger.exception("Calculation request failed")
        return 500, {"ok": False, "error": "Server error"}
