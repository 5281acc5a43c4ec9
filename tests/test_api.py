"""
Request handler tests: validation, persistence, error mapping.
"""

import json
import math

import pytest

from rechargekit_core.api import handle_calculate, parse_inputs, serialize_result
from rechargekit_core.config import DEFAULT_INPUTS, RechargeInputs
from rechargekit_core.engine import compute
from rechargekit_core.parity import ParityFactors


class _BrokenStore:
    def save(self, inputs):
        raise OSError("disk full")


def test_baseline_request(baseline_payload):
    status, body = handle_calculate(baseline_payload)

    assert status == 200
    assert body["ok"] is True
    results = body["results"]
    assert results["dailyAF"] == pytest.approx(1.667, abs=1e-3)
    assert results["netAnnual"] == pytest.approx(40_600.0, abs=0.5)
    assert results["simplePaybackYrs"] == pytest.approx(4.9, abs=0.05)


def test_body_is_strict_json_when_no_payback(baseline_payload):
    baseline_payload["waterPricePerAF"] = 0
    status, body = handle_calculate(baseline_payload)

    assert status == 200
    assert body["results"]["simplePaybackYrs"] is None
    json.dumps(body, allow_nan=False)


def test_missing_and_null_fields_are_zero():
    status, body = handle_calculate({"landAcres": 10, "infiltrationInPerDay": None})

    assert status == 200
    assert body["results"]["dailyAF"] == 0.0
    assert body["results"]["capex"] == 0.0


@pytest.mark.parametrize(
    "field, value",
    [
        ("landAcres", "ten"),
        ("rechargeDays", -5),
        ("capexPerAcre", float("nan")),
        ("omPerAcreFoot", [1]),
        ("landAcres", True),
        ("waterPricePerAF", False),
    ],
)
def test_invalid_values_are_rejected(baseline_payload, field, value):
    baseline_payload[field] = value
    status, body = handle_calculate(baseline_payload)

    assert status == 400
    assert body["ok"] is False
    assert body["error"] == "Invalid input"
    assert any(d["field"] == field for d in body["details"])


def test_non_object_body_is_rejected():
    status, body = handle_calculate([1, 2, 3])
    assert status == 400
    assert body["ok"] is False


def test_submission_is_saved(baseline_payload, store):
    status, _ = handle_calculate(baseline_payload, store=store)

    assert status == 200
    saved = store.load()
    assert len(saved) == 1
    assert saved.loc[0, "landAcres"] == 10


def test_invalid_request_is_not_saved(baseline_payload, store):
    baseline_payload["landAcres"] = "ten"
    handle_calculate(baseline_payload, store=store)
    assert len(store) == 0


def test_storage_failure_is_a_generic_server_error(baseline_payload):
    status, body = handle_calculate(baseline_payload, store=_BrokenStore())

    assert status == 500
    assert body == {"ok": False, "error": "Server error"}


def test_parity_factors_are_applied(baseline_payload):
    _, body = handle_calculate(baseline_payload, factors=ParityFactors(revenue=2.0))
    assert body["results"]["revenue"] == pytest.approx(100_000.0)


def test_parse_inputs_accepts_snake_case_and_numeric_strings():
    inputs = parse_inputs({"land_acres": "12.5", "rechargeDays": 30})
    assert inputs == RechargeInputs(land_acres=12.5, recharge_days=30.0)


def test_parse_inputs_round_trips_defaults():
    assert parse_inputs(DEFAULT_INPUTS.to_dict()) == DEFAULT_INPUTS


def test_serialize_result_replaces_infinity():
    r = compute(RechargeInputs())
    out = serialize_result(r)
    assert out["simplePaybackYrs"] is None
    assert not any(isinstance(v, float) and math.isinf(v) for v in out.values())


def test_boolean_request_is_not_saved(baseline_payload, store):
    baseline_payload["landAcres"] = True
    status, body = handle_calculate(baseline_payload, store=store)

    assert status == 400
    assert body["details"][0]["field"] == "landAcres"
    assert len(store) == 0
