"""
Calculator tests: the worked spreadsheet example, boundaries, and the
properties every result must satisfy.
"""

import math

import pytest

from rechargekit_core.config import RechargeInputs
from rechargekit_core.constants import GPM_PER_CFS
from rechargekit_core.engine import RechargeResult, compute, compute_from_mapping, simple_payback


def test_baseline_matches_spreadsheet(baseline_inputs):
    r = compute(baseline_inputs)

    assert r.daily_af == pytest.approx(1.667, abs=1e-3)
    assert r.seasonal_af == pytest.approx(200.0, abs=0.5)
    assert r.cfs == pytest.approx(0.84, abs=5e-3)
    assert r.revenue == pytest.approx(50_000.0, abs=0.5)
    assert r.om == pytest.approx(4_000.0, abs=0.5)
    assert r.pumping_cost == pytest.approx(5_400.0, abs=0.5)
    assert r.net_annual == pytest.approx(40_600.0, abs=0.5)
    assert r.simple_payback_yrs == pytest.approx(4.9, abs=0.05)


def test_baseline_geometry(baseline_inputs):
    r = compute(baseline_inputs)

    assert r.surface_area_ft2 == pytest.approx(435_600.0)
    assert r.infil_ft_per_day == pytest.approx(2.0 / 12.0)
    assert r.excavation_yd3 == pytest.approx(435_600.0 * 4.0 / 27.0)
    assert r.daily_cubic_ft == pytest.approx(r.daily_af * 43_560.0)
    assert r.capex == pytest.approx(200_000.0)
    assert r.total_annual_cost == pytest.approx(9_400.0)


def test_compute_is_deterministic(baseline_inputs):
    assert compute(baseline_inputs) == compute(baseline_inputs)


def test_result_is_immutable(baseline_inputs):
    r = compute(baseline_inputs)
    with pytest.raises(AttributeError):
        r.capex = 0.0


@pytest.mark.parametrize("acres", [0.5, 3.0, 10.0, 250.0])
def test_gpm_is_cfs_times_conversion(baseline_inputs, acres):
    r = compute(baseline_inputs.replace(land_acres=acres))
    assert r.gpm == r.cfs * GPM_PER_CFS


def test_area_driven_outputs_scale_linearly(baseline_inputs):
    one = compute(baseline_inputs.replace(land_acres=7.0))
    three = compute(baseline_inputs.replace(land_acres=21.0))

    for name in ("daily_af", "capex", "excavation_yd3", "surface_area_ft2"):
        assert getattr(three, name) == pytest.approx(3.0 * getattr(one, name)), name


def test_payback_is_capex_over_net_when_positive(baseline_inputs):
    r = compute(baseline_inputs)
    assert r.net_annual > 0
    assert r.simple_payback_yrs == r.capex / r.net_annual
    assert r.has_payback


def test_zero_land_gives_zero_area_fields_and_no_payback(baseline_inputs):
    r = compute(baseline_inputs.replace(land_acres=0.0))

    for name in (
        "surface_area_ft2",
        "daily_af",
        "seasonal_af",
        "excavation_yd3",
        "daily_cubic_ft",
        "cfs",
        "gpm",
        "capex",
        "revenue",
        "om",
        "pumping_cost",
    ):
        assert getattr(r, name) == 0.0, name
    assert r.net_annual == 0.0
    assert r.simple_payback_yrs == math.inf
    assert not r.has_payback


def test_zero_water_price_never_pays_back(baseline_inputs):
    r = compute(baseline_inputs.replace(water_price_per_af=0.0))

    assert r.revenue == 0.0
    assert r.net_annual < 0
    assert r.simple_payback_yrs == math.inf


def test_all_zero_inputs():
    r = compute(RechargeInputs())
    assert r.seasonal_af == 0.0
    assert r.simple_payback_yrs == math.inf


def test_non_numeric_input_propagates_nan(baseline_payload):
    baseline_payload["landAcres"] = "ten"
    r = compute_from_mapping(baseline_payload)

    assert math.isnan(r.surface_area_ft2)
    assert math.isnan(r.daily_af)
    assert math.isnan(r.net_annual)
    # nan is not > 0, so no finite payback
    assert r.simple_payback_yrs == math.inf


def test_missing_fields_default_to_zero():
    r = compute_from_mapping({"landAcres": 10, "infiltrationInPerDay": 2})

    assert r.daily_af == pytest.approx(10 * 2 / 12)
    assert r.seasonal_af == 0.0
    assert r.capex == 0.0
    assert r.simple_payback_yrs == math.inf


def test_compute_from_mapping_accepts_none():
    assert compute_from_mapping(None) == compute(RechargeInputs())


@pytest.mark.parametrize(
    "capex, net, expected",
    [(100.0, 50.0, 2.0), (0.0, 10.0, 0.0), (100.0, 0.0, math.inf), (100.0, -1.0, math.inf)],
)
def test_simple_payback_policy(capex, net, expected):
    assert simple_payback(capex, net) == expected


def test_simple_payback_nan_is_unbounded():
    assert simple_payback(100.0, math.nan) == math.inf


def test_to_dict_uses_wire_names(baseline_inputs):
    d = compute(baseline_inputs).to_dict()

    assert list(d)[:3] == ["surfaceAreaFt2", "infilFtPerDay", "dailyAF"]
    assert d["simplePaybackYrs"] == pytest.approx(200_000.0 / 40_600.0)
    assert len(d) == len(RechargeResult.__dataclass_fields__)
