# tests/test_audit_engine.py
from typing import List

import pytest

from src.core.audit_engine import (
    MarketInputs,
    run_existing_building_audit,
    run_new_building_audit,
    run_sizing_scenario,
)
from src.core.building_models import FuelRecord
from src.core.conversions import FuelType
from src.core.errors import InsufficientDataError
from src.core.heat_load import build_heat_load_profile
from src.core.miner_models import EquipmentModel, SizingMethod
from src.core.new_building import create_envelope_from_inputs

GAS_THERMS = [180, 160, 140, 80, 20, 0, 0, 0, 10, 60, 130, 170]
GAS_HDD = [900, 800, 700, 400, 100, 0, 0, 0, 50, 300, 650, 850]


def _sample_records(hdd=GAS_HDD) -> List[FuelRecord]:
    return [
        FuelRecord(
            month=i + 1,
            fuel_quantity=float(q),
            fuel_type=FuelType.THERMS,
            total_cost=0.0,
            hdd_reference=float(h),
        )
        for i, (q, h) in enumerate(zip(GAS_THERMS, hdd))
    ]


def _sample_market(**overrides) -> MarketInputs:
    values = dict(
        hashprice_usd_per_th_day=0.05,
        btc_price_usd=100_000.0,
        electricity_rate_usd_per_kwh=0.12,
        fuel_cost_per_kwh=0.06,
    )
    values.update(overrides)
    return MarketInputs(**values)


def test_existing_building_audit_runs_both_sizings():
    audit = run_existing_building_audit(
        _sample_records(), GAS_HDD, design_temp_f=5.0, market=_sample_market(), afue=0.85
    )

    assert audit.calibration is not None
    assert audit.breakdown is None
    assert audit.hlc.kwh_per_f_day == pytest.approx(0.2 * 29.3 * 0.85)
    assert audit.profile.monthly_kwh == pytest.approx(
        [audit.hlc.kwh_per_f_day * h for h in GAS_HDD]
    )

    assert set(audit.scenarios) == {SizingMethod.BASELOAD, SizingMethod.EXTREME}
    assert audit.baseload.sizing.required_power_kw == pytest.approx(
        audit.profile.monthly_kwh[0] / 744
    )
    assert audit.extreme.sizing.required_power_kw == pytest.approx(
        audit.hlc.kw_per_f * (70.0 - 5.0)
    )
    for scenario in audit.scenarios.values():
        assert not scenario.sizing.is_empty
        assert len(scenario.monthly_profile) == 12
        assert scenario.economics is not None
        assert scenario.economics.annual_heat_kwh == pytest.approx(audit.profile.annual_kwh)


def test_extreme_sizing_covers_every_month():
    audit = run_existing_building_audit(
        _sample_records(), GAS_HDD, design_temp_f=5.0, market=_sample_market()
    )
    assert audit.extreme.sizing.total_capacity_kw >= audit.baseload.sizing.required_power_kw
    assert audit.extreme.shortfall_months == []


def test_capital_cost_can_be_left_out():
    audit = run_existing_building_audit(
        _sample_records(),
        GAS_HDD,
        design_temp_f=5.0,
        market=_sample_market(include_capital_cost=False),
    )
    assert audit.baseload.economics.simple_payback_years is None


def test_calibration_errors_propagate():
    sparse_hdd = [500, 400, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    with pytest.raises(InsufficientDataError):
        run_existing_building_audit(
            _sample_records(sparse_hdd), GAS_HDD, design_temp_f=5.0, market=_sample_market()
        )


def test_application_filter_limits_catalog():
    audit = run_existing_building_audit(
        _sample_records(),
        GAS_HDD,
        design_temp_f=5.0,
        market=_sample_market(),
        application="radiant",
    )
    assert audit.baseload.sizing.model.name == "Generic 3kW Unit"
    assert audit.extreme.sizing.model.name == "Generic 3kW Unit"


def test_undersized_catalog_gives_empty_scenario_without_economics():
    tiny = EquipmentModel(name="Tiny", max_power_kw=0.1, hashrate_th=5.0, cost_usd=100.0)
    audit = run_existing_building_audit(
        _sample_records(),
        GAS_HDD,
        design_temp_f=5.0,
        market=_sample_market(),
        catalog=[tiny],
    )
    for scenario in audit.scenarios.values():
        assert scenario.sizing.is_empty
        assert scenario.economics is None
        assert scenario.shortfall_months == []
        assert all(p.duty_cycle == 0.0 for p in scenario.monthly_profile)


def test_sizing_scenario_reports_shortfall(caplog):
    profile = build_heat_load_profile(5.0, GAS_HDD)
    small = EquipmentModel(name="Small", max_power_kw=1.0, hashrate_th=50.0, cost_usd=1000.0)
    with caplog.at_level("WARNING"):
        scenario = run_sizing_scenario(
            1.0, SizingMethod.BASELOAD, profile, [small], _sample_market()
        )
    assert scenario.sizing.quantity == 1
    assert 0 in scenario.shortfall_months
    assert "falls short" in caplog.text


def test_new_building_audit():
    envelope = create_envelope_from_inputs(
        2000.0, 9.0, "2010_2020", "2010_low_e", "slab_on_grade", "new_standard"
    )
    audit = run_new_building_audit(envelope, GAS_HDD, design_temp_f=5.0, market=_sample_market())

    assert audit.calibration is None
    assert audit.breakdown is not None
    assert audit.hlc.btu_per_hr_f == pytest.approx(audit.breakdown.hlc_total)
    assert audit.profile.annual_kwh == pytest.approx(audit.hlc.kwh_per_f_day * sum(GAS_HDD))
    assert audit.extreme.economics is not None


def test_hdd_threshold_reaches_calibration():
    default = run_existing_building_audit(
        _sample_records(), GAS_HDD, design_temp_f=5.0, market=_sample_market()
    )
    strict = run_existing_building_audit(
        _sample_records(),
        GAS_HDD,
        design_temp_f=5.0,
        market=_sample_market(),
        hdd_threshold=350.0,
    )
    # May (100 HDD) and October (300 HDD) become shoulder months
    assert 4 not in default.calibration.excluded_months
    assert {4, 9} <= set(strict.calibration.excluded_months)
    assert strict.hlc.kwh_per_f_day == pytest.approx(default.hlc.kwh_per_f_day)
