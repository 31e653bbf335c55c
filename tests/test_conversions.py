# tests/test_conversions.py
import pytest

from src.core.conversions import (
    BTU_PER_CCF,
    BTU_PER_KWH,
    DAYS_PER_MONTH,
    HOURS_PER_MONTH,
    FuelType,
    btc_to_sats,
    btu_per_hour_to_kw,
    btu_to_kwh,
    celsius_to_fahrenheit,
    electric_heat_cost_per_kwh,
    fahrenheit_to_celsius,
    fuel_cost_to_kwh_cost,
    fuel_to_btu,
    fuel_to_kwh,
    hlc_btu_to_kw,
    hlc_hdd_to_rate,
    hlc_kw_to_btu,
    hlc_rate_to_hdd,
    kw_to_btu_per_hour,
    kwh_to_btu,
    sats_to_btc,
    validate_cop,
    validate_efficiency,
)
from src.core.errors import HeatAuditError, InvalidEfficiencyError


def test_month_tables_cover_a_non_leap_year():
    assert len(HOURS_PER_MONTH) == 12
    assert sum(DAYS_PER_MONTH) == 365
    assert sum(HOURS_PER_MONTH) == 8760
    assert all(h == d * 24 for h, d in zip(HOURS_PER_MONTH, DAYS_PER_MONTH))


@pytest.mark.parametrize(
    "fuel_type, quantity, expected_kwh",
    [
        (FuelType.THERMS, 10, 293.0),
        (FuelType.KWH, 10, 10.0),
        (FuelType.PROPANE_GALLONS, 10, 268.0),
        (FuelType.OIL_GALLONS, 10, 406.0),
        ("therms", 1, 29.3),
    ],
)
def test_fuel_to_kwh(fuel_type, quantity, expected_kwh):
    assert fuel_to_kwh(quantity, fuel_type) == pytest.approx(expected_kwh)


def test_ccf_uses_its_btu_content():
    assert fuel_to_btu(1, FuelType.CCF) == BTU_PER_CCF
    assert fuel_to_kwh(1, FuelType.CCF) == pytest.approx(BTU_PER_CCF / BTU_PER_KWH)


def test_unknown_fuel_type_is_rejected():
    with pytest.raises(ValueError):
        fuel_to_kwh(1, "wood_pellets")


@pytest.mark.parametrize("x", [0.0, 0.0417, 0.2, 1.5, 123.456])
def test_hlc_forms_round_trip(x):
    assert hlc_rate_to_hdd(hlc_hdd_to_rate(x)) == pytest.approx(x)
    assert hlc_btu_to_kw(hlc_kw_to_btu(x)) == pytest.approx(x)


def test_hlc_form_factors():
    assert hlc_rate_to_hdd(1.0) == 24.0
    assert hlc_kw_to_btu(1.0) == BTU_PER_KWH
    assert kw_to_btu_per_hour(2.0) == 2 * BTU_PER_KWH
    assert btu_to_kwh(BTU_PER_KWH) == 1.0
    assert kwh_to_btu(1.5) == 1.5 * BTU_PER_KWH
    assert btu_per_hour_to_kw(BTU_PER_KWH * 3) == pytest.approx(3.0)


def test_temperature_round_trip():
    assert fahrenheit_to_celsius(32.0) == pytest.approx(0.0)
    assert celsius_to_fahrenheit(100.0) == pytest.approx(212.0)
    assert fahrenheit_to_celsius(celsius_to_fahrenheit(-40.0)) == pytest.approx(-40.0)


def test_sats_round_trip():
    assert btc_to_sats(1.0) == 100_000_000
    assert sats_to_btc(50_000_000) == pytest.approx(0.5)


@pytest.mark.parametrize("afue", [0.0, -0.1, 1.01])
def test_invalid_afue_raises(afue):
    with pytest.raises(InvalidEfficiencyError):
        validate_efficiency(afue)


def test_efficiency_errors_share_the_audit_base_class():
    with pytest.raises(HeatAuditError):
        fuel_cost_to_kwh_cost(1.4, FuelType.THERMS, afue=0.0)


def test_cop_may_exceed_one():
    assert validate_cop(3.0) == 3.0
    with pytest.raises(InvalidEfficiencyError):
        validate_cop(0.0)


def test_fuel_cost_to_kwh_cost_accounts_for_efficiency():
    # $1.465 per therm at 100% → 5 c/kWh; at 80% AFUE → 6.25 c/kWh
    assert fuel_cost_to_kwh_cost(1.465, FuelType.THERMS) == pytest.approx(0.05)
    assert fuel_cost_to_kwh_cost(1.465, FuelType.THERMS, afue=0.8) == pytest.approx(0.0625)


def test_electric_heat_cost_per_kwh():
    assert electric_heat_cost_per_kwh(0.15) == pytest.approx(0.15)
    assert electric_heat_cost_per_kwh(0.15, cop=3.0) == pytest.approx(0.05)
