# tests/test_heat_load.py
import pytest

from src.core.building_models import HeatLoadProfile, HeatLossCoefficient
from src.core.conversions import HOURS_PER_MONTH
from src.core.errors import InvalidProfileLengthError
from src.core.heat_load import (
    build_heat_load_profile,
    calculate_annual_totals,
    calculate_average_monthly_power,
    generate_heat_load_profile,
)

HDD = [900, 800, 700, 400, 100, 0, 0, 0, 50, 300, 650, 850]


def test_profile_is_hlc_times_hdd():
    profile = generate_heat_load_profile(5.0, HDD)
    assert profile == [5.0 * h for h in HDD]


def test_profile_accepts_coefficient_object():
    hlc = HeatLossCoefficient.from_kw_per_f(0.25)  # 6 kWh/°F-day
    assert generate_heat_load_profile(hlc, HDD) == pytest.approx([6.0 * h for h in HDD])


@pytest.mark.parametrize("length", [0, 11, 13])
def test_profile_requires_twelve_months(length):
    with pytest.raises(InvalidProfileLengthError):
        generate_heat_load_profile(1.0, [100.0] * length)


def test_average_monthly_power_uses_hours_in_month():
    load = [744.0] * 12
    power = calculate_average_monthly_power(load)
    assert power[0] == pytest.approx(1.0)
    assert power[1] == pytest.approx(744.0 / 672.0)
    assert power == pytest.approx([744.0 / h for h in HOURS_PER_MONTH])


def test_annual_totals():
    load = generate_heat_load_profile(5.0, HDD)
    totals = calculate_annual_totals(load)
    assert totals.annual_kwh == pytest.approx(5.0 * sum(HDD))
    assert totals.coldest_month_index == 0
    assert totals.coldest_month_kwh == pytest.approx(4500.0)
    assert totals.peak_average_power_kw == pytest.approx(
        max(kwh / h for kwh, h in zip(load, HOURS_PER_MONTH))
    )


def test_coldest_month_ties_take_the_first():
    load = [10.0, 50.0, 50.0] + [0.0] * 9
    assert calculate_annual_totals(load).coldest_month_index == 1


def test_build_profile_object():
    profile = build_heat_load_profile(2.0, HDD)
    assert profile.monthly_kwh == tuple(2.0 * h for h in HDD)
    assert profile.annual_kwh == pytest.approx(2.0 * sum(HDD))
    assert len(profile.average_power_kw) == 12


@pytest.mark.parametrize("length", [0, 11, 13])
def test_profile_object_requires_twelve_months(length):
    with pytest.raises(InvalidProfileLengthError):
        HeatLoadProfile(monthly_kwh=tuple([100.0] * length))
