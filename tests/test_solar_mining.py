# tests/test_solar_mining.py
import pytest

from src.core.conversions import DAYS_PER_MONTH
from src.core.errors import MalformedMonthlySeriesError
from src.core.hashrate import BTCMetrics
from src.core.miner_models import EquipmentModel
from src.core.solar_mining import (
    RECOMMEND_GRID,
    RECOMMEND_MINE,
    RECOMMEND_NEUTRAL,
    SolarProfile,
    analyze_excess_solar,
    calculate_simple_mining_potential,
    calculate_solar_mining_potential,
    get_recommended_miner,
)


@pytest.fixture()
def miner():
    return EquipmentModel(name="Test 1kW", max_power_kw=1.0, hashrate_th=100.0)


@pytest.fixture()
def metrics():
    # 1e-4 BTC/day for a 100 TH/s miner
    return BTCMetrics(btc_price_usd=100_000.0, network_hashrate_th=450_000_000.0)


def test_profile_needs_twelve_months():
    with pytest.raises(MalformedMonthlySeriesError):
        SolarProfile(monthly_avg_daily_kwh_per_kw=[4.0] * 11, annual_kwh_per_kw=1300.0)


def test_solar_mining_potential(miner, metrics):
    profile = SolarProfile(monthly_avg_daily_kwh_per_kw=[4.0] * 12, annual_kwh_per_kw=1460.0)
    result = calculate_solar_mining_potential(profile, 2.0, miner, metrics)

    # 8 kWh/day runs a 1 kW miner for 8 hours
    assert result.mining_hours_per_day == pytest.approx([8.0] * 12)
    assert result.monthly_btc == pytest.approx([1e-4 / 3 * d for d in DAYS_PER_MONTH])
    assert result.annual_btc == pytest.approx(1e-4 / 3 * 365)
    assert result.annual_usd == pytest.approx(result.annual_btc * 100_000.0)
    assert result.monthly_usd[0] == pytest.approx(result.monthly_btc[0] * 100_000.0)
    assert result.effective_earnings_per_kwh == pytest.approx(result.annual_usd / 2920.0)


def test_mining_hours_cap_at_a_full_day(miner, metrics):
    profile = SolarProfile(monthly_avg_daily_kwh_per_kw=[20.0] * 12, annual_kwh_per_kw=7300.0)
    result = calculate_solar_mining_potential(profile, 2.0, miner, metrics)
    assert result.mining_hours_per_day == [24] * 12
    assert result.annual_btc == pytest.approx(1e-4 * 365)


def test_excess_solar_is_capped_to_midday_window(miner, metrics):
    # 12 kWh/day of excess, but only 6 hours of it are usable
    result = analyze_excess_solar(365 * 12.0, 0.10, miner, metrics)
    assert result.current_credits_usd == pytest.approx(438.0)
    assert result.potential_btc == pytest.approx(1e-4 * 0.25 * 365)
    assert result.potential_usd == pytest.approx(912.5)
    assert result.opportunity_usd == pytest.approx(912.5 - 438.0)


@pytest.mark.parametrize(
    "rate, expected",
    [
        (0.10, RECOMMEND_MINE),
        (900.0 / 4380.0, RECOMMEND_NEUTRAL),
        (0.50, RECOMMEND_GRID),
    ],
)
def test_excess_solar_recommendation(miner, metrics, rate, expected):
    assert analyze_excess_solar(4380.0, rate, miner, metrics).recommendation == expected


def test_simple_mining_potential(miner, metrics):
    result = calculate_simple_mining_potential(2400.0, miner, metrics)
    assert result.annual_btc == pytest.approx(0.01)
    assert result.annual_usd == pytest.approx(1000.0)
    assert result.effective_rate == pytest.approx(1000.0 / 2400.0)


def test_simple_mining_potential_without_solar(miner, metrics):
    result = calculate_simple_mining_potential(0.0, miner, metrics)
    assert result.annual_btc == 0.0
    assert result.effective_rate == 0.0


@pytest.mark.parametrize(
    "system_kw, name, note_start",
    [
        (1.0, "Heatbit Trio", "Good match"),
        (5.0, "Avalon Q", "Good match"),
        (40.0, "Heat Core HS05", "Consider a larger"),
    ],
)
def test_recommended_miner(system_kw, name, note_start):
    miner, notes = get_recommended_miner(system_kw)
    assert miner.name == name
    assert notes.startswith(note_start)
