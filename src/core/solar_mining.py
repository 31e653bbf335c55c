# src/core/solar_mining.py
"""
What a solar array's output would earn if it ran a miner instead of
exporting to the grid. The production profile is fetched elsewhere and
passed in as per-kW figures.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from src.config import settings
from src.core.conversions import DAYS_PER_MONTH, HOURS_PER_DAY
from src.core.errors import MalformedMonthlySeriesError
from src.core.hashrate import BTCMetrics, calculate_daily_btc
from src.core.miner_models import EquipmentModel
from src.data.equipment_catalog import MINER_PRESETS

RECOMMEND_MINE = "mine"
RECOMMEND_GRID = "grid"
RECOMMEND_NEUTRAL = "neutral"


@dataclass(frozen=True)
class SolarProfile:
    monthly_avg_daily_kwh_per_kw: Sequence[float]  # 12 values, January first
    annual_kwh_per_kw: float

    def __post_init__(self) -> None:
        if len(self.monthly_avg_daily_kwh_per_kw) != 12:
            raise MalformedMonthlySeriesError(
                "Solar profile needs 12 monthly values, "
                f"got {len(self.monthly_avg_daily_kwh_per_kw)}"
            )


@dataclass(frozen=True)
class SolarMiningPotential:
    annual_btc: float
    annual_usd: float
    monthly_btc: List[float]
    monthly_usd: List[float]
    effective_earnings_per_kwh: float
    mining_hours_per_day: List[float]


@dataclass(frozen=True)
class ExcessSolarAnalysis:
    excess_kwh: float
    current_credits_usd: float
    potential_btc: float
    potential_usd: float
    opportunity_usd: float  # potential − credits
    recommendation: str


@dataclass(frozen=True)
class SimpleMiningPotential:
    annual_btc: float
    annual_usd: float
    effective_rate: float  # USD per solar kWh


def calculate_solar_mining_potential(
    profile: SolarProfile,
    system_size_kw: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
) -> SolarMiningPotential:
    """Month-by-month BTC if all array output powers the miner."""
    daily_btc_full = calculate_daily_btc(miner.hashrate_th, metrics)

    monthly_btc: List[float] = []
    hours_per_day: List[float] = []
    for i, kwh_per_kw in enumerate(profile.monthly_avg_daily_kwh_per_kw):
        daily_solar_kwh = kwh_per_kw * system_size_kw
        hours = min(daily_solar_kwh / miner.max_power_kw, HOURS_PER_DAY)
        hours_per_day.append(hours)
        monthly_btc.append(daily_btc_full * (hours / HOURS_PER_DAY) * DAYS_PER_MONTH[i])

    annual_btc = sum(monthly_btc)
    annual_usd = annual_btc * metrics.btc_price_usd
    annual_solar_kwh = profile.annual_kwh_per_kw * system_size_kw

    return SolarMiningPotential(
        annual_btc=annual_btc,
        annual_usd=annual_usd,
        monthly_btc=monthly_btc,
        monthly_usd=[btc * metrics.btc_price_usd for btc in monthly_btc],
        effective_earnings_per_kwh=annual_usd / annual_solar_kwh if annual_solar_kwh > 0 else 0.0,
        mining_hours_per_day=hours_per_day,
    )


def _recommend(opportunity: float, credits: float) -> str:
    if opportunity > credits * settings.SOLAR_MINE_ADVANTAGE_PCT:
        return RECOMMEND_MINE
    if opportunity < -credits * settings.SOLAR_GRID_ADVANTAGE_PCT:
        return RECOMMEND_GRID
    return RECOMMEND_NEUTRAL


def analyze_excess_solar(
    annual_excess_kwh: float,
    net_metering_rate: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
) -> ExcessSolarAnalysis:
    """
    Compare net-metering credits for exported kWh against mining them.

    Excess production is assumed to fall in a midday window of
    SOLAR_EXCESS_HOURS_PER_DAY, which caps the miner's daily run time.
    """
    credits = annual_excess_kwh * net_metering_rate

    daily_excess_kwh = annual_excess_kwh / 365
    hours = min(daily_excess_kwh / miner.max_power_kw, settings.SOLAR_EXCESS_HOURS_PER_DAY)

    potential_btc = calculate_daily_btc(miner.hashrate_th, metrics) * (hours / HOURS_PER_DAY) * 365
    potential_usd = potential_btc * metrics.btc_price_usd
    opportunity = potential_usd - credits

    return ExcessSolarAnalysis(
        excess_kwh=annual_excess_kwh,
        current_credits_usd=credits,
        potential_btc=potential_btc,
        potential_usd=potential_usd,
        opportunity_usd=opportunity,
        recommendation=_recommend(opportunity, credits),
    )


def calculate_simple_mining_potential(
    annual_solar_kwh: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
) -> SimpleMiningPotential:
    mining_hours = annual_solar_kwh / miner.max_power_kw
    btc_per_hour = calculate_daily_btc(miner.hashrate_th, metrics) / HOURS_PER_DAY
    annual_btc = btc_per_hour * mining_hours
    annual_usd = annual_btc * metrics.btc_price_usd
    return SimpleMiningPotential(
        annual_btc=annual_btc,
        annual_usd=annual_usd,
        effective_rate=annual_usd / annual_solar_kwh if annual_solar_kwh > 0 else 0.0,
    )


def get_recommended_miner(system_size_kw: float) -> Tuple[EquipmentModel, str]:
    """Preset closest to 60% of the array size, with a sizing note."""
    target_kw = system_size_kw * settings.SOLAR_MINER_TARGET_FRACTION
    presets = sorted(MINER_PRESETS.values(), key=lambda m: m.max_power_kw)
    best = min(presets, key=lambda m: abs(m.max_power_kw - target_kw))

    if best.max_power_kw < target_kw * 0.5:
        notes = "Consider a larger miner to better utilize your solar capacity"
    elif best.max_power_kw > target_kw * 1.5:
        notes = "This miner may require grid power during low-production periods"
    else:
        notes = "Good match for your solar system size"
    return best, notes
