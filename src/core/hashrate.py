# src/core/hashrate.py
"""
Hashrate heating metrics for a single miner at today's network conditions.

R is mining revenue as a share of the miner's electricity bill. The
economic coefficient of performance follows from it: COPe = 1 / (1 − R),
so a miner that pays back half its power bill delivers heat as if it were
a COP-2 heat pump. At R ≥ 1 mining pays for all of the heat and COPe is
unbounded (reported as None).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.config import settings
from src.core.conversions import (
    BTU_PER_KWH,
    HOURS_PER_DAY,
    SATS_PER_BTC,
    validate_cop,
    validate_efficiency,
)
from src.core.miner_models import EquipmentModel
from src.data.fuel_specs import FUEL_SPECS, HeatingFuel

STATUS_PROFITABLE = "profitable"
STATUS_SUBSIDIZED = "subsidized"
STATUS_LOSS = "loss"


@dataclass(frozen=True)
class BTCMetrics:
    btc_price_usd: float
    network_hashrate_th: float  # TH/s
    block_reward_btc: float = settings.BLOCK_SUBSIDY_BTC


@dataclass(frozen=True)
class NetworkMetrics:
    hashvalue_sats: float  # sats per TH/s per day
    hashprice_usd: float  # USD per TH/s per day
    network_hashrate_eh: float
    difficulty: float


@dataclass(frozen=True)
class CopeResult:
    revenue_ratio: float  # R
    cope: Optional[float]  # None when mining covers the whole bill
    effective_cost_per_kwh: float
    effective_cost_per_mmbtu: float
    effective_cost_per_therm: float
    breakeven_rate: float
    daily_electricity_cost_usd: float
    daily_mining_revenue_usd: float
    daily_btc: float
    monthly_btc: float
    monthly_sats: int
    status: str


@dataclass(frozen=True)
class ArbitrageResult:
    traditional_cost_per_kwh: float
    hashrate_cost_per_kwh: float
    savings_pct: float
    monthly_savings_usd: float
    annual_savings_usd: float


# ---------------------------------------------------------
# Network-level metrics
# ---------------------------------------------------------


def network_hashrate_th_from_difficulty(difficulty: float) -> float:
    """Implied network hashrate (TH/s): difficulty × 2^32 / block interval."""
    if difficulty <= 0:
        return 0.0
    return difficulty * 2**32 / settings.SECONDS_PER_BLOCK / 1e12


def calculate_hashvalue(
    network_hashrate_th: float,
    block_reward_btc: float = settings.BLOCK_SUBSIDY_BTC,
) -> float:
    """Sats earned per TH/s per day, subsidy only."""
    if network_hashrate_th <= 0:
        return 0.0
    daily_sats = settings.BLOCKS_PER_DAY * block_reward_btc * SATS_PER_BTC
    return daily_sats / network_hashrate_th


def calculate_hashprice(hashvalue_sats: float, btc_price_usd: float) -> float:
    """USD per TH/s per day."""
    return (hashvalue_sats * btc_price_usd) / SATS_PER_BTC


def calculate_network_metrics(metrics: BTCMetrics, difficulty: float = 0.0) -> NetworkMetrics:
    hashvalue = calculate_hashvalue(metrics.network_hashrate_th, metrics.block_reward_btc)
    return NetworkMetrics(
        hashvalue_sats=hashvalue,
        hashprice_usd=calculate_hashprice(hashvalue, metrics.btc_price_usd),
        network_hashrate_eh=metrics.network_hashrate_th / 1e6,
        difficulty=difficulty,
    )


def calculate_daily_btc(hashrate_th: float, metrics: BTCMetrics) -> float:
    """Expected BTC per day from this miner's share of the network."""
    if metrics.network_hashrate_th <= 0:
        return 0.0
    share = hashrate_th / metrics.network_hashrate_th
    return share * settings.BLOCKS_PER_DAY * metrics.block_reward_btc


# ---------------------------------------------------------
# Per-miner heating economics
# ---------------------------------------------------------


def get_miner_efficiency(miner: EquipmentModel) -> float:
    """J/TH."""
    return miner.efficiency_w_per_th


def _cope_status(revenue_ratio: float) -> str:
    if revenue_ratio >= 1:
        return STATUS_PROFITABLE
    if revenue_ratio > settings.COPE_SUBSIDIZED_MIN_R:
        return STATUS_SUBSIDIZED
    return STATUS_LOSS


def calculate_cope(
    electricity_rate_usd_per_kwh: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
) -> CopeResult:
    daily_kwh = miner.max_power_kw * HOURS_PER_DAY
    daily_electricity_cost = daily_kwh * electricity_rate_usd_per_kwh

    daily_btc = calculate_daily_btc(miner.hashrate_th, metrics)
    daily_revenue = daily_btc * metrics.btc_price_usd
    monthly_btc = daily_btc * 30

    revenue_ratio = daily_revenue / daily_electricity_cost if daily_electricity_cost > 0 else 0.0
    cope = None if revenue_ratio >= 1 else 1 / (1 - revenue_ratio)

    # Every kWh drawn becomes a kWh of heat
    effective_cost_per_kwh = (daily_electricity_cost - daily_revenue) / daily_kwh

    return CopeResult(
        revenue_ratio=revenue_ratio,
        cope=cope,
        effective_cost_per_kwh=effective_cost_per_kwh,
        effective_cost_per_mmbtu=effective_cost_per_kwh * settings.KWH_PER_MMBTU,
        effective_cost_per_therm=effective_cost_per_kwh * settings.KWH_PER_THERM_REPORTING,
        breakeven_rate=daily_revenue / daily_kwh,
        daily_electricity_cost_usd=daily_electricity_cost,
        daily_mining_revenue_usd=daily_revenue,
        daily_btc=daily_btc,
        monthly_btc=monthly_btc,
        monthly_sats=round(monthly_btc * SATS_PER_BTC),
        status=_cope_status(revenue_ratio),
    )


def traditional_cost_per_kwh(
    fuel: HeatingFuel | str,
    fuel_rate: float,
    fuel_efficiency: Optional[float] = None,
) -> float:
    """
    Cost of one delivered kWh of heat from the incumbent system.

    fuel_efficiency is an AFUE for combustion, validated to (0, 1], or a
    COP for heat pumps, which only has to be positive. Electric resistance
    is always 1.0.
    """
    fuel = HeatingFuel(fuel)
    spec = FUEL_SPECS[fuel]
    if fuel is HeatingFuel.ELECTRIC_RESISTANCE:
        efficiency = 1.0
    else:
        efficiency = fuel_efficiency if fuel_efficiency is not None else spec.typical_efficiency
        if fuel is HeatingFuel.HEAT_PUMP:
            validate_cop(efficiency)
        else:
            validate_efficiency(efficiency)
    units_needed = BTU_PER_KWH / (spec.btu_per_unit * efficiency)
    return units_needed * fuel_rate


def calculate_arbitrage(
    fuel: HeatingFuel | str,
    fuel_rate: float,
    electricity_rate_usd_per_kwh: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
    monthly_heat_kwh: float = 1500.0,
    fuel_efficiency: Optional[float] = None,
) -> ArbitrageResult:
    """Incumbent heating vs hashrate heating, per delivered kWh."""
    traditional = traditional_cost_per_kwh(fuel, fuel_rate, fuel_efficiency)
    hashrate_cost = calculate_cope(electricity_rate_usd_per_kwh, miner, metrics).effective_cost_per_kwh

    savings_pct = (
        ((traditional - hashrate_cost) / traditional) * 100 if traditional > 0 else 0.0
    )
    monthly_savings = (traditional - hashrate_cost) * monthly_heat_kwh

    return ArbitrageResult(
        traditional_cost_per_kwh=traditional,
        hashrate_cost_per_kwh=hashrate_cost,
        savings_pct=savings_pct,
        monthly_savings_usd=monthly_savings,
        annual_savings_usd=monthly_savings * 12,
    )


def calculate_breakeven_for_cope(
    target_cope: float,
    miner: EquipmentModel,
    metrics: BTCMetrics,
) -> Optional[float]:
    """
    Highest electricity rate (USD/kWh) that still achieves target_cope.

    Returns None for target_cope ≤ 1 (any rate reaches it) and when the
    miner earns nothing.
    """
    if target_cope <= 1:
        return None
    target_r = 1 - (1 / target_cope)
    daily_kwh = miner.max_power_kw * HOURS_PER_DAY
    daily_revenue = calculate_daily_btc(miner.hashrate_th, metrics) * metrics.btc_price_usd
    if daily_revenue <= 0:
        return None
    return daily_revenue / (daily_kwh * target_r)
