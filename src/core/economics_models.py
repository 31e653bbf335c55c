# src/core/economics_models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.config import settings


@dataclass(frozen=True)
class EconomicInputs:
    """
    Inputs for a freeze-frame year: today's market held constant for
    twelve months of the building's heat load.

    Fractions are expressed as 0–1, e.g. a 2% pool fee = 0.02.
    """

    total_hashrate_th: float
    total_power_kw: float
    monthly_heat_load_kwh: Sequence[float]
    monthly_duty_cycles: Sequence[float]  # 0–1

    # Market snapshot
    hashprice_usd_per_th_day: float
    btc_price_usd: float
    fuel_cost_per_kwh: float  # value of displaced heat, USD per delivered kWh
    electricity_rate_usd_per_kwh: float

    capital_cost_usd: Optional[float] = None
    pool_fee_fraction: float = settings.DEFAULT_POOL_FEE_FRACTION


@dataclass(frozen=True)
class MonthlyEconomics:
    month: int  # 1-12
    heat_delivered_kwh: float
    duty_cycle: float
    effective_hashrate_th: float

    btc_revenue_usd: float  # net of pool fee
    heating_value_usd: float
    total_revenue_usd: float

    electricity_cost_usd: float
    pool_fee_usd: float
    total_cost_usd: float

    net_profit_usd: float


@dataclass(frozen=True)
class FreezeFrameResult:
    """
    Twelve months of economics plus annual sums.

    effective_heating_cost_per_kwh can be negative: the occupant is paid to
    heat. simple_payback_years is None without a capital cost or when the
    year does not make a profit.
    """

    months: List[MonthlyEconomics]

    annual_btc_revenue_usd: float
    annual_heating_value_usd: float
    annual_total_revenue_usd: float
    annual_electricity_cost_usd: float
    annual_pool_fee_usd: float
    annual_total_cost_usd: float
    annual_net_profit_usd: float

    revenue_split_btc_pct: float
    revenue_split_heat_pct: float

    annual_heat_kwh: float
    annual_btc_mined: float
    effective_heating_cost_per_kwh: float
    simple_payback_years: Optional[float]
