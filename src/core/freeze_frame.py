# src/core/freeze_frame.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from src.config import settings
from src.core.conversions import DAYS_PER_MONTH, HOURS_PER_DAY, HOURS_PER_MONTH
from src.core.economics_models import EconomicInputs, FreezeFrameResult, MonthlyEconomics
from src.core.errors import MalformedMonthlySeriesError


# ---------------------------------------------------------
# Monthly building blocks
# ---------------------------------------------------------


def calculate_monthly_btc_revenue(
    effective_hashrate_th: float,
    hashprice_usd_per_th_day: float,
    days_in_month: int,
    pool_fee_fraction: float = settings.DEFAULT_POOL_FEE_FRACTION,
) -> Tuple[float, float]:
    """Return (gross revenue, pool fee) in USD for one month."""
    gross_revenue = effective_hashrate_th * hashprice_usd_per_th_day * days_in_month
    return gross_revenue, gross_revenue * pool_fee_fraction


def calculate_monthly_heating_value(heat_delivered_kwh: float, fuel_cost_per_kwh: float) -> float:
    """Value of the fuel the miners' heat displaces."""
    return heat_delivered_kwh * fuel_cost_per_kwh


def calculate_monthly_electricity_cost(
    power_kw: float,
    hours_in_month: float,
    duty_cycle: float,
    electricity_rate_usd_per_kwh: float,
) -> float:
    return power_kw * hours_in_month * duty_cycle * electricity_rate_usd_per_kwh


def calculate_freeze_frame_month(
    month: int,
    heat_load_kwh: float,
    duty_cycle: float,
    max_hashrate_th: float,
    power_kw: float,
    hashprice_usd_per_th_day: float,
    fuel_cost_per_kwh: float,
    electricity_rate_usd_per_kwh: float,
    pool_fee_fraction: float = settings.DEFAULT_POOL_FEE_FRACTION,
) -> MonthlyEconomics:
    """Economics for a single calendar month (month is 1-12)."""
    hours = HOURS_PER_MONTH[month - 1]
    days = DAYS_PER_MONTH[month - 1]

    effective_hashrate = duty_cycle * max_hashrate_th
    gross_revenue, pool_fee = calculate_monthly_btc_revenue(
        effective_hashrate, hashprice_usd_per_th_day, days, pool_fee_fraction
    )
    btc_revenue_net = gross_revenue - pool_fee

    heating_value = calculate_monthly_heating_value(heat_load_kwh, fuel_cost_per_kwh)
    total_revenue = btc_revenue_net + heating_value

    electricity_cost = calculate_monthly_electricity_cost(
        power_kw, hours, duty_cycle, electricity_rate_usd_per_kwh
    )
    total_cost = electricity_cost + pool_fee

    return MonthlyEconomics(
        month=month,
        heat_delivered_kwh=heat_load_kwh,
        duty_cycle=duty_cycle,
        effective_hashrate_th=effective_hashrate,
        btc_revenue_usd=btc_revenue_net,
        heating_value_usd=heating_value,
        total_revenue_usd=total_revenue,
        electricity_cost_usd=electricity_cost,
        pool_fee_usd=pool_fee,
        total_cost_usd=total_cost,
        net_profit_usd=total_revenue - total_cost,
    )


# ---------------------------------------------------------
# Annual rollup
# ---------------------------------------------------------


def _check_series(values: Sequence[float], label: str) -> None:
    if len(values) != 12:
        raise MalformedMonthlySeriesError(f"{label} must have 12 values, got {len(values)}")


def _pct_of(part: float, total: float) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def _simple_payback(capital_cost_usd: Optional[float], annual_net_profit: float) -> Optional[float]:
    # None rather than inf: there is no payback to report
    if capital_cost_usd is None or annual_net_profit <= 0:
        return None
    return capital_cost_usd / annual_net_profit


def analyze_freeze_frame(inputs: EconomicInputs) -> FreezeFrameResult:
    """
    Run twelve months of economics at today's hashprice, BTC price, fuel
    and electricity rates, and sum them into an annual picture.
    """
    _check_series(inputs.monthly_heat_load_kwh, "monthly_heat_load_kwh")
    _check_series(inputs.monthly_duty_cycles, "monthly_duty_cycles")

    months: List[MonthlyEconomics] = [
        calculate_freeze_frame_month(
            month=i + 1,
            heat_load_kwh=inputs.monthly_heat_load_kwh[i],
            duty_cycle=inputs.monthly_duty_cycles[i],
            max_hashrate_th=inputs.total_hashrate_th,
            power_kw=inputs.total_power_kw,
            hashprice_usd_per_th_day=inputs.hashprice_usd_per_th_day,
            fuel_cost_per_kwh=inputs.fuel_cost_per_kwh,
            electricity_rate_usd_per_kwh=inputs.electricity_rate_usd_per_kwh,
            pool_fee_fraction=inputs.pool_fee_fraction,
        )
        for i in range(12)
    ]

    annual_btc_revenue = sum(m.btc_revenue_usd for m in months)
    annual_heating_value = sum(m.heating_value_usd for m in months)
    annual_total_revenue = sum(m.total_revenue_usd for m in months)
    annual_electricity_cost = sum(m.electricity_cost_usd for m in months)
    annual_pool_fee = sum(m.pool_fee_usd for m in months)
    annual_total_cost = sum(m.total_cost_usd for m in months)
    annual_net_profit = sum(m.net_profit_usd for m in months)

    annual_heat_kwh = sum(inputs.monthly_heat_load_kwh)
    net_heating_cost = annual_electricity_cost - annual_btc_revenue
    effective_cost_per_kwh = net_heating_cost / annual_heat_kwh if annual_heat_kwh > 0 else 0.0

    annual_btc_mined = (
        annual_btc_revenue / inputs.btc_price_usd if inputs.btc_price_usd > 0 else 0.0
    )

    return FreezeFrameResult(
        months=months,
        annual_btc_revenue_usd=annual_btc_revenue,
        annual_heating_value_usd=annual_heating_value,
        annual_total_revenue_usd=annual_total_revenue,
        annual_electricity_cost_usd=annual_electricity_cost,
        annual_pool_fee_usd=annual_pool_fee,
        annual_total_cost_usd=annual_total_cost,
        annual_net_profit_usd=annual_net_profit,
        revenue_split_btc_pct=_pct_of(annual_btc_revenue, annual_total_revenue),
        revenue_split_heat_pct=_pct_of(annual_heating_value, annual_total_revenue),
        annual_heat_kwh=annual_heat_kwh,
        annual_btc_mined=annual_btc_mined,
        effective_heating_cost_per_kwh=effective_cost_per_kwh,
        simple_payback_years=_simple_payback(inputs.capital_cost_usd, annual_net_profit),
    )


def calculate_break_even_electricity_rate(
    hashrate_th: float,
    hashprice_usd_per_th_day: float,
    power_kw: float,
    pool_fee_fraction: float = settings.DEFAULT_POOL_FEE_FRACTION,
) -> float:
    """Electricity rate (USD/kWh) at which net mining revenue covers power."""
    daily_revenue = hashrate_th * hashprice_usd_per_th_day * (1 - pool_fee_fraction)
    daily_kwh = power_kw * HOURS_PER_DAY
    return daily_revenue / daily_kwh if daily_kwh > 0 else 0.0
