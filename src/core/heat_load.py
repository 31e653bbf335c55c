# src/core/heat_load.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from src.core.building_models import HeatLoadProfile, HeatLossCoefficient
from src.core.conversions import HOURS_PER_MONTH
from src.core.errors import InvalidProfileLengthError


@dataclass
class AnnualHeatTotals:
    annual_kwh: float
    coldest_month_index: int  # 0-11
    coldest_month_kwh: float
    peak_average_power_kw: float


def _check_twelve(values: Sequence[float], label: str) -> None:
    if len(values) != 12:
        raise InvalidProfileLengthError(
            f"Expected 12 months of {label}, got {len(values)}"
        )


def _hlc_hdd(hlc: HeatLossCoefficient | float) -> float:
    if isinstance(hlc, HeatLossCoefficient):
        return hlc.kwh_per_f_day
    return float(hlc)


def generate_heat_load_profile(
    hlc: HeatLossCoefficient | float,
    hdd_series: Sequence[float],
) -> List[float]:
    """
    Monthly heat load (kWh) = HLC (kWh/°F-day) × that month's historical HDD.
    """
    _check_twelve(hdd_series, "HDD data")
    hlc_hdd = _hlc_hdd(hlc)
    return [hlc_hdd * hdd for hdd in hdd_series]


def calculate_average_monthly_power(monthly_heat_load: Sequence[float]) -> List[float]:
    """Average heating power (kW) per month."""
    _check_twelve(monthly_heat_load, "heat load data")
    return [kwh / HOURS_PER_MONTH[i] for i, kwh in enumerate(monthly_heat_load)]


def build_heat_load_profile(
    hlc: HeatLossCoefficient | float,
    hdd_series: Sequence[float],
) -> HeatLoadProfile:
    return HeatLoadProfile(monthly_kwh=tuple(generate_heat_load_profile(hlc, hdd_series)))


def calculate_annual_totals(monthly_heat_load: Sequence[float]) -> AnnualHeatTotals:
    _check_twelve(monthly_heat_load, "heat load data")
    profile = HeatLoadProfile(monthly_kwh=tuple(monthly_heat_load))
    return AnnualHeatTotals(
        annual_kwh=profile.annual_kwh,
        coldest_month_index=profile.coldest_month_index,
        coldest_month_kwh=profile.coldest_month_kwh,
        peak_average_power_kw=profile.peak_average_power_kw,
    )
