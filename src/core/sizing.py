# src/core/sizing.py
"""
Equipment sizing: turn a required heating power into a whole number of
mining heaters from a catalogue, then work out how hard that fleet runs
each month.

Two upstream targets feed the same optimiser:
- baseload: average power in the coldest month (keeps units busy)
- extreme: HLC × (indoor target − 99% design temperature), the HVAC peak
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from src.config import settings
from src.core.building_models import HeatLoadProfile
from src.core.conversions import HOURS_PER_MONTH
from src.core.errors import InvalidProfileLengthError
from src.core.miner_models import (
    EquipmentModel,
    HeatingApplication,
    MonthlySizingProfile,
    OptimizationCriterion,
    SizingMethod,
    SizingResult,
)

logger = logging.getLogger(__name__)


def _check_twelve(values: Sequence[float]) -> None:
    if len(values) != 12:
        raise InvalidProfileLengthError(
            f"Expected 12 months of data, got {len(values)}"
        )


# ---------------------------------------------------------
# Required power
# ---------------------------------------------------------


def calculate_baseload_sizing(monthly_heat_load: Sequence[float]) -> float:
    """Average power (kW) in the month with the highest heat load."""
    _check_twelve(monthly_heat_load)
    profile = HeatLoadProfile(monthly_kwh=tuple(monthly_heat_load))
    return profile.coldest_month_kwh / HOURS_PER_MONTH[profile.coldest_month_index]


def identify_coldest_month(monthly_heat_load: Sequence[float]) -> int:
    """1-based month with the highest heat load (first one on ties)."""
    _check_twelve(monthly_heat_load)
    return HeatLoadProfile(monthly_kwh=tuple(monthly_heat_load)).coldest_month_index + 1


def calculate_extreme_sizing(
    hlc_rate_kw_per_f: float,
    target_temp_f: float = settings.DEFAULT_TARGET_INDOOR_TEMP_F,
    design_temp_f: float = 0.0,
) -> float:
    """Peak power (kW) at the 99% design temperature; never negative."""
    delta_t = target_temp_f - design_temp_f
    return max(hlc_rate_kw_per_f * delta_t, 0.0)


# ---------------------------------------------------------
# Equipment selection
# ---------------------------------------------------------


def filter_compatible_equipment(
    catalog: Sequence[EquipmentModel],
    application: HeatingApplication | str,
) -> List[EquipmentModel]:
    app = HeatingApplication(application)
    return [m for m in catalog if app in m.heating_applications]


def calculate_unit_quantity(required_power_kw: float, model: EquipmentModel) -> int:
    if required_power_kw <= 0:
        return 0
    return math.ceil(required_power_kw / model.max_power_kw)


def _selection_key(
    criterion: OptimizationCriterion, required_power_kw: float
) -> Callable[[EquipmentModel], float]:
    keys: Dict[OptimizationCriterion, Callable[[EquipmentModel], float]] = {
        OptimizationCriterion.COST_PER_TH: lambda m: m.cost_per_th,
        OptimizationCriterion.EFFICIENCY: lambda m: m.efficiency_w_per_th,
        OptimizationCriterion.POWER_MATCH: lambda m: abs(
            m.max_power_kw - required_power_kw
        ),
    }
    return keys[criterion]


def select_equipment(
    required_power_kw: float,
    catalog: Sequence[EquipmentModel],
    criterion: OptimizationCriterion | str = settings.DEFAULT_OPTIMIZATION,
    max_units: int = settings.MAX_UNITS_PER_MODEL,
) -> Optional[EquipmentModel]:
    """
    Best catalogue entry for the required power, or None.

    Models that would need more than max_units to cover the load are
    dropped first. min() keeps the first of equal keys, so ties go to
    catalogue order.
    """
    candidates = [
        m for m in catalog if calculate_unit_quantity(required_power_kw, m) <= max_units
    ]
    if not candidates:
        return None
    key = _selection_key(OptimizationCriterion(criterion), required_power_kw)
    return min(candidates, key=key)


def _empty_result(sizing_method: SizingMethod, required_power_kw: float) -> SizingResult:
    return SizingResult(
        sizing_method=sizing_method,
        required_power_kw=required_power_kw,
        model=None,
        quantity=0,
        total_capacity_kw=0.0,
        total_hashrate_th=0.0,
        total_cost_usd=0.0,
        capacity_utilization_pct=0.0,
    )


def size_system(
    required_power_kw: float,
    catalog: Sequence[EquipmentModel],
    sizing_method: SizingMethod | str = SizingMethod.BASELOAD,
    criterion: OptimizationCriterion | str = settings.DEFAULT_OPTIMIZATION,
    max_units: int = settings.MAX_UNITS_PER_MODEL,
) -> SizingResult:
    """
    Pick a model and quantity for required_power_kw.

    "No suitable equipment" is a normal outcome: the result comes back with
    model=None and zero totals instead of raising.
    """
    method = SizingMethod(sizing_method)

    if required_power_kw <= 0:
        return _empty_result(method, required_power_kw)

    model = select_equipment(required_power_kw, catalog, criterion, max_units)
    if model is None:
        logger.warning(
            "No equipment for %.2f kW (%s sizing) within %d units per model",
            required_power_kw,
            method.value,
            max_units,
        )
        return _empty_result(method, required_power_kw)

    quantity = calculate_unit_quantity(required_power_kw, model)
    total_capacity = model.max_power_kw * quantity
    logger.info(
        "%s sizing: %d x %s for %.2f kW", method.value, quantity, model.name, required_power_kw
    )

    return SizingResult(
        sizing_method=method,
        required_power_kw=required_power_kw,
        model=model,
        quantity=quantity,
        total_capacity_kw=total_capacity,
        total_hashrate_th=model.hashrate_th * quantity,
        total_cost_usd=model.cost_usd * quantity,
        capacity_utilization_pct=(required_power_kw / total_capacity) * 100,
    )


# ---------------------------------------------------------
# Monthly operation
# ---------------------------------------------------------


def _load_ratios(monthly_heat_load: Sequence[float], total_capacity_kw: float) -> List[float]:
    _check_twelve(monthly_heat_load)
    if total_capacity_kw <= 0:
        return [0.0] * 12
    return [
        (kwh / HOURS_PER_MONTH[i]) / total_capacity_kw
        for i, kwh in enumerate(monthly_heat_load)
    ]


def calculate_monthly_duty_cycles(
    monthly_heat_load: Sequence[float],
    total_capacity_kw: float,
) -> List[float]:
    """Fraction of installed capacity needed each month, capped at 1.0."""
    return [min(r, 1.0) for r in _load_ratios(monthly_heat_load, total_capacity_kw)]


def find_capacity_shortfall_months(
    monthly_heat_load: Sequence[float],
    total_capacity_kw: float,
) -> List[int]:
    """0-based months where demand exceeds installed capacity."""
    ratios = _load_ratios(monthly_heat_load, total_capacity_kw)
    return [i for i, r in enumerate(ratios) if r > 1.0]


def generate_monthly_sizing_profile(
    monthly_heat_load: Sequence[float],
    sizing: SizingResult,
) -> List[MonthlySizingProfile]:
    duty_cycles = calculate_monthly_duty_cycles(monthly_heat_load, sizing.total_capacity_kw)
    return [
        MonthlySizingProfile(
            month=i + 1,
            heat_load_kwh=kwh,
            average_power_kw=kwh / HOURS_PER_MONTH[i],
            duty_cycle=duty_cycles[i],
            effective_hashrate_th=duty_cycles[i] * sizing.total_hashrate_th,
        )
        for i, kwh in enumerate(monthly_heat_load)
    ]


@dataclass
class AnnualSizingAverages:
    annual_heat_kwh: float
    average_duty_cycle: float
    average_hashrate_th: float
    peak_duty_cycle: float


def calculate_annual_averages(
    monthly_profiles: Sequence[MonthlySizingProfile],
) -> AnnualSizingAverages:
    _check_twelve(monthly_profiles)
    return AnnualSizingAverages(
        annual_heat_kwh=sum(p.heat_load_kwh for p in monthly_profiles),
        average_duty_cycle=sum(p.duty_cycle for p in monthly_profiles) / 12,
        average_hashrate_th=sum(p.effective_hashrate_th for p in monthly_profiles) / 12,
        peak_duty_cycle=max(p.duty_cycle for p in monthly_profiles),
    )


def calculate_annual_operating_hours(
    monthly_profiles: Sequence[MonthlySizingProfile],
) -> float:
    """Full-power-equivalent hours per year."""
    _check_twelve(monthly_profiles)
    return sum(p.duty_cycle * HOURS_PER_MONTH[i] for i, p in enumerate(monthly_profiles))
