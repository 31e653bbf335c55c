# src/core/audit_engine.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from src.config import settings
from src.core.building_models import (
    BuildingEnvelope,
    CalibrationMethod,
    FuelRecord,
    HeatLoadProfile,
    HeatLossCoefficient,
    HLCBreakdown,
    HLCCalibrationResult,
)
from src.core.economics_models import EconomicInputs, FreezeFrameResult
from src.core.existing_building import calibrate_hlc
from src.core.freeze_frame import analyze_freeze_frame
from src.core.heat_load import build_heat_load_profile
from src.core.miner_models import (
    EquipmentModel,
    HeatingApplication,
    MonthlySizingProfile,
    OptimizationCriterion,
    SizingMethod,
    SizingResult,
)
from src.core.new_building import calculate_total_hlc
from src.core.sizing import (
    calculate_baseload_sizing,
    calculate_extreme_sizing,
    filter_compatible_equipment,
    find_capacity_shortfall_months,
    generate_monthly_sizing_profile,
    size_system,
)
from src.data.equipment_catalog import default_catalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketInputs:
    """Today's market snapshot, held constant for the freeze-frame year."""

    hashprice_usd_per_th_day: float = settings.DEFAULT_HASHPRICE_USD_PER_TH_DAY
    btc_price_usd: float = settings.DEFAULT_BTC_PRICE_USD
    electricity_rate_usd_per_kwh: float = settings.DEFAULT_ELECTRICITY_RATE_USD_PER_KWH
    fuel_cost_per_kwh: float = 0.0  # value of displaced heat
    pool_fee_fraction: float = settings.DEFAULT_POOL_FEE_FRACTION
    include_capital_cost: bool = True


@dataclass(frozen=True)
class SizingScenario:
    sizing: SizingResult
    monthly_profile: List[MonthlySizingProfile]
    shortfall_months: List[int]  # 0-based
    economics: Optional[FreezeFrameResult]  # None when nothing was sized


@dataclass(frozen=True)
class AuditResult:
    """
    End-to-end audit for one building.

    Exactly one of calibration (existing building) or breakdown (new
    building) is set. Both sizing methods are always present so they can be
    compared side by side.
    """

    hlc: HeatLossCoefficient
    profile: HeatLoadProfile
    scenarios: Dict[SizingMethod, SizingScenario]
    calibration: Optional[HLCCalibrationResult] = None
    breakdown: Optional[HLCBreakdown] = None

    @property
    def baseload(self) -> SizingScenario:
        return self.scenarios[SizingMethod.BASELOAD]

    @property
    def extreme(self) -> SizingScenario:
        return self.scenarios[SizingMethod.EXTREME]


# ---------------------------------------------------------
# Pipeline pieces
# ---------------------------------------------------------


def _economics_for(
    sizing: SizingResult,
    profile: HeatLoadProfile,
    duty_cycles: Sequence[float],
    market: MarketInputs,
) -> Optional[FreezeFrameResult]:
    if sizing.is_empty:
        return None
    inputs = EconomicInputs(
        total_hashrate_th=sizing.total_hashrate_th,
        total_power_kw=sizing.total_capacity_kw,
        monthly_heat_load_kwh=list(profile.monthly_kwh),
        monthly_duty_cycles=list(duty_cycles),
        hashprice_usd_per_th_day=market.hashprice_usd_per_th_day,
        btc_price_usd=market.btc_price_usd,
        fuel_cost_per_kwh=market.fuel_cost_per_kwh,
        electricity_rate_usd_per_kwh=market.electricity_rate_usd_per_kwh,
        capital_cost_usd=sizing.total_cost_usd if market.include_capital_cost else None,
        pool_fee_fraction=market.pool_fee_fraction,
    )
    return analyze_freeze_frame(inputs)


def run_sizing_scenario(
    required_power_kw: float,
    sizing_method: SizingMethod,
    profile: HeatLoadProfile,
    catalog: Sequence[EquipmentModel],
    market: MarketInputs,
    criterion: OptimizationCriterion | str = settings.DEFAULT_OPTIMIZATION,
) -> SizingScenario:
    """Size, run the monthly profile and price one sizing method."""
    sizing = size_system(required_power_kw, catalog, sizing_method, criterion)
    monthly = generate_monthly_sizing_profile(profile.monthly_kwh, sizing)
    shortfall = (
        []
        if sizing.is_empty
        else find_capacity_shortfall_months(profile.monthly_kwh, sizing.total_capacity_kw)
    )

    if shortfall:
        logger.warning(
            "%s sizing (%s x%d) falls short of demand in month(s) %s",
            sizing_method.value,
            sizing.model.name,
            sizing.quantity,
            [m + 1 for m in shortfall],
        )

    economics = _economics_for(sizing, profile, [p.duty_cycle for p in monthly], market)
    return SizingScenario(
        sizing=sizing,
        monthly_profile=monthly,
        shortfall_months=shortfall,
        economics=economics,
    )


def _run_from_hlc(
    hlc: HeatLossCoefficient,
    historical_hdd: Sequence[float],
    design_temp_f: float,
    market: MarketInputs,
    catalog: Optional[Sequence[EquipmentModel]],
    criterion: OptimizationCriterion | str,
    target_temp_f: float,
    application: Optional[HeatingApplication | str],
) -> Tuple[HeatLoadProfile, Dict[SizingMethod, SizingScenario]]:
    profile = build_heat_load_profile(hlc, historical_hdd)

    equipment = list(catalog) if catalog is not None else default_catalog()
    if application is not None:
        equipment = filter_compatible_equipment(equipment, application)

    required = {
        SizingMethod.BASELOAD: calculate_baseload_sizing(profile.monthly_kwh),
        SizingMethod.EXTREME: calculate_extreme_sizing(
            hlc.kw_per_f, target_temp_f, design_temp_f
        ),
    }
    scenarios = {
        method: run_sizing_scenario(kw, method, profile, equipment, market, criterion)
        for method, kw in required.items()
    }
    return profile, scenarios


# ---------------------------------------------------------
# Entry points
# ---------------------------------------------------------


def run_existing_building_audit(
    records: Sequence[FuelRecord],
    historical_hdd: Sequence[float],
    design_temp_f: float,
    market: MarketInputs,
    afue: float = settings.DEFAULT_AFUE,
    method: CalibrationMethod | str = settings.DEFAULT_CALIBRATION_METHOD,
    exclude_outliers: bool = True,
    hdd_threshold: float = settings.DEFAULT_HDD_THRESHOLD,
    catalog: Optional[Sequence[EquipmentModel]] = None,
    criterion: OptimizationCriterion | str = settings.DEFAULT_OPTIMIZATION,
    target_temp_f: float = settings.DEFAULT_TARGET_INDOOR_TEMP_F,
    application: Optional[HeatingApplication | str] = None,
) -> AuditResult:
    """
    Bills → calibrated HLC → profile on long-term HDD → both sizings →
    freeze-frame economics.

    Calibration errors propagate; there is no placeholder HLC.
    """
    calibration = calibrate_hlc(
        records,
        afue=afue,
        method=method,
        exclude_outliers=exclude_outliers,
        hdd_threshold=hdd_threshold,
    )
    profile, scenarios = _run_from_hlc(
        calibration.hlc,
        historical_hdd,
        design_temp_f,
        market,
        catalog,
        criterion,
        target_temp_f,
        application,
    )
    return AuditResult(
        hlc=calibration.hlc,
        profile=profile,
        scenarios=scenarios,
        calibration=calibration,
    )


def run_new_building_audit(
    envelope: BuildingEnvelope,
    historical_hdd: Sequence[float],
    design_temp_f: float,
    market: MarketInputs,
    catalog: Optional[Sequence[EquipmentModel]] = None,
    criterion: OptimizationCriterion | str = settings.DEFAULT_OPTIMIZATION,
    target_temp_f: float = settings.DEFAULT_TARGET_INDOOR_TEMP_F,
    application: Optional[HeatingApplication | str] = None,
) -> AuditResult:
    """Envelope → modelled HLC → profile → both sizings → economics."""
    breakdown = calculate_total_hlc(envelope)
    profile, scenarios = _run_from_hlc(
        breakdown.hlc,
        historical_hdd,
        design_temp_f,
        market,
        catalog,
        criterion,
        target_temp_f,
        application,
    )
    return AuditResult(
        hlc=breakdown.hlc,
        profile=profile,
        scenarios=scenarios,
        breakdown=breakdown,
    )
