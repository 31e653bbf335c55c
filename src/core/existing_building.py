# src/core/existing_building.py
"""
Existing-building analysis: calibrate the heat-loss coefficient from bills.

Each month's delivered heat (fuel energy × AFUE) is divided by that month's
heating degree days. Shoulder months and near-zero HDD months are dropped,
optional Tukey fences reject outliers, and the median (or mean) of what is
left becomes the building's HLC in kWh/°F-day.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from src.config import settings
from src.core.building_models import (
    CalibrationMethod,
    ExclusionReason,
    FuelRecord,
    HeatLossCoefficient,
    HLCCalibrationResult,
    MonthlyHLC,
)
from src.core.conversions import FuelType, fuel_to_kwh, validate_efficiency
from src.core.errors import (
    AllExcludedAsOutliersError,
    InsufficientDataError,
    MalformedMonthlySeriesError,
)

logger = logging.getLogger(__name__)


def calculate_heat_delivered(
    fuel_quantity: float,
    fuel_type: FuelType | str,
    afue: float = 1.0,
) -> float:
    """Heat delivered to the space (kWh) from a fuel quantity at a given AFUE."""
    validate_efficiency(afue)
    return fuel_to_kwh(fuel_quantity, fuel_type) * afue


def calculate_monthly_hlc(
    heat_delivered_kwh: float,
    hdd_reference: float,
    min_hdd: float = settings.MIN_HDD_DENOMINATOR,
) -> Optional[float]:
    """HLC (kWh/°F-day) for one month, or None when HDD is negligible."""
    if hdd_reference < min_hdd:
        return None
    return heat_delivered_kwh / hdd_reference


def _check_records(records: Sequence[FuelRecord]) -> None:
    if len(records) != 12:
        raise MalformedMonthlySeriesError(
            f"Expected 12 months of bill data, got {len(records)}"
        )
    months = [r.month for r in records]
    if months != list(range(1, 13)):
        raise MalformedMonthlySeriesError(
            f"Bill records must be in calendar order 1-12, got {months}"
        )


def calculate_hlc_from_bills(
    records: Sequence[FuelRecord],
    afue: float = 1.0,
) -> List[Optional[float]]:
    """Per-month HLC values (None for months with negligible HDD)."""
    _check_records(records)
    validate_efficiency(afue)

    monthly: List[Optional[float]] = []
    for record in records:
        heat = calculate_heat_delivered(record.fuel_quantity, record.fuel_type, afue)
        monthly.append(calculate_monthly_hlc(heat, record.hdd_reference))
    return monthly


# ---------------------------------------------------------
# Outlier detection
# ---------------------------------------------------------


def calculate_quartiles(values: Sequence[float]) -> Tuple[float, float]:
    """
    Q1 and Q3 taken at floor(n × 0.25) and floor(n × 0.75) of the sorted
    values. No interpolation.
    """
    ordered = sorted(values)
    n = len(ordered)
    return ordered[int(n * 0.25)], ordered[int(n * 0.75)]


def iqr_bounds(
    values: Sequence[float],
    multiplier: float = settings.OUTLIER_IQR_MULTIPLIER,
) -> Tuple[float, float]:
    q1, q3 = calculate_quartiles(values)
    iqr = q3 - q1
    return q1 - multiplier * iqr, q3 + multiplier * iqr


def detect_outliers_iqr(
    values: Sequence[float],
    multiplier: float = settings.OUTLIER_IQR_MULTIPLIER,
) -> List[bool]:
    """Flag values outside the Tukey fences. Too few values → nothing flagged."""
    if len(values) < settings.MIN_OUTLIER_SAMPLE:
        return [False] * len(values)

    lower, upper = iqr_bounds(values, multiplier)
    return [v < lower or v > upper for v in values]


# ---------------------------------------------------------
# Calibration
# ---------------------------------------------------------


def calibrate_hlc(
    records: Sequence[FuelRecord],
    afue: float = settings.DEFAULT_AFUE,
    method: CalibrationMethod | str = settings.DEFAULT_CALIBRATION_METHOD,
    exclude_outliers: bool = True,
    hdd_threshold: float = settings.DEFAULT_HDD_THRESHOLD,
) -> HLCCalibrationResult:
    """
    Calibrate the building HLC from 12 months of fuel records.

    Steps:
    1. Delivered heat per month = fuel kWh × afue.
    2. Month HLC = delivered heat / HDD, only when HDD >= hdd_threshold and
       HDD >= 1; other months are excluded as shoulder months.
    3. With outlier rejection on and at least 4 valid months, drop values
       outside Q1 - 1.5·IQR .. Q3 + 1.5·IQR of the valid months.
    4. Median or mean of the survivors is the HLC (kWh/°F-day).
    5. Annual heat = HLC × sum of all 12 HDD values.

    Raises InsufficientDataError (< 3 valid months) and
    AllExcludedAsOutliersError (outlier step removed everything).
    """
    method = CalibrationMethod(method)
    raw = calculate_hlc_from_bills(records, afue)

    months: List[MonthlyHLC] = []
    valid_values: List[float] = []
    valid_indices: List[int] = []

    for i, (hlc, record) in enumerate(zip(raw, records)):
        if hlc is None or record.hdd_reference < hdd_threshold:
            months.append(MonthlyHLC.excluded(i, ExclusionReason.SHOULDER_MONTH, hlc))
            continue
        months.append(MonthlyHLC.valid(i, hlc))
        valid_values.append(hlc)
        valid_indices.append(i)

    if len(valid_values) < settings.MIN_CALIBRATION_MONTHS:
        raise InsufficientDataError(
            "Insufficient valid heating months for calibration. "
            f"Need at least {settings.MIN_CALIBRATION_MONTHS}, "
            f"got {len(valid_values)}"
        )

    final_values = valid_values
    bounds: Optional[Tuple[float, float]] = None
    if exclude_outliers and len(valid_values) >= settings.MIN_OUTLIER_SAMPLE:
        bounds = iqr_bounds(valid_values)
        flags = detect_outliers_iqr(valid_values)
        final_values = [v for v, is_out in zip(valid_values, flags) if not is_out]

        outlier_indices = [idx for idx, is_out in zip(valid_indices, flags) if is_out]
        for idx in outlier_indices:
            months[idx] = MonthlyHLC.excluded(
                idx, ExclusionReason.OUTLIER, months[idx].candidate
            )
        if outlier_indices:
            logger.warning(
                "Excluded %d outlier month(s) from HLC calibration: %s",
                len(outlier_indices),
                outlier_indices,
            )

    if not final_values:
        raise AllExcludedAsOutliersError(
            "All heating months were excluded as outliers"
        )

    if method is CalibrationMethod.MEDIAN:
        hlc_hdd = float(np.median(final_values))
    else:
        hlc_hdd = float(np.mean(final_values))

    annual_hdd = sum(r.hdd_reference for r in records)
    excluded = tuple(sorted({m.month_index for m in months if not m.is_valid}))

    logger.info(
        "Calibrated HLC %.4f kWh/°F-day from %d month(s) (%s)",
        hlc_hdd,
        len(final_values),
        method.value,
    )

    return HLCCalibrationResult(
        hlc=HeatLossCoefficient(kwh_per_f_day=hlc_hdd),
        months=tuple(months),
        excluded_months=excluded,
        method=method,
        annual_heat_kwh=hlc_hdd * annual_hdd,
        outlier_bounds=bounds,
    )


def create_empty_bill_records(
    fuel_type: FuelType | str,
    hdd_series: Sequence[float],
) -> List[FuelRecord]:
    """Zero-consumption records for 12 months, pre-joined with an HDD series."""
    return [
        FuelRecord(
            month=i + 1,
            fuel_quantity=0.0,
            fuel_type=FuelType(fuel_type),
            total_cost=0.0,
            hdd_reference=float(hdd_series[i]) if i < len(hdd_series) else 0.0,
        )
        for i in range(12)
    ]
