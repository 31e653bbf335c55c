# tests/test_existing_building.py
from typing import List, Sequence

import pytest

from src.core import existing_building
from src.core.building_models import CalibrationMethod, ExclusionReason, FuelRecord
from src.core.conversions import FuelType, fuel_to_kwh
from src.core.errors import (
    AllExcludedAsOutliersError,
    InsufficientDataError,
    InvalidEfficiencyError,
    MalformedMonthlySeriesError,
)
from src.core.existing_building import (
    calculate_heat_delivered,
    calculate_hlc_from_bills,
    calculate_monthly_hlc,
    calculate_quartiles,
    calibrate_hlc,
    create_empty_bill_records,
    detect_outliers_iqr,
    iqr_bounds,
)

GAS_THERMS = [180, 160, 140, 80, 20, 0, 0, 0, 10, 60, 130, 170]
GAS_HDD = [900, 800, 700, 400, 100, 0, 0, 0, 50, 300, 650, 850]


def _records(
    quantities: Sequence[float],
    hdd: Sequence[float],
    fuel_type: FuelType = FuelType.THERMS,
) -> List[FuelRecord]:
    return [
        FuelRecord(
            month=i + 1,
            fuel_quantity=float(q),
            fuel_type=fuel_type,
            total_cost=0.0,
            hdd_reference=float(h),
        )
        for i, (q, h) in enumerate(zip(quantities, hdd))
    ]


def _sample_gas_records() -> List[FuelRecord]:
    return _records(GAS_THERMS, GAS_HDD)


# ---------------------------------------------------------
# Per-month building blocks
# ---------------------------------------------------------


def test_heat_delivered_applies_afue():
    assert calculate_heat_delivered(180, FuelType.THERMS, 0.85) == pytest.approx(
        180 * 29.3 * 0.85
    )


def test_heat_delivered_rejects_bad_afue():
    with pytest.raises(InvalidEfficiencyError):
        calculate_heat_delivered(100, FuelType.THERMS, 1.2)


def test_monthly_hlc_is_none_for_negligible_hdd():
    assert calculate_monthly_hlc(100.0, 0.0) is None
    assert calculate_monthly_hlc(100.0, 0.5) is None
    assert calculate_monthly_hlc(100.0, 50.0) == pytest.approx(2.0)


def test_hlc_from_bills_matches_formula_exactly():
    values = calculate_hlc_from_bills(_sample_gas_records(), afue=0.85)
    assert len(values) == 12
    for q, hdd, value in zip(GAS_THERMS, GAS_HDD, values):
        if hdd < 1:
            assert value is None
        else:
            assert value == fuel_to_kwh(q, "therms") * 0.85 / hdd


def test_wrong_record_count_is_malformed():
    with pytest.raises(MalformedMonthlySeriesError):
        calculate_hlc_from_bills(_sample_gas_records()[:11])


def test_records_out_of_calendar_order_are_malformed():
    records = _sample_gas_records()
    records[0], records[1] = records[1], records[0]
    with pytest.raises(MalformedMonthlySeriesError):
        calibrate_hlc(records)


def test_fuel_record_validates_month():
    with pytest.raises(ValueError):
        FuelRecord(month=13, fuel_quantity=1, fuel_type="therms", total_cost=0, hdd_reference=0)


# ---------------------------------------------------------
# Outlier detection
# ---------------------------------------------------------


def test_quartiles_are_floor_indexed():
    assert calculate_quartiles([4, 1, 3, 2]) == (2, 4)
    assert calculate_quartiles([1, 2, 3, 4, 5, 6, 7, 8]) == (3, 7)


def test_detect_outliers_needs_four_values():
    assert detect_outliers_iqr([1.0, 100.0, 1000.0]) == [False, False, False]


def test_detect_outliers_flags_spike():
    values = [1.0] * 7 + [10.0]
    flags = detect_outliers_iqr(values)
    assert flags == [False] * 7 + [True]
    assert iqr_bounds(values) == (1.0, 1.0)


# ---------------------------------------------------------
# Calibration
# ---------------------------------------------------------


def test_gas_scenario_excludes_shoulder_months():
    result = calibrate_hlc(_sample_gas_records(), afue=0.85)

    assert result.months_excluded_for(ExclusionReason.SHOULDER_MONTH) == [5, 6, 7, 8]
    assert {5, 6, 7, 8} <= set(result.excluded_months)
    assert list(result.excluded_months) == sorted(set(result.excluded_months))

    for month in result.months:
        if month.candidate is not None:
            q, hdd = GAS_THERMS[month.month_index], GAS_HDD[month.month_index]
            assert month.candidate == fuel_to_kwh(q, "therms") * 0.85 / hdd

    # every heating month has the same ratio of fuel to HDD
    assert result.hlc_hdd == pytest.approx(0.2 * 29.3 * 0.85)
    assert result.method is CalibrationMethod.MEDIAN


def test_final_values_lie_within_pre_rejection_fences():
    quantities = [900, 800, 700, 420, 300, 0, 0, 0, 200, 330, 2000, 850]
    hdd = [900, 800, 700, 400, 300, 0, 0, 0, 200, 300, 650, 850]
    result = calibrate_hlc(_records(quantities, hdd, FuelType.KWH), afue=1.0)

    assert result.outlier_bounds is not None
    lower, upper = result.outlier_bounds
    used = [m.value for m in result.months if m.is_valid]
    assert used
    assert all(lower <= v <= upper for v in used)
    assert 10 in result.months_excluded_for(ExclusionReason.OUTLIER)


def test_spike_month_is_rejected_as_outlier():
    quantities = [500.0] * 11 + [5000.0]
    result = calibrate_hlc(_records(quantities, [500.0] * 12, FuelType.KWH), afue=1.0)

    assert result.hlc_hdd == pytest.approx(1.0)
    assert result.excluded_months == (11,)
    assert result.months[11].exclusion is ExclusionReason.OUTLIER
    assert result.months[11].candidate == pytest.approx(10.0)
    assert result.monthly_hlc_values[11] is None


def test_outlier_rejection_can_be_disabled():
    quantities = [500.0] * 11 + [5000.0]
    result = calibrate_hlc(
        _records(quantities, [500.0] * 12, FuelType.KWH),
        afue=1.0,
        method="mean",
        exclude_outliers=False,
    )
    assert result.excluded_months == ()
    assert result.outlier_bounds is None
    assert result.hlc_hdd == pytest.approx((11 * 1.0 + 10.0) / 12)


def test_annual_heat_uses_all_twelve_hdd_values():
    result = calibrate_hlc(_sample_gas_records(), afue=0.85)
    assert result.annual_heat_kwh == pytest.approx(result.hlc_hdd * sum(GAS_HDD))


def test_calibration_is_deterministic():
    records = _sample_gas_records()
    assert calibrate_hlc(records, afue=0.85) == calibrate_hlc(records, afue=0.85)


def test_hlc_views_are_consistent():
    result = calibrate_hlc(_sample_gas_records(), afue=0.85)
    assert result.hlc_rate == pytest.approx(result.hlc_hdd / 24)
    assert result.hlc_btu == pytest.approx(result.hlc_rate * 3412)


def test_too_few_heating_months_raises():
    hdd = [500, 400, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0]
    with pytest.raises(InsufficientDataError):
        calibrate_hlc(_records([100] * 12, hdd))


def test_all_excluded_as_outliers_raises(monkeypatch):
    monkeypatch.setattr(
        existing_building,
        "detect_outliers_iqr",
        lambda values, multiplier=1.5: [True] * len(values),
    )
    with pytest.raises(AllExcludedAsOutliersError):
        calibrate_hlc(_sample_gas_records(), afue=0.85)


def test_empty_bill_records_carry_hdd():
    records = create_empty_bill_records("propane_gallons", GAS_HDD)
    assert len(records) == 12
    assert [r.month for r in records] == list(range(1, 13))
    assert all(r.fuel_quantity == 0.0 for r in records)
    assert all(r.fuel_type is FuelType.PROPANE_GALLONS for r in records)
    assert [r.hdd_reference for r in records] == [float(h) for h in GAS_HDD]
