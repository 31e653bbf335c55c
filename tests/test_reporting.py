# tests/test_reporting.py
import pandas as pd
import pytest

from src.core.audit_engine import MarketInputs, run_existing_building_audit
from src.core.building_models import FuelRecord
from src.core.new_building import calculate_total_hlc, create_envelope_from_inputs
from src.core.reporting import (
    breakdown_to_dataframe,
    calibration_to_dataframe,
    freeze_frame_to_dataframe,
    sizing_comparison_table,
    sizing_profile_to_dataframe,
)

GAS_THERMS = [180, 160, 140, 80, 20, 0, 0, 0, 10, 60, 130, 170]
GAS_HDD = [900, 800, 700, 400, 100, 0, 0, 0, 50, 300, 650, 850]


@pytest.fixture(scope="module")
def audit():
    records = [
        FuelRecord(
            month=i + 1,
            fuel_quantity=float(q),
            fuel_type="therms",
            total_cost=0.0,
            hdd_reference=float(h),
        )
        for i, (q, h) in enumerate(zip(GAS_THERMS, GAS_HDD))
    ]
    market = MarketInputs(
        hashprice_usd_per_th_day=0.05,
        btc_price_usd=100_000.0,
        electricity_rate_usd_per_kwh=0.12,
        fuel_cost_per_kwh=0.06,
    )
    return run_existing_building_audit(records, GAS_HDD, design_temp_f=5.0, market=market)


def test_calibration_table(audit):
    df = calibration_to_dataframe(audit.calibration)
    assert len(df) == 12
    assert list(df.columns) == ["Month", "HLC (kWh/°F-day)", "Used", "Excluded because"]
    assert df.loc[0, "Month"] == "Jan"
    assert df["Used"].sum() == len(audit.calibration.months) - len(
        audit.calibration.excluded_months
    )
    assert df.loc[6, "Excluded because"] != ""


def test_breakdown_table_drops_zero_components():
    envelope = create_envelope_from_inputs(
        2000.0, 9.0, "2010_2020", "2010_low_e", "slab_on_grade", "new_standard"
    )
    df = breakdown_to_dataframe(calculate_total_hlc(envelope))
    assert "Basement" not in set(df["Component"])
    assert {"Walls", "Infiltration", "Slab edge"} <= set(df["Component"])
    assert df["Share (%)"].sum() == pytest.approx(100.0)


def test_sizing_profile_table(audit):
    df = sizing_profile_to_dataframe(audit.baseload.monthly_profile)
    assert len(df) == 12
    assert df["Duty cycle (%)"].between(0, 100).all()
    assert sizing_profile_to_dataframe([]).empty


def test_freeze_frame_table(audit):
    econ = audit.baseload.economics
    df = freeze_frame_to_dataframe(econ)
    assert len(df) == 12
    assert df["Net profit (USD)"].sum() == pytest.approx(econ.annual_net_profit_usd)
    assert freeze_frame_to_dataframe(None).empty


def test_sizing_comparison_table(audit):
    df = sizing_comparison_table(audit)
    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["Baseload", "Extreme"]
    assert df.loc["Required power (kW)", "Extreme"] == pytest.approx(
        audit.extreme.sizing.required_power_kw
    )
    assert df.loc["Equipment", "Baseload"] == audit.baseload.sizing.model.name
