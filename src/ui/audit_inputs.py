# src/ui/audit_inputs.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
import streamlit as st

from src.config import settings
from src.config.env import is_dev
from src.core.audit_engine import MarketInputs
from src.core.building_models import (
    ACHTightness,
    BuildingEnvelope,
    BuildingEra,
    CalibrationMethod,
    EnvelopeOverrides,
    FoundationType,
    FuelRecord,
    WindowType,
)
from src.core.conversions import MONTH_ABBREV, FuelType, fuel_cost_to_kwh_cost
from src.core.new_building import create_envelope_from_inputs
from src.data.fuel_specs import FUEL_TYPE_LABELS, TYPICAL_AFUE

MODE_EXISTING = "Existing building (utility bills)"
MODE_NEW = "New building (envelope)"


@dataclass
class ExistingBuildingInputs:
    records: List[FuelRecord]
    afue: float
    method: CalibrationMethod
    exclude_outliers: bool


@dataclass
class NewBuildingInputs:
    envelope: BuildingEnvelope
    floor_area_sqft: float


@dataclass
class AuditInputs:
    """Everything the audit engine needs from the page."""

    mode: str
    historical_hdd: List[float]
    design_temp_f: float
    market: MarketInputs
    existing: Optional[ExistingBuildingInputs] = None
    new: Optional[NewBuildingInputs] = None


def _default_monthly_table() -> pd.DataFrame:
    dev = is_dev()
    usage = settings.DEV_DEFAULT_BILLS_THERMS if dev else [0.0] * 12
    hdd = settings.DEV_DEFAULT_HDD if dev else [0.0] * 12
    return pd.DataFrame(
        {
            "Month": MONTH_ABBREV,
            "Fuel used": [float(v) for v in usage],
            "Bill (USD)": [0.0] * 12,
            "Bill-period HDD": [float(v) for v in hdd],
            "Normal HDD": [float(v) for v in hdd],
        }
    )


def _enum_select(label: str, enum_cls, default, help_text: str | None = None):
    options = list(enum_cls)
    return st.selectbox(
        label,
        options,
        index=options.index(default),
        format_func=lambda e: e.value.replace("_", " "),
        help=help_text,
    )


def render_existing_building_inputs(table: pd.DataFrame) -> ExistingBuildingInputs:
    col_fuel, col_afue = st.columns(2)
    with col_fuel:
        fuel_type = st.selectbox(
            "Fuel on the bills",
            list(FuelType),
            format_func=lambda f: FUEL_TYPE_LABELS[f],
        )
    with col_afue:
        afue = st.number_input(
            "Heating system efficiency (AFUE)",
            min_value=0.01,
            max_value=1.0,
            value=TYPICAL_AFUE[fuel_type],
            step=0.01,
            help="Share of fuel energy delivered as heat. Electric resistance is 1.0.",
        )

    with st.expander("Calibration options", expanded=False):
        method = _enum_select(
            "Average monthly HLC with", CalibrationMethod, CalibrationMethod.MEDIAN
        )
        exclude_outliers = st.checkbox(
            "Reject outlier months (1.5 × IQR)",
            value=True,
        )

    records = [
        FuelRecord(
            month=i + 1,
            fuel_quantity=float(row["Fuel used"]),
            fuel_type=fuel_type,
            total_cost=float(row["Bill (USD)"]),
            hdd_reference=float(row["Bill-period HDD"]),
        )
        for i, row in table.reset_index(drop=True).iterrows()
    ]
    return ExistingBuildingInputs(
        records=records,
        afue=afue,
        method=method,
        exclude_outliers=exclude_outliers,
    )


def render_new_building_inputs() -> NewBuildingInputs:
    col_area, col_height = st.columns(2)
    with col_area:
        floor_area = st.number_input(
            "Conditioned floor area (sq ft)",
            min_value=100.0,
            max_value=50000.0,
            value=settings.DEV_DEFAULT_FLOOR_AREA_SQFT,
            step=50.0,
        )
    with col_height:
        ceiling_height = st.number_input(
            "Ceiling height (ft)",
            min_value=7.0,
            max_value=20.0,
            value=settings.DEFAULT_CEILING_HEIGHT_FT,
            step=0.5,
        )

    col_a, col_b = st.columns(2)
    with col_a:
        era = _enum_select("Construction era", BuildingEra, BuildingEra.ERA_2010_2020)
        windows = _enum_select("Windows", WindowType, WindowType.LOW_E_2010)
    with col_b:
        foundation = _enum_select(
            "Foundation", FoundationType, FoundationType.SLAB_ON_GRADE
        )
        tightness = _enum_select(
            "Air tightness",
            ACHTightness,
            ACHTightness.NEW_STANDARD,
            help_text="Sets air changes per hour for the infiltration term.",
        )

    overrides = EnvelopeOverrides()
    with st.expander("Override R-values / ACH", expanded=False):
        wall_r = st.number_input("Wall R-value (0 = era default)", min_value=0.0, value=0.0)
        roof_r = st.number_input("Roof R-value (0 = era default)", min_value=0.0, value=0.0)
        ach = st.number_input("ACH (0 = tightness default)", min_value=0.0, value=0.0)
        overrides = EnvelopeOverrides(
            wall_r_value=wall_r or None,
            roof_r_value=roof_r or None,
            ach=ach or None,
        )

    envelope = create_envelope_from_inputs(
        floor_area, ceiling_height, era, windows, foundation, tightness, overrides
    )
    return NewBuildingInputs(envelope=envelope, floor_area_sqft=floor_area)


def render_market_inputs() -> MarketInputs:
    st.markdown("#### Market snapshot")
    dev = is_dev()
    default_rate = (
        settings.DEV_DEFAULT_ELECTRICITY_RATE_USD_PER_KWH
        if dev
        else settings.DEFAULT_ELECTRICITY_RATE_USD_PER_KWH
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        btc_price = st.number_input(
            "BTC price (USD)",
            min_value=0.0,
            value=settings.DEFAULT_BTC_PRICE_USD,
            step=1000.0,
        )
    with col2:
        hashprice = st.number_input(
            "Hashprice (USD / TH/s / day)",
            min_value=0.0,
            value=settings.DEFAULT_HASHPRICE_USD_PER_TH_DAY,
            step=0.001,
            format="%.4f",
        )
    with col3:
        electricity_rate = st.number_input(
            "Electricity rate (USD / kWh)",
            min_value=0.0,
            max_value=2.0,
            value=default_rate,
            step=0.005,
            format="%.3f",
        )

    col4, col5 = st.columns(2)
    with col4:
        displaced_fuel = st.selectbox(
            "Fuel displaced by miner heat",
            list(FuelType),
            format_func=lambda f: FUEL_TYPE_LABELS[f],
            key="displaced_fuel",
        )
    with col5:
        fuel_price = st.number_input(
            "Fuel price (USD per unit)",
            min_value=0.0,
            value=settings.DEV_DEFAULT_GAS_PRICE_USD_PER_THERM,
            step=0.05,
            help="Per therm, CCF, gallon or kWh, matching the fuel selected.",
        )

    include_capex = st.checkbox("Include equipment cost in payback", value=True)

    return MarketInputs(
        hashprice_usd_per_th_day=hashprice,
        btc_price_usd=btc_price,
        electricity_rate_usd_per_kwh=electricity_rate,
        fuel_cost_per_kwh=fuel_cost_to_kwh_cost(
            fuel_price, displaced_fuel, TYPICAL_AFUE[displaced_fuel]
        ),
        pool_fee_fraction=settings.DEFAULT_POOL_FEE_FRACTION,
        include_capital_cost=include_capex,
    )


def render_audit_inputs() -> AuditInputs:
    """Render the building, climate and market inputs for one audit."""
    st.markdown(
        "Describe the building and its climate. Existing buildings are "
        "calibrated from a year of bills; new buildings are modelled from "
        "their envelope."
    )
    mode = st.radio("Building type", [MODE_EXISTING, MODE_NEW], horizontal=True)

    st.markdown("#### Monthly data")
    table = st.data_editor(
        _default_monthly_table(),
        hide_index=True,
        disabled=["Month"],
        column_config={
            col: st.column_config.NumberColumn(min_value=0.0)
            for col in ("Fuel used", "Bill (USD)", "Bill-period HDD", "Normal HDD")
        },
        use_container_width=True,
        key="monthly_table",
    )
    design_temp = st.number_input(
        "99% heating design temperature (°F)",
        min_value=-60.0,
        max_value=60.0,
        value=settings.DEV_DEFAULT_DESIGN_TEMP_F,
        step=1.0,
    )

    existing = None
    new = None
    if mode == MODE_EXISTING:
        existing = render_existing_building_inputs(table)
    else:
        new = render_new_building_inputs()

    market = render_market_inputs()

    return AuditInputs(
        mode=mode,
        historical_hdd=[float(v) for v in table["Normal HDD"]],
        design_temp_f=design_temp,
        market=market,
        existing=existing,
        new=new,
    )
