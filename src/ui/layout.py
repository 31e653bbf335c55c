# src/ui/layout.py
from __future__ import annotations

import logging

import streamlit as st

from src.config import settings
from src.core.audit_engine import (
    AuditResult,
    MarketInputs,
    SizingScenario,
    run_existing_building_audit,
    run_new_building_audit,
)
from src.core.hashrate import (
    BTCMetrics,
    calculate_cope,
    network_hashrate_th_from_difficulty,
)
from src.core.miner_models import EquipmentModel, SizingMethod
from src.core.new_building import validate_hlc_per_sqft
from src.core.reporting import (
    breakdown_to_dataframe,
    calibration_to_dataframe,
    freeze_frame_to_dataframe,
    sizing_comparison_table,
    sizing_profile_to_dataframe,
)
from src.ui.audit_inputs import AuditInputs, render_audit_inputs

logger = logging.getLogger(__name__)


@st.cache_data(ttl=settings.AUDIT_CACHE_TTL_S)
def run_audit(inputs: AuditInputs) -> AuditResult:
    """Run the audit for the page inputs. Typed calculation errors propagate."""
    if inputs.existing is not None:
        return run_existing_building_audit(
            inputs.existing.records,
            inputs.historical_hdd,
            inputs.design_temp_f,
            inputs.market,
            afue=inputs.existing.afue,
            method=inputs.existing.method,
            exclude_outliers=inputs.existing.exclude_outliers,
        )
    return run_new_building_audit(
        inputs.new.envelope,
        inputs.historical_hdd,
        inputs.design_temp_f,
        inputs.market,
    )


def _fmt_optional(value: float | None, fmt: str, missing: str = "—") -> str:
    return missing if value is None else fmt.format(value)


def render_hlc_summary(result: AuditResult, inputs: AuditInputs) -> None:
    st.markdown("### Heat-loss coefficient")
    col1, col2, col3 = st.columns(3)
    col1.metric("HLC (kWh/°F-day)", f"{result.hlc.kwh_per_f_day:.3f}")
    col2.metric("HLC (BTU/h/°F)", f"{result.hlc.btu_per_hr_f:,.0f}")
    col3.metric("Annual heat load", f"{result.profile.annual_kwh:,.0f} kWh")

    if result.calibration is not None:
        st.dataframe(calibration_to_dataframe(result.calibration), hide_index=True)
        if result.calibration.excluded_months:
            st.caption(
                f"{len(result.calibration.excluded_months)} month(s) excluded "
                "from calibration."
            )

    if result.breakdown is not None:
        per_sqft, band = validate_hlc_per_sqft(
            result.breakdown.hlc_total, inputs.new.floor_area_sqft
        )
        st.caption(f"{per_sqft:.3f} BTU/h/°F per sq ft ({band.replace('_', ' ')})")
        st.dataframe(breakdown_to_dataframe(result.breakdown), hide_index=True)
        for message in result.breakdown.warnings:
            st.warning(message)


def render_cope(model: EquipmentModel, market: MarketInputs) -> None:
    """COPe of one unit at the snapshot BTC price and default difficulty."""
    metrics = BTCMetrics(
        btc_price_usd=market.btc_price_usd,
        network_hashrate_th=network_hashrate_th_from_difficulty(
            settings.DEFAULT_NETWORK_DIFFICULTY
        ),
    )
    cope = calculate_cope(market.electricity_rate_usd_per_kwh, model, metrics)

    col1, col2, col3 = st.columns(3)
    col1.metric(
        "Economic COP",
        _fmt_optional(cope.cope, "{:.2f}", "Mining covers the bill"),
    )
    col2.metric("Bill covered by mining", f"{cope.revenue_ratio * 100:.0f}%")
    col3.metric("Break-even rate", f"${cope.breakeven_rate:.3f} / kWh")


def render_scenario(title: str, scenario: SizingScenario, market: MarketInputs) -> None:
    st.markdown(f"#### {title}")
    sizing = scenario.sizing
    if sizing.is_empty:
        st.info(
            f"No suitable equipment found for {sizing.required_power_kw:.1f} kW "
            "within the catalogue."
        )
        return

    col1, col2, col3 = st.columns(3)
    col1.metric("Equipment", f"{sizing.quantity} × {sizing.model.name}")
    col2.metric("Installed capacity", f"{sizing.total_capacity_kw:.1f} kW")
    col3.metric("Utilization", f"{sizing.capacity_utilization_pct:.0f}%")

    if scenario.shortfall_months:
        st.warning(
            "Demand exceeds installed capacity in "
            f"{len(scenario.shortfall_months)} month(s); backup heat required."
        )

    econ = scenario.economics
    if econ is not None:
        col4, col5, col6 = st.columns(3)
        col4.metric("Annual net profit", f"${econ.annual_net_profit_usd:,.0f}")
        col5.metric(
            "Net heating cost",
            f"${econ.effective_heating_cost_per_kwh:.3f} / kWh",
        )
        col6.metric(
            "Simple payback",
            _fmt_optional(econ.simple_payback_years, "{:.1f} years", "No payback"),
        )

    render_cope(sizing.model, market)

    st.dataframe(sizing_profile_to_dataframe(scenario.monthly_profile), hide_index=True)
    with st.expander("Monthly economics", expanded=False):
        st.dataframe(freeze_frame_to_dataframe(econ), hide_index=True)


def render_dashboard() -> None:
    st.title("Hashrate heating audit")
    st.caption(
        "Size Bitcoin-mining heaters for a building and price a year of "
        "operation at today's market."
    )

    inputs = render_audit_inputs()

    if not st.button("Run audit", type="primary"):
        return

    try:
        result = run_audit(inputs)
    except ValueError as exc:
        logger.warning("Audit failed: %s", exc)
        st.error(str(exc))
        return

    render_hlc_summary(result, inputs)

    st.markdown("### Sizing comparison")
    st.dataframe(sizing_comparison_table(result))

    tab_base, tab_extreme = st.tabs(["Baseload sizing", "Extreme sizing"])
    with tab_base:
        render_scenario(
            "Coldest-month average power",
            result.scenarios[SizingMethod.BASELOAD],
            inputs.market,
        )
    with tab_extreme:
        render_scenario(
            "Design-day peak power",
            result.scenarios[SizingMethod.EXTREME],
            inputs.market,
        )
