# src/core/reporting.py
from __future__ import annotations

from typing import List, Optional

import pandas as pd

from src.core.audit_engine import AuditResult
from src.core.building_models import HLCBreakdown, HLCCalibrationResult
from src.core.conversions import MONTH_ABBREV
from src.core.economics_models import FreezeFrameResult
from src.core.miner_models import MonthlySizingProfile, SizingMethod


def calibration_to_dataframe(result: HLCCalibrationResult) -> pd.DataFrame:
    """One row per month: computed HLC, whether it counted, and why not."""
    return pd.DataFrame(
        [
            {
                "Month": MONTH_ABBREV[m.month_index],
                "HLC (kWh/°F-day)": m.candidate,
                "Used": m.is_valid,
                "Excluded because": m.exclusion.value if m.exclusion else "",
            }
            for m in result.months
        ]
    )


def breakdown_to_dataframe(breakdown: HLCBreakdown) -> pd.DataFrame:
    rows = [
        {"Component": name.replace("_", " ").title(), "HLC (BTU/h/°F)": ua}
        for name, ua in breakdown.conductive_details.items()
    ]
    rows += [
        {"Component": "Infiltration", "HLC (BTU/h/°F)": breakdown.hlc_infiltration},
        {"Component": "Slab edge", "HLC (BTU/h/°F)": breakdown.hlc_slab},
        {"Component": "Basement", "HLC (BTU/h/°F)": breakdown.hlc_basement},
    ]
    df = pd.DataFrame(rows)
    df = df[df["HLC (BTU/h/°F)"] > 0].reset_index(drop=True)
    total = breakdown.hlc_total
    df["Share (%)"] = df["HLC (BTU/h/°F)"] / total * 100 if total > 0 else 0.0
    return df


def sizing_profile_to_dataframe(profile: List[MonthlySizingProfile]) -> pd.DataFrame:
    if not profile:
        return pd.DataFrame()
    return pd.DataFrame(
        [
            {
                "Month": MONTH_ABBREV[p.month - 1],
                "Heat load (kWh)": p.heat_load_kwh,
                "Average power (kW)": p.average_power_kw,
                "Duty cycle (%)": p.duty_cycle * 100,
                "Effective hashrate (TH/s)": p.effective_hashrate_th,
            }
            for p in profile
        ]
    )


def freeze_frame_to_dataframe(result: Optional[FreezeFrameResult]) -> pd.DataFrame:
    if result is None or not result.months:
        return pd.DataFrame()
    return pd.DataFrame(
        [
            {
                "Month": MONTH_ABBREV[m.month - 1],
                "Heat (kWh)": m.heat_delivered_kwh,
                "BTC revenue (USD)": m.btc_revenue_usd,
                "Heating value (USD)": m.heating_value_usd,
                "Electricity (USD)": m.electricity_cost_usd,
                "Pool fee (USD)": m.pool_fee_usd,
                "Net profit (USD)": m.net_profit_usd,
            }
            for m in result.months
        ]
    )


def sizing_comparison_table(audit: AuditResult) -> pd.DataFrame:
    """Baseload vs extreme sizing, one column per method."""
    columns = {}
    for method in (SizingMethod.BASELOAD, SizingMethod.EXTREME):
        scenario = audit.scenarios[method]
        sizing = scenario.sizing
        econ = scenario.economics
        columns[method.value.title()] = {
            "Required power (kW)": sizing.required_power_kw,
            "Equipment": sizing.model.name if sizing.model else "No suitable equipment",
            "Units": sizing.quantity,
            "Installed capacity (kW)": sizing.total_capacity_kw,
            "Hashrate (TH/s)": sizing.total_hashrate_th,
            "Equipment cost (USD)": sizing.total_cost_usd,
            "Capacity utilization (%)": sizing.capacity_utilization_pct,
            "Shortfall months": len(scenario.shortfall_months),
            "Annual net profit (USD)": econ.annual_net_profit_usd if econ else None,
            "Net heating cost (USD/kWh)": (
                econ.effective_heating_cost_per_kwh if econ else None
            ),
            "Simple payback (years)": econ.simple_payback_years if econ else None,
        }
    return pd.DataFrame(columns)
