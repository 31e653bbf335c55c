# scripts/sample_audit.py
from __future__ import annotations

from typing import List

from src.config import settings
from src.core.audit_engine import AuditResult, MarketInputs, run_existing_building_audit
from src.core.building_models import FuelRecord
from src.core.conversions import FuelType, fuel_cost_to_kwh_cost
from src.core.miner_models import SizingMethod
from src.core.reporting import sizing_comparison_table


def build_sample_records() -> List[FuelRecord]:
    """
    Twelve months of natural-gas bills joined with their HDD.

    Just enough to exercise the full pipeline from the command line.
    """
    return [
        FuelRecord(
            month=i + 1,
            fuel_quantity=float(therms),
            fuel_type=FuelType.THERMS,
            total_cost=therms * settings.DEV_DEFAULT_GAS_PRICE_USD_PER_THERM,
            hdd_reference=float(hdd),
        )
        for i, (therms, hdd) in enumerate(
            zip(settings.DEV_DEFAULT_BILLS_THERMS, settings.DEV_DEFAULT_HDD)
        )
    ]


def main() -> None:
    market = MarketInputs(
        electricity_rate_usd_per_kwh=settings.DEV_DEFAULT_ELECTRICITY_RATE_USD_PER_KWH,
        fuel_cost_per_kwh=fuel_cost_to_kwh_cost(
            settings.DEV_DEFAULT_GAS_PRICE_USD_PER_THERM,
            FuelType.THERMS,
            settings.DEFAULT_AFUE,
        ),
    )

    result: AuditResult = run_existing_building_audit(
        build_sample_records(),
        historical_hdd=[float(v) for v in settings.DEV_DEFAULT_HDD],
        design_temp_f=settings.DEV_DEFAULT_DESIGN_TEMP_F,
        market=market,
    )

    print("=== Sample existing-building audit ===")
    print(f"HLC: {result.hlc.kwh_per_f_day:.3f} kWh/°F-day")
    print(f"Excluded months: {list(result.calibration.excluded_months)}")
    print(f"Annual heat load: {result.profile.annual_kwh:,.0f} kWh")

    for method in (SizingMethod.BASELOAD, SizingMethod.EXTREME):
        econ = result.scenarios[method].economics
        if econ is None:
            print(f"{method.value}: no suitable equipment")
            continue
        print(
            f"{method.value}: net profit ${econ.annual_net_profit_usd:,.0f}, "
            f"net heat cost ${econ.effective_heating_cost_per_kwh:.3f}/kWh"
        )

    print()
    print(sizing_comparison_table(result).to_string())


if __name__ == "__main__":
    main()
