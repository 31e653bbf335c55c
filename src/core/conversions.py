# src/core/conversions.py
"""
Unit conversions for the heat-loss and hashrate heating calculations.

Every function here is a single multiply or divide. The only error path is
the efficiency guard: combustion efficiencies (AFUE) must lie in (0, 1],
heat-pump COP only has to be positive.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, List

from src.core.errors import InvalidEfficiencyError


class FuelType(str, Enum):
    THERMS = "therms"
    KWH = "kwh"
    PROPANE_GALLONS = "propane_gallons"
    OIL_GALLONS = "oil_gallons"
    CCF = "ccf"


# ---------------------------------------------------------
# Energy constants
# ---------------------------------------------------------

BTU_PER_THERM = 100_000
BTU_PER_KWH = 3_412
BTU_PER_GALLON_PROPANE = 91_500
BTU_PER_GALLON_OIL = 138_500
BTU_PER_CCF = 102_700  # hundred cubic feet of natural gas

KWH_PER_THERM = 29.3
KWH_PER_GALLON_PROPANE = 26.8
KWH_PER_GALLON_OIL = 40.6

SATS_PER_BTC = 100_000_000

# Non-leap calendar year
HOURS_PER_MONTH: List[int] = [744, 672, 744, 720, 744, 720, 744, 744, 720, 744, 720, 744]
DAYS_PER_MONTH: List[int] = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
HOURS_PER_DAY = 24

# Volumetric heat capacity of air, BTU/h per CFM per °F
AIR_HEAT_CAPACITY_FACTOR = 1.08

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
MONTH_ABBREV = [name[:3] for name in MONTH_NAMES]

_BTU_PER_UNIT: Dict[FuelType, float] = {
    FuelType.THERMS: BTU_PER_THERM,
    FuelType.KWH: BTU_PER_KWH,
    FuelType.PROPANE_GALLONS: BTU_PER_GALLON_PROPANE,
    FuelType.OIL_GALLONS: BTU_PER_GALLON_OIL,
    FuelType.CCF: BTU_PER_CCF,
}

_KWH_PER_UNIT: Dict[FuelType, float] = {
    FuelType.THERMS: KWH_PER_THERM,
    FuelType.KWH: 1.0,
    FuelType.PROPANE_GALLONS: KWH_PER_GALLON_PROPANE,
    FuelType.OIL_GALLONS: KWH_PER_GALLON_OIL,
    FuelType.CCF: BTU_PER_CCF / BTU_PER_KWH,
}


def kwh_per_unit(fuel_type: FuelType | str) -> float:
    return _KWH_PER_UNIT[FuelType(fuel_type)]


# ---------------------------------------------------------
# Energy
# ---------------------------------------------------------


def fuel_to_btu(quantity: float, fuel_type: FuelType | str) -> float:
    return quantity * _BTU_PER_UNIT[FuelType(fuel_type)]


def fuel_to_kwh(quantity: float, fuel_type: FuelType | str) -> float:
    return quantity * _KWH_PER_UNIT[FuelType(fuel_type)]


def btu_to_kwh(btu: float) -> float:
    return btu / BTU_PER_KWH


def kwh_to_btu(kwh: float) -> float:
    return kwh * BTU_PER_KWH


# ---------------------------------------------------------
# Power
# ---------------------------------------------------------


def btu_per_hour_to_kw(btu_per_hour: float) -> float:
    return btu_per_hour / BTU_PER_KWH


def kw_to_btu_per_hour(kw: float) -> float:
    return kw * BTU_PER_KWH


# ---------------------------------------------------------
# Heat-loss coefficient
# ---------------------------------------------------------


def hlc_rate_to_hdd(hlc_rate: float) -> float:
    """Rate form (per hour) × 24 h/day = degree-day form."""
    return hlc_rate * HOURS_PER_DAY


def hlc_hdd_to_rate(hlc_hdd: float) -> float:
    """Degree-day form ÷ 24 h/day = rate form (per hour)."""
    return hlc_hdd / HOURS_PER_DAY


def hlc_btu_to_kw(hlc_btu_per_hour_per_f: float) -> float:
    return hlc_btu_per_hour_per_f / BTU_PER_KWH


def hlc_kw_to_btu(hlc_kw_per_f: float) -> float:
    return hlc_kw_per_f * BTU_PER_KWH


# ---------------------------------------------------------
# Temperature
# ---------------------------------------------------------


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


# ---------------------------------------------------------
# Bitcoin
# ---------------------------------------------------------


def sats_to_btc(sats: float) -> float:
    return sats / SATS_PER_BTC


def btc_to_sats(btc: float) -> float:
    return btc * SATS_PER_BTC


# ---------------------------------------------------------
# Efficiency-adjusted fuel cost
# ---------------------------------------------------------


def validate_efficiency(afue: float) -> float:
    """Return afue unchanged if it is a valid combustion efficiency."""
    if not 0.0 < afue <= 1.0:
        raise InvalidEfficiencyError(f"AFUE must be between 0 and 1, got {afue}")
    return afue


def validate_cop(cop: float) -> float:
    """Heat-pump COP may exceed 1 but must be positive."""
    if cop <= 0.0:
        raise InvalidEfficiencyError(f"COP must be greater than 0, got {cop}")
    return cop


def fuel_cost_to_kwh_cost(
    fuel_price: float,
    fuel_type: FuelType | str,
    afue: float = 1.0,
) -> float:
    """
    Convert a fuel price per unit into the cost per kWh of heat delivered.

    - fuel_price: $/unit (therm, gallon, CCF or kWh)
    - afue: combustion efficiency in (0, 1]; lower efficiency raises the
      cost of each delivered kWh
    """
    validate_efficiency(afue)
    cost_per_kwh_energy = fuel_price / kwh_per_unit(fuel_type)
    return cost_per_kwh_energy / afue


def electric_heat_cost_per_kwh(electricity_rate: float, cop: float = 1.0) -> float:
    """Cost per kWh of heat from electric resistance (cop=1) or a heat pump."""
    validate_cop(cop)
    return electricity_rate / cop
