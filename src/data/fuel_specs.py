# src/data/fuel_specs.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from src.core.conversions import FuelType


class HeatingFuel(str, Enum):
    """The incumbent heating system a mining heater would displace."""

    NATURAL_GAS = "natural_gas"
    PROPANE = "propane"
    HEATING_OIL = "heating_oil"
    ELECTRIC_RESISTANCE = "electric_resistance"
    HEAT_PUMP = "heat_pump"


@dataclass(frozen=True)
class FuelSpec:
    label: str
    unit: str
    btu_per_unit: float
    # AFUE for combustion, COP for heat pumps (can exceed 1)
    typical_efficiency: float


FUEL_SPECS: Mapping[HeatingFuel, FuelSpec] = MappingProxyType(
    {
        HeatingFuel.NATURAL_GAS: FuelSpec("Natural Gas", "therm", 100000, 0.92),
        HeatingFuel.PROPANE: FuelSpec("Propane", "gallon", 91500, 0.90),
        HeatingFuel.HEATING_OIL: FuelSpec("Heating Oil", "gallon", 138500, 0.85),
        HeatingFuel.ELECTRIC_RESISTANCE: FuelSpec("Electric Resistance", "kWh", 3412, 1.0),
        HeatingFuel.HEAT_PUMP: FuelSpec("Heat Pump", "kWh", 3412, 3.0),
    }
)

# Bill units as shown in the input form
FUEL_TYPE_LABELS: Mapping[FuelType, str] = MappingProxyType(
    {
        FuelType.THERMS: "Natural gas (therms)",
        FuelType.CCF: "Natural gas (CCF)",
        FuelType.PROPANE_GALLONS: "Propane (gallons)",
        FuelType.OIL_GALLONS: "Heating oil (gallons)",
        FuelType.KWH: "Electricity (kWh)",
    }
)

# Starting AFUE suggested for each bill unit
TYPICAL_AFUE: Mapping[FuelType, float] = MappingProxyType(
    {
        FuelType.THERMS: 0.85,
        FuelType.CCF: 0.85,
        FuelType.PROPANE_GALLONS: 0.85,
        FuelType.OIL_GALLONS: 0.80,
        FuelType.KWH: 1.0,
    }
)
