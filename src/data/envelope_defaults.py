# src/data/envelope_defaults.py
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from src.core.building_models import ACHTightness, BuildingEra, WindowType

# Read-only lookup tables used to synthesise an envelope from simplified
# inputs. Versioned separately from the heat-loss logic.

_ERAS = (
    BuildingEra.PRE_1980,
    BuildingEra.ERA_1980_2000,
    BuildingEra.ERA_2000_2010,
    BuildingEra.ERA_2010_2020,
    BuildingEra.POST_2020,
)


def _by_era(*values: float) -> Mapping[BuildingEra, float]:
    return MappingProxyType(dict(zip(_ERAS, values)))


# R-values (h·ft²·°F/BTU) by envelope component and construction era
R_VALUE_DEFAULTS: Mapping[str, Mapping[BuildingEra, float]] = MappingProxyType(
    {
        "walls": _by_era(5.0, 11.0, 13.0, 20.0, 25.0),
        "roof": _by_era(10.0, 19.0, 30.0, 38.0, 49.0),
        "floor": _by_era(0.0, 11.0, 19.0, 30.0, 30.0),
        "basement_walls": _by_era(0.0, 5.0, 10.0, 15.0, 20.0),
    }
)

# Window U-factors (BTU/h·ft²·°F), R = 1/U
WINDOW_U_FACTORS: Mapping[WindowType, float] = MappingProxyType(
    {
        WindowType.PRE_2000_SINGLE: 1.00,  # R-1
        WindowType.DOUBLE_2000: 0.50,  # R-2
        WindowType.LOW_E_2010: 0.30,  # R-3.3
        WindowType.POST_2020_TRIPLE: 0.20,  # R-5
    }
)

# Air changes per hour by construction tightness
ACH_DEFAULTS: Mapping[ACHTightness, float] = MappingProxyType(
    {
        ACHTightness.NEW_TIGHT: 0.35,  # post-2015, blower door tested
        ACHTightness.NEW_STANDARD: 0.50,  # post-2010
        ACHTightness.RETROFIT_TIGHT: 0.75,  # well-sealed retrofit
        ACHTightness.STANDARD_EXISTING: 1.25,
        ACHTightness.LEAKY_OLD: 2.50,  # pre-1980, no weatherization
    }
)

# Slab edge F-factors (BTU/h·ft·°F)
F_FACTOR_DEFAULTS: Mapping[str, float] = MappingProxyType(
    {
        "uninsulated": 1.35,
        "r5_vertical": 0.90,
        "r10_vertical": 0.69,
        "r10_horizontal": 0.73,
    }
)
