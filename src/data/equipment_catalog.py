# src/data/equipment_catalog.py
from __future__ import annotations

from typing import Dict, List

from src.config import settings
from src.core.miner_models import EquipmentModel, HeatingApplication

_FORCED_AIR = HeatingApplication.FORCED_AIR
_HYDRONIC = HeatingApplication.HYDRONIC
_RADIANT = HeatingApplication.RADIANT

# Production catalogue: heating-grade units sized for whole-building loads.
HEATING_EQUIPMENT: Dict[str, EquipmentModel] = {
    "Heat Core HS05 (5.0 kW)": EquipmentModel(
        name="Heat Core HS05",
        max_power_kw=5.0,
        hashrate_th=228.0,
        cost_usd=4999.0,
        heating_applications=frozenset({_FORCED_AIR, _HYDRONIC}),
    ),
    "Heat Core HS03 (3.0 kW)": EquipmentModel(
        name="Heat Core HS03",
        max_power_kw=3.0,
        hashrate_th=136.0,
        cost_usd=2999.0,
        heating_applications=frozenset({_FORCED_AIR, _HYDRONIC}),
    ),
    "Antminer S21 Hydro (5.3 kW)": EquipmentModel(
        name="Antminer S21 Hydro",
        max_power_kw=5.3,
        hashrate_th=335.0,
        cost_usd=5500.0,
        heating_applications=frozenset({_HYDRONIC}),
    ),
    "Generic 3kW Unit (3.0 kW)": EquipmentModel(
        name="Generic 3kW Unit",
        max_power_kw=3.0,
        hashrate_th=150.0,
        cost_usd=3000.0,
        heating_applications=frozenset({_FORCED_AIR, _HYDRONIC, _RADIANT}),
    ),
}

# Small space-heater presets used by the hashrate heating calculator.
# Prices are not published consistently, so cost is left at zero.
MINER_PRESETS: Dict[str, EquipmentModel] = {
    "Heatbit Trio": EquipmentModel(
        name="Heatbit Trio",
        max_power_kw=0.4,
        hashrate_th=10.0,
        heating_applications=frozenset({_FORCED_AIR}),
    ),
    "Avalon Mini 3": EquipmentModel(
        name="Avalon Mini 3",
        max_power_kw=0.85,
        hashrate_th=40.0,
        heating_applications=frozenset({_FORCED_AIR}),
    ),
    "Avalon Q": EquipmentModel(
        name="Avalon Q",
        max_power_kw=1.7,
        hashrate_th=90.0,
        heating_applications=frozenset({_FORCED_AIR}),
    ),
    "Heat Core HS05": HEATING_EQUIPMENT["Heat Core HS05 (5.0 kW)"],
}


def default_catalog() -> List[EquipmentModel]:
    """Catalogue used by the audit; dev builds can switch to the presets."""
    if settings.DEV_EQUIPMENT_SET == "presets":
        return list(MINER_PRESETS.values())
    return list(HEATING_EQUIPMENT.values())
