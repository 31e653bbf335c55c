# src/core/miner_models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class HeatingApplication(str, Enum):
    FORCED_AIR = "forced_air"
    HYDRONIC = "hydronic"
    RADIANT = "radiant"


class SizingMethod(str, Enum):
    BASELOAD = "baseload"  # average power in the coldest month
    EXTREME = "extreme"  # HLC × (indoor target − 99% design temp)


class OptimizationCriterion(str, Enum):
    COST_PER_TH = "cost_per_th"
    EFFICIENCY = "efficiency"
    POWER_MATCH = "power_match"


@dataclass(frozen=True)
class EquipmentModel:
    """
    A mining-heater SKU.

    Kept in core models so the catalogue (src/data), the sizing optimiser
    and the hashrate metrics all share the same schema.
    """

    name: str
    max_power_kw: float
    hashrate_th: float  # TH/s at max power
    cost_usd: float = 0.0
    heating_applications: FrozenSet[HeatingApplication] = field(
        default_factory=frozenset
    )

    def __post_init__(self) -> None:
        if self.max_power_kw <= 0:
            raise ValueError(f"{self.name}: max_power_kw must be > 0")
        if self.hashrate_th <= 0:
            raise ValueError(f"{self.name}: hashrate_th must be > 0")
        if self.cost_usd < 0:
            raise ValueError(f"{self.name}: cost_usd must be >= 0")
        object.__setattr__(
            self,
            "heating_applications",
            frozenset(HeatingApplication(a) for a in self.heating_applications),
        )

    @property
    def efficiency_w_per_th(self) -> float:
        """Watts per TH/s, numerically equal to J/TH."""
        return (self.max_power_kw * 1000) / self.hashrate_th

    @property
    def cost_per_th(self) -> float:
        return self.cost_usd / self.hashrate_th


@dataclass(frozen=True)
class SizingResult:
    sizing_method: SizingMethod
    required_power_kw: float
    model: Optional[EquipmentModel]
    quantity: int
    total_capacity_kw: float
    total_hashrate_th: float
    total_cost_usd: float
    capacity_utilization_pct: float  # required / installed × 100

    @property
    def is_empty(self) -> bool:
        """True when no equipment was selected (no match, or nothing required)."""
        return self.model is None or self.quantity == 0


@dataclass(frozen=True)
class MonthlySizingProfile:
    month: int  # 1-12
    heat_load_kwh: float
    average_power_kw: float
    duty_cycle: float  # 0-1, clamped
    effective_hashrate_th: float
