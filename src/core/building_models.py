# src/core/building_models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from src.core.conversions import (
    FuelType,
    HOURS_PER_MONTH,
    hlc_btu_to_kw,
    hlc_hdd_to_rate,
    hlc_kw_to_btu,
    hlc_rate_to_hdd,
)
from src.core.errors import InvalidProfileLengthError


class FoundationType(str, Enum):
    SLAB_ON_GRADE = "slab_on_grade"
    BASEMENT = "basement"
    CRAWLSPACE = "crawlspace"
    NONE = "none"


class BuildingEra(str, Enum):
    PRE_1980 = "pre_1980"
    ERA_1980_2000 = "1980_2000"
    ERA_2000_2010 = "2000_2010"
    ERA_2010_2020 = "2010_2020"
    POST_2020 = "post_2020"


class WindowType(str, Enum):
    PRE_2000_SINGLE = "pre_2000_single"
    DOUBLE_2000 = "2000_double"
    LOW_E_2010 = "2010_low_e"
    POST_2020_TRIPLE = "post_2020_triple"


class ACHTightness(str, Enum):
    NEW_TIGHT = "new_tight"
    NEW_STANDARD = "new_standard"
    RETROFIT_TIGHT = "retrofit_tight"
    STANDARD_EXISTING = "standard_existing"
    LEAKY_OLD = "leaky_old"


class CalibrationMethod(str, Enum):
    MEDIAN = "median"
    MEAN = "mean"


class ExclusionReason(str, Enum):
    SHOULDER_MONTH = "shoulder_month"
    OUTLIER = "outlier"


# ---------------------------------------------------------
# Utility bills (existing buildings)
# ---------------------------------------------------------


@dataclass(frozen=True)
class FuelRecord:
    """One month of utility consumption joined with that month's HDD."""

    month: int  # 1-12
    fuel_quantity: float
    fuel_type: FuelType
    total_cost: float
    hdd_reference: float

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be 1-12, got {self.month}")
        if self.fuel_quantity < 0:
            raise ValueError("fuel_quantity must be >= 0")
        if self.total_cost < 0:
            raise ValueError("total_cost must be >= 0")
        if self.hdd_reference < 0:
            raise ValueError("hdd_reference must be >= 0")
        object.__setattr__(self, "fuel_type", FuelType(self.fuel_type))


@dataclass(frozen=True)
class HeatLossCoefficient:
    """
    Building heat-loss coefficient.

    Stored once in energy-per-degree-day form (kWh/°F-day); the power form
    (kW/°F) and the HVAC form (BTU/h/°F) are derived on access.
    """

    kwh_per_f_day: float

    @property
    def kw_per_f(self) -> float:
        return hlc_hdd_to_rate(self.kwh_per_f_day)

    @property
    def btu_per_hr_f(self) -> float:
        return hlc_kw_to_btu(self.kw_per_f)

    @classmethod
    def from_kw_per_f(cls, kw_per_f: float) -> "HeatLossCoefficient":
        return cls(kwh_per_f_day=hlc_rate_to_hdd(kw_per_f))

    @classmethod
    def from_btu_per_hr_f(cls, btu_per_hr_f: float) -> "HeatLossCoefficient":
        return cls.from_kw_per_f(hlc_btu_to_kw(btu_per_hr_f))


@dataclass(frozen=True)
class MonthlyHLC:
    """
    Per-month calibration outcome: either a valid HLC value or an exclusion.

    `candidate` keeps the computed value for excluded months (None when the
    month's HDD was too small to divide by) so reports can still show it.
    """

    month_index: int  # 0-11
    candidate: Optional[float]
    exclusion: Optional[ExclusionReason] = None

    @classmethod
    def valid(cls, month_index: int, value: float) -> "MonthlyHLC":
        return cls(month_index=month_index, candidate=value)

    @classmethod
    def excluded(
        cls,
        month_index: int,
        reason: ExclusionReason,
        candidate: Optional[float] = None,
    ) -> "MonthlyHLC":
        return cls(month_index=month_index, candidate=candidate, exclusion=reason)

    @property
    def is_valid(self) -> bool:
        return self.exclusion is None

    @property
    def value(self) -> Optional[float]:
        return self.candidate if self.is_valid else None


@dataclass(frozen=True)
class HLCCalibrationResult:
    hlc: HeatLossCoefficient
    months: Tuple[MonthlyHLC, ...]
    excluded_months: Tuple[int, ...]  # sorted, 0-based
    method: CalibrationMethod
    annual_heat_kwh: float
    outlier_bounds: Optional[Tuple[float, float]] = None

    @property
    def hlc_hdd(self) -> float:
        return self.hlc.kwh_per_f_day

    @property
    def hlc_rate(self) -> float:
        return self.hlc.kw_per_f

    @property
    def hlc_btu(self) -> float:
        return self.hlc.btu_per_hr_f

    @property
    def monthly_hlc_values(self) -> List[Optional[float]]:
        return [m.value for m in self.months]

    def months_excluded_for(self, reason: ExclusionReason) -> List[int]:
        return [m.month_index for m in self.months if m.exclusion == reason]


# ---------------------------------------------------------
# Building envelope (new buildings)
# ---------------------------------------------------------


@dataclass(frozen=True)
class EnvelopeComponent:
    area: float  # ft²
    r_value: float  # h·ft²·°F/BTU

    def __post_init__(self) -> None:
        if self.area <= 0:
            raise ValueError(f"component area must be > 0, got {self.area}")
        if self.r_value <= 0:
            raise ValueError(f"component R-value must be > 0, got {self.r_value}")

    @property
    def ua(self) -> float:
        """Conductance in BTU/h/°F."""
        return self.area / self.r_value


@dataclass(frozen=True)
class BuildingEnvelope:
    foundation_type: FoundationType
    conditioned_volume: float  # ft³
    ach: float  # air changes per hour
    walls: Optional[EnvelopeComponent] = None
    roof: Optional[EnvelopeComponent] = None
    windows: Optional[EnvelopeComponent] = None
    doors: Optional[EnvelopeComponent] = None
    above_grade_floor: Optional[EnvelopeComponent] = None
    basement_walls: Optional[EnvelopeComponent] = None
    basement_floor: Optional[EnvelopeComponent] = None
    slab_perimeter: float = 0.0  # linear ft
    slab_f_factor: float = 0.0  # BTU/h/ft/°F

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "foundation_type", FoundationType(self.foundation_type)
        )
        if self.conditioned_volume < 0:
            raise ValueError("conditioned_volume must be >= 0")
        if self.ach <= 0:
            raise ValueError(f"ach must be > 0, got {self.ach}")
        if self.slab_perimeter < 0 or self.slab_f_factor < 0:
            raise ValueError("slab perimeter and F-factor must be >= 0")


@dataclass(frozen=True)
class EnvelopeOverrides:
    """Per-field overrides for the envelope builder's lookup-table defaults."""

    wall_r_value: Optional[float] = None
    roof_r_value: Optional[float] = None
    window_r_value: Optional[float] = None
    ach: Optional[float] = None
    slab_f_factor: Optional[float] = None
    slab_perimeter: Optional[float] = None


@dataclass(frozen=True)
class HLCBreakdown:
    hlc_conductive: float  # BTU/h/°F
    hlc_infiltration: float
    hlc_slab: float
    hlc_basement: float
    hlc_total: float
    pct_conductive: float
    pct_infiltration: float
    pct_slab: float
    pct_basement: float
    conductive_details: Dict[str, float] = field(default_factory=dict)
    warnings: Tuple[str, ...] = ()

    @property
    def hlc(self) -> HeatLossCoefficient:
        return HeatLossCoefficient.from_btu_per_hr_f(self.hlc_total)


# ---------------------------------------------------------
# Heat-load profile
# ---------------------------------------------------------


@dataclass(frozen=True)
class HeatLoadProfile:
    """Twelve monthly heat-energy values (kWh), January first."""

    monthly_kwh: Tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.monthly_kwh) != 12:
            raise InvalidProfileLengthError(
                f"Heat-load profile needs 12 monthly values, got {len(self.monthly_kwh)}"
            )

    @property
    def average_power_kw(self) -> List[float]:
        return [kwh / HOURS_PER_MONTH[i] for i, kwh in enumerate(self.monthly_kwh)]

    @property
    def annual_kwh(self) -> float:
        return sum(self.monthly_kwh)

    @property
    def coldest_month_index(self) -> int:
        # First occurrence wins on ties
        return max(range(len(self.monthly_kwh)), key=lambda i: self.monthly_kwh[i])

    @property
    def coldest_month_kwh(self) -> float:
        return self.monthly_kwh[self.coldest_month_index]

    @property
    def peak_average_power_kw(self) -> float:
        return max(self.average_power_kw)
