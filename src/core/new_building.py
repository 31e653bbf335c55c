# src/core/new_building.py
"""
New-building thermal model: heat-loss coefficient from envelope geometry.

A Manual-J-lite sum of four terms, all in BTU/h/°F:
conductive (area / R per component), infiltration (volume × ACH × 1.08 / 60),
slab edge (perimeter × F-factor) and basement ground contact.
"""
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from src.config import settings
from src.core.building_models import (
    ACHTightness,
    BuildingEnvelope,
    BuildingEra,
    EnvelopeComponent,
    EnvelopeOverrides,
    FoundationType,
    HLCBreakdown,
    WindowType,
)
from src.core.conversions import AIR_HEAT_CAPACITY_FACTOR
from src.data.envelope_defaults import (
    ACH_DEFAULTS,
    F_FACTOR_DEFAULTS,
    R_VALUE_DEFAULTS,
    WINDOW_U_FACTORS,
)

logger = logging.getLogger(__name__)

# Display order of the conductive breakdown
_CONDUCTIVE_COMPONENTS = ("walls", "roof", "above_grade_floor", "windows", "doors")


# ---------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------


def estimate_r_value(component: str, era: BuildingEra | str) -> float:
    """Default R-value for walls / roof / floor / basement_walls by era."""
    return R_VALUE_DEFAULTS[component][BuildingEra(era)]


def estimate_window_r_value(window_type: WindowType | str) -> float:
    return 1.0 / WINDOW_U_FACTORS[WindowType(window_type)]


def estimate_ach(tightness: ACHTightness | str) -> float:
    return ACH_DEFAULTS[ACHTightness(tightness)]


def get_default_f_factor(insulation: str = settings.DEFAULT_SLAB_INSULATION) -> float:
    return F_FACTOR_DEFAULTS[insulation]


# ---------------------------------------------------------
# Heat-loss components
# ---------------------------------------------------------


def calculate_conductive_hlc(
    envelope: BuildingEnvelope,
) -> Tuple[float, Dict[str, float]]:
    """Sum of area / R over the above-grade components that are present."""
    details: Dict[str, float] = {}
    for name in _CONDUCTIVE_COMPONENTS:
        component: Optional[EnvelopeComponent] = getattr(envelope, name)
        if component is not None:
            details[name] = component.ua
    return sum(details.values()), details


def calculate_infiltration_hlc(volume: float, ach: float) -> float:
    # 1.08 BTU/h per CFM per °F; volume × ACH / 60 is the CFM
    return (volume * ach * AIR_HEAT_CAPACITY_FACTOR) / 60


def calculate_slab_hlc(perimeter: float, f_factor: float) -> float:
    return perimeter * f_factor


def calculate_basement_hlc(
    basement_walls: Optional[EnvelopeComponent] = None,
    basement_floor: Optional[EnvelopeComponent] = None,
) -> float:
    hlc_basement = 0.0
    if basement_walls is not None and basement_walls.r_value > 0:
        hlc_basement += basement_walls.area / basement_walls.r_value
    if basement_floor is not None and basement_floor.r_value > 0:
        hlc_basement += basement_floor.area / basement_floor.r_value
    return hlc_basement


def _pct(part: float, total: float) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def _pretty(component: str) -> str:
    return component.replace("_", " ").title()


def check_component_dominance(
    breakdown: HLCBreakdown,
    threshold_pct: float = settings.DOMINANT_LOSS_PCT,
) -> List[str]:
    """
    Advisory messages for any single loss pathway above threshold_pct of the
    total: each conductive component, infiltration, slab edge and basement.
    """
    warnings: List[str] = []
    if breakdown.hlc_total <= 0:
        return warnings

    if breakdown.pct_infiltration > threshold_pct:
        warnings.append(
            f"Infiltration accounts for {breakdown.pct_infiltration:.1f}% of heat "
            "loss. Consider air sealing improvements."
        )

    for component, hlc in breakdown.conductive_details.items():
        pct = _pct(hlc, breakdown.hlc_total)
        if pct > threshold_pct:
            warnings.append(
                f"{_pretty(component)} account for {pct:.1f}% of heat loss. "
                "Consider upgrade."
            )

    if breakdown.pct_slab > threshold_pct:
        warnings.append(
            f"Slab edge accounts for {breakdown.pct_slab:.1f}% of heat loss. "
            "Consider perimeter insulation."
        )
    if breakdown.pct_basement > threshold_pct:
        warnings.append(
            f"Basement accounts for {breakdown.pct_basement:.1f}% of heat loss. "
            "Consider insulating foundation walls."
        )
    return warnings


def calculate_total_hlc(envelope: BuildingEnvelope) -> HLCBreakdown:
    """Total HLC (BTU/h/°F) with each term's share and dominance warnings."""
    hlc_conductive, conductive_details = calculate_conductive_hlc(envelope)
    hlc_infiltration = calculate_infiltration_hlc(
        envelope.conditioned_volume, envelope.ach
    )

    hlc_slab = 0.0
    if envelope.foundation_type is FoundationType.SLAB_ON_GRADE:
        hlc_slab = calculate_slab_hlc(envelope.slab_perimeter, envelope.slab_f_factor)

    hlc_basement = 0.0
    if envelope.foundation_type in (FoundationType.BASEMENT, FoundationType.CRAWLSPACE):
        hlc_basement = calculate_basement_hlc(
            envelope.basement_walls, envelope.basement_floor
        )

    hlc_total = hlc_conductive + hlc_infiltration + hlc_slab + hlc_basement

    breakdown = HLCBreakdown(
        hlc_conductive=hlc_conductive,
        hlc_infiltration=hlc_infiltration,
        hlc_slab=hlc_slab,
        hlc_basement=hlc_basement,
        hlc_total=hlc_total,
        pct_conductive=_pct(hlc_conductive, hlc_total),
        pct_infiltration=_pct(hlc_infiltration, hlc_total),
        pct_slab=_pct(hlc_slab, hlc_total),
        pct_basement=_pct(hlc_basement, hlc_total),
        conductive_details=conductive_details,
    )

    warnings = check_component_dominance(breakdown)
    for message in warnings:
        logger.warning(message)

    return replace(breakdown, warnings=tuple(warnings))


# ---------------------------------------------------------
# Geometry estimates (square footprint)
# ---------------------------------------------------------


def estimate_wall_area(
    floor_area: float,
    wall_height: float = settings.DEFAULT_CEILING_HEIGHT_FT,
) -> float:
    return estimate_slab_perimeter(floor_area) * wall_height


def estimate_window_area(
    wall_area: float,
    ratio: float = settings.WINDOW_TO_WALL_RATIO,
) -> float:
    return wall_area * ratio


def estimate_door_area(num_doors: int = settings.DEFAULT_EXTERIOR_DOORS) -> float:
    return num_doors * settings.DOOR_AREA_SQFT


def estimate_volume(
    floor_area: float,
    ceiling_height: float = settings.DEFAULT_CEILING_HEIGHT_FT,
) -> float:
    return floor_area * ceiling_height


def estimate_slab_perimeter(floor_area: float) -> float:
    return math.sqrt(floor_area) * 4


def create_envelope_from_inputs(
    floor_area: float,
    ceiling_height: float,
    building_era: BuildingEra | str,
    window_type: WindowType | str,
    foundation_type: FoundationType | str,
    ach_tightness: ACHTightness | str,
    overrides: Optional[EnvelopeOverrides] = None,
) -> BuildingEnvelope:
    """
    Synthesise a full envelope from a handful of inputs.

    Walls come from a square footprint (perimeter 4·√area × ceiling height),
    15% of gross wall area is glazing, and two 20 ft² doors are subtracted.
    R-values, ACH and F-factor default from the lookup tables and can be
    overridden field by field.
    """
    overrides = overrides or EnvelopeOverrides()
    era = BuildingEra(building_era)
    foundation = FoundationType(foundation_type)

    wall_area = estimate_wall_area(floor_area, ceiling_height)
    window_area = estimate_window_area(wall_area)
    door_area = estimate_door_area()
    net_wall_area = wall_area - window_area - door_area

    wall_r = (
        overrides.wall_r_value
        if overrides.wall_r_value is not None
        else estimate_r_value("walls", era)
    )
    roof_r = (
        overrides.roof_r_value
        if overrides.roof_r_value is not None
        else estimate_r_value("roof", era)
    )
    window_r = (
        overrides.window_r_value
        if overrides.window_r_value is not None
        else estimate_window_r_value(window_type)
    )
    ach = overrides.ach if overrides.ach is not None else estimate_ach(ach_tightness)

    slab_perimeter = 0.0
    slab_f_factor = get_default_f_factor()
    basement_walls = None
    basement_floor = None
    above_grade_floor = None

    if foundation is FoundationType.SLAB_ON_GRADE:
        slab_perimeter = (
            overrides.slab_perimeter
            if overrides.slab_perimeter is not None
            else estimate_slab_perimeter(floor_area)
        )
        if overrides.slab_f_factor is not None:
            slab_f_factor = overrides.slab_f_factor
    elif foundation is FoundationType.BASEMENT:
        basement_walls = EnvelopeComponent(
            area=estimate_wall_area(floor_area, settings.BASEMENT_WALL_HEIGHT_FT),
            r_value=max(
                estimate_r_value("basement_walls", era),
                settings.MIN_BASEMENT_WALL_R_VALUE,
            ),
        )
        basement_floor = EnvelopeComponent(
            area=floor_area, r_value=settings.BASEMENT_FLOOR_R_VALUE
        )
    elif foundation is FoundationType.CRAWLSPACE:
        above_grade_floor = EnvelopeComponent(
            area=floor_area,
            r_value=max(
                estimate_r_value("floor", era),
                settings.MIN_CRAWLSPACE_FLOOR_R_VALUE,
            ),
        )

    return BuildingEnvelope(
        foundation_type=foundation,
        conditioned_volume=estimate_volume(floor_area, ceiling_height),
        ach=ach,
        walls=EnvelopeComponent(area=net_wall_area, r_value=wall_r),
        roof=EnvelopeComponent(area=floor_area, r_value=roof_r),
        windows=EnvelopeComponent(area=window_area, r_value=window_r),
        doors=EnvelopeComponent(area=door_area, r_value=settings.DOOR_R_VALUE),
        above_grade_floor=above_grade_floor,
        basement_walls=basement_walls,
        basement_floor=basement_floor,
        slab_perimeter=slab_perimeter,
        slab_f_factor=slab_f_factor,
    )


# ---------------------------------------------------------
# Benchmarks
# ---------------------------------------------------------


def validate_hlc_per_sqft(hlc_total: float, floor_area: float) -> Tuple[float, str]:
    """Return (HLC per sq ft, quality band) for a BTU/h/°F total."""
    hlc_per_sqft = hlc_total / floor_area if floor_area > 0 else 0.0
    for upper, label in settings.HLC_PER_SQFT_BANDS:
        if hlc_per_sqft < upper:
            return hlc_per_sqft, label
    return hlc_per_sqft, settings.HLC_PER_SQFT_WORST_BAND
