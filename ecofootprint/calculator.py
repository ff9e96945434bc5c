# ecofootprint/calculator.py
from __future__ import annotations
import math
from typing import List, Optional

from . import factors
from .errors import InvalidWeight
from .schemas import (
    Factors,
    FootprintResult,
    FootprintValue,
    ProductInput,
    ProductRecord,
    ScaleTier,
    ScrapedBreakdown,
    Score,
    StructuredBreakdown,
    StructuredResult,
)
from .units import normalize

# (rating, upper bound in kg CO2e, color); None = unbounded
SCORE_LEVELS = [
    ("EXCELLENT", 5.0, "#4CAF50"),
    ("GOOD", 10.0, "#8BC34A"),
    ("FAIR", 15.0, "#FFC107"),
    ("POOR", None, "#F44336"),
]


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; grams round .5 upwards
    return int(math.floor(x + 0.5))


def _fmt(x: float) -> str:
    return f"{x:g}"


# ---- scraped product (grams) ------------------------------------------------
def calculate_scraped(record: ProductRecord) -> FootprintResult:
    weight = record.weight_kg
    assumptions: List[str] = []

    category, category_factor = factors.category_factor(record.category)
    manufacturing = weight * category_factor
    assumptions.append(f"Manufacturing: {_fmt(category_factor)}g/kg for {category}")

    material, material_factor = factors.material_factor(record.material)
    materials = weight * material_factor
    assumptions.append(f"Material: {_fmt(material_factor)}g/kg for {material}")

    mode, mode_factor = factors.shipping_factor(factors.shipping_mode(record.origin))
    distance = factors.shipping_distance(record.origin)
    transportation = weight * mode_factor * distance
    assumptions.append(
        f"{mode} shipping from {record.origin} ({_fmt(distance)}km at {_fmt(mode_factor)}g/kg/km)"
    )

    # parts are rounded on their own, so they may not add up to the total exactly
    return FootprintResult(
        product_name=record.name,
        carbon_footprint=round_half_up(manufacturing + materials + transportation),
        breakdown=ScrapedBreakdown(
            manufacturing=round_half_up(manufacturing),
            materials=round_half_up(materials),
            transportation=round_half_up(transportation),
        ),
        assumptions=assumptions,
    )


# ---- structured input (kg) --------------------------------------------------
def unique_materials(materials: Optional[List[str]]) -> List[str]:
    """Materials as a set, keeping first-seen order."""
    return list(dict.fromkeys(m for m in (materials or []) if isinstance(m, str)))


def score_of(total: float) -> Score:
    """Place ``total`` (kg CO2e) on the four-tier scale."""
    prev_max = 0.0
    rating, tier_max, color = SCORE_LEVELS[-1]
    for level in SCORE_LEVELS:
        if level[1] is None or total <= level[1]:
            rating, tier_max, color = level
            break
        prev_max = level[1]

    if tier_max is None:
        ratio = 0.0  # nothing to fill in an unbounded tier
    else:
        ratio = (total - prev_max) / (tier_max - prev_max)
    percentage = min(max(round_half_up(ratio * 100), 0), 100)

    return Score(
        rating=rating,
        color=color,
        percentage=percentage,
        scale=[ScaleTier(rating=r, threshold=m, color=c) for r, m, c in SCORE_LEVELS],
    )


def calculate_structured(data: ProductInput) -> StructuredResult:
    weight_kg = normalize(data.weight, data.unit)
    if weight_kg < 0:
        raise InvalidWeight("Weight must not be negative")

    _, base_factor = factors.product_type_factor(data.product_type)
    _, region_mult = factors.region_multiplier(data.manufacturer_region)
    _, transport = factors.transport_factor(data.manufacturer_region)
    _, energy_factor = factors.energy_mix_factor(data.manufacturer_region)

    materials_used = unique_materials(data.materials)
    material_impact = sum(factors.structured_material_factor(m) for m in materials_used)

    manufacturing = weight_kg * base_factor * region_mult
    materials_total = weight_kg * material_impact
    transportation = weight_kg * transport
    energy = manufacturing * energy_factor

    total = manufacturing + materials_total + transportation + energy

    return StructuredResult(
        carbon_footprint=FootprintValue(value=total, display=f"{total:.2f} kg CO₂e"),
        breakdown=StructuredBreakdown(
            manufacturing=round(manufacturing, 2),
            materials=round(materials_total, 2),
            transportation=round(transportation, 2),
            energy=round(energy, 2),
        ),
        factors=Factors(
            product_type=data.product_type,
            manufacturer_region=data.manufacturer_region,
            materials=materials_used,
            energy_mix=energy_factor,
        ),
        score=score_of(total),
    )
