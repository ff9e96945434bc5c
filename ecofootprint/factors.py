# ecofootprint/factors.py — static emission factor tables
"""
Emission factors used by both calculators.

Scraped products are scored in grams CO2e (per kg of product, per kg·km for
shipping). Structured form input is scored in kg CO2e per kg of product.
Every lookup is total: unknown or missing keys resolve to the documented
default and the resolved key is returned alongside the factor, so callers
can report what was actually used.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

# ---- scraped products (g CO2e) ----------------------------------------------
CATEGORY_FACTORS: Mapping[str, float] = MappingProxyType({
    "electronics": 85,
    "clothing": 15,
    "furniture": 30,
    "appliances": 120,
    "general": 50,
})
DEFAULT_CATEGORY = "general"

MATERIAL_FACTORS: Mapping[str, float] = MappingProxyType({
    "plastic": 6,
    "cotton": 4,
    "metal": 8,
    "glass": 10,
    "composite": 15,
})
DEFAULT_MATERIAL = "composite"

# per kg·km
SHIPPING_FACTORS: Mapping[str, float] = MappingProxyType({
    "air": 0.5,
    "sea": 0.01,
    "road": 0.2,
})
DEFAULT_SHIPPING_MODE = "air"
SEA_FREIGHT_ORIGINS = frozenset({"CN", "IN", "VN", "ID", "MY"})

# km from common manufacturing countries to US/EU
SHIPPING_DISTANCES_KM: Mapping[str, float] = MappingProxyType({
    "CN": 8000,
    "IN": 7000,
    "DE": 500,
    "US": 1500,
    "VN": 9000,
})
DEFAULT_SHIPPING_DISTANCE_KM = 5000

# ---- structured input (kg CO2e) ---------------------------------------------
PRODUCT_TYPE_FACTORS: Mapping[str, float] = MappingProxyType({
    "electronics": 12.5,
    "clothing": 3.2,
    "furniture": 7.8,
    "packaging": 2.1,
    "general": 5.0,
})
DEFAULT_PRODUCT_TYPE = "general"

REGION_MANUFACTURING: Mapping[str, float] = MappingProxyType({
    "north-america": 1.1,
    "europe": 0.9,
    "asia": 1.3,
    "global": 1.0,
})
REGION_TRANSPORT: Mapping[str, float] = MappingProxyType({
    "north-america": 0.8,
    "europe": 0.6,
    "asia": 1.2,
    "global": 1.0,
})
ENERGY_MIX: Mapping[str, float] = MappingProxyType({
    "north-america": 0.45,
    "europe": 0.35,
    "asia": 0.55,
    "global": 0.42,
})
DEFAULT_REGION = "global"

STRUCTURED_MATERIAL_FACTORS: Mapping[str, float] = MappingProxyType({
    "plastic": 3.5,
    "aluminum": 8.2,
    "steel": 2.9,
    "cotton": 2.1,
    "wood": 0.8,
    "glass": 0.7,
    "rubber": 2.3,
})


def _key(value: Optional[str]) -> str:
    return value.strip().lower() if isinstance(value, str) else ""


def _lookup(table: Mapping[str, float], value: Optional[str], default_key: str) -> Tuple[str, float]:
    k = _key(value)
    if k in table:
        return k, table[k]
    return default_key, table[default_key]


# --- scraped lookups ---------------------------------------------------------
def category_factor(category: Optional[str]) -> Tuple[str, float]:
    return _lookup(CATEGORY_FACTORS, category, DEFAULT_CATEGORY)


def material_factor(material: Optional[str]) -> Tuple[str, float]:
    return _lookup(MATERIAL_FACTORS, material, DEFAULT_MATERIAL)


def _origin(origin: Optional[str]) -> str:
    return origin.strip().upper() if isinstance(origin, str) else ""


def shipping_mode(origin: Optional[str]) -> str:
    return "sea" if _origin(origin) in SEA_FREIGHT_ORIGINS else DEFAULT_SHIPPING_MODE


def shipping_factor(mode: Optional[str]) -> Tuple[str, float]:
    return _lookup(SHIPPING_FACTORS, mode, DEFAULT_SHIPPING_MODE)


def shipping_distance(origin: Optional[str]) -> float:
    return SHIPPING_DISTANCES_KM.get(_origin(origin), DEFAULT_SHIPPING_DISTANCE_KM)


# --- structured lookups ------------------------------------------------------
def product_type_factor(product_type: Optional[str]) -> Tuple[str, float]:
    return _lookup(PRODUCT_TYPE_FACTORS, product_type, DEFAULT_PRODUCT_TYPE)


def region_multiplier(region: Optional[str]) -> Tuple[str, float]:
    return _lookup(REGION_MANUFACTURING, region, DEFAULT_REGION)


def transport_factor(region: Optional[str]) -> Tuple[str, float]:
    return _lookup(REGION_TRANSPORT, region, DEFAULT_REGION)


def energy_mix_factor(region: Optional[str]) -> Tuple[str, float]:
    return _lookup(ENERGY_MIX, region, DEFAULT_REGION)


def structured_material_factor(material: Optional[str]) -> float:
    # unknown materials add nothing
    return STRUCTURED_MATERIAL_FACTORS.get(_key(material), 0.0)


def as_dict() -> dict:
    """Plain-dict snapshot of every table (debug endpoint)."""
    return {
        "scraped": {
            "categories": dict(CATEGORY_FACTORS),
            "materials": dict(MATERIAL_FACTORS),
            "shipping": dict(SHIPPING_FACTORS),
            "distances_km": dict(SHIPPING_DISTANCES_KM),
            "sea_freight_origins": sorted(SEA_FREIGHT_ORIGINS),
        },
        "structured": {
            "product_types": dict(PRODUCT_TYPE_FACTORS),
            "regions": {
                "manufacturing": dict(REGION_MANUFACTURING),
                "transportation": dict(REGION_TRANSPORT),
            },
            "materials": dict(STRUCTURED_MATERIAL_FACTORS),
            "energy_mix": dict(ENERGY_MIX),
        },
    }
