# ecofootprint/units.py — mass units → kg
from __future__ import annotations
import math
import re
from typing import Optional

from .errors import InvalidUnit, InvalidWeight

# kg per one unit
TO_KG = {
    "kg": 1.0,
    "g": 1.0 / 1000,
    "lb": 0.453592,
    "oz": 0.0283495,
}
VALID_UNITS = set(TO_KG)

UNIT_ALIASES = {
    "kgs": "kg", "kilo": "kg", "kilos": "kg", "kilogram": "kg", "kilograms": "kg",
    "gr": "g", "gram": "g", "grams": "g",
    "lbs": "lb", "pound": "lb", "pounds": "lb",
    "ounce": "oz", "ounces": "oz",
}

# UN/CEFACT codes seen in schema.org QuantitativeValue.unitCode
UNIT_CODES = {
    "KGM": "kg",
    "GRM": "g",
    "LBR": "lb",
    "ONZ": "oz",
}

NUM_RE = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def norm_unit(u: Optional[str]) -> Optional[str]:
    """Lenient unit reading for scraped pages: aliases and UN/CEFACT codes map onto kg|g|lb|oz."""
    if not isinstance(u, str) or not u.strip():
        return None
    raw = u.strip()
    if raw.upper() in UNIT_CODES:
        return UNIT_CODES[raw.upper()]
    low = raw.lower()
    low = UNIT_ALIASES.get(low, low)
    return low if low in VALID_UNITS else None


def parse_number(value) -> float:
    """Best-effort float parse: numbers pass through, strings use their leading number."""
    if isinstance(value, bool):
        raise InvalidWeight()
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        m = NUM_RE.match(value)
        if not m:
            raise InvalidWeight()
        num = float(m.group(1))
    else:
        raise InvalidWeight()
    if not math.isfinite(num):
        raise InvalidWeight()
    return num


def strict_unit(unit) -> str:
    """One of kg|g|lb|oz exactly (surrounding whitespace ignored), else InvalidUnit."""
    if isinstance(unit, str) and unit.strip() in VALID_UNITS:
        return unit.strip()
    raise InvalidUnit(unit)


def normalize(value, unit) -> float:
    """Convert ``value`` expressed in ``unit`` to kilograms."""
    return parse_number(value) * TO_KG[strict_unit(unit)]


def denormalize(kg: float, unit) -> float:
    """Inverse of normalize(): kilograms back into ``unit``."""
    return parse_number(kg) / TO_KG[strict_unit(unit)]
