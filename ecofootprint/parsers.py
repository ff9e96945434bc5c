# ecofootprint/parsers.py — product page → ProductRecord
"""
Pulls the fields the calculator needs out of a product page.

Order of preference:
  1. schema.org ``Product`` in a ``<script type="application/ld+json">`` block
  2. Open Graph / ``product:*`` meta tags
  3. per-field defaults (weight 1 kg, general, composite, CN)
"""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, Iterable, Optional

from bs4 import BeautifulSoup

from .errors import InvalidWeight
from .schemas import ProductRecord
from .units import NUM_RE, TO_KG, norm_unit, parse_number

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT_KG = 1.0
DEFAULT_CATEGORY = "general"
DEFAULT_MATERIAL = "composite"
DEFAULT_ORIGIN = "CN"

# shop wording → factor table keys
CATEGORY_ALIASES = {
    "electronic": "electronics",
    "apparel": "clothing",
    "clothes": "clothing",
    "appliance": "appliances",
    "home appliances": "appliances",
}
MATERIAL_ALIASES = {
    "plastics": "plastic",
    "aluminum": "metal",
    "aluminium": "metal",
    "steel": "metal",
    "stainless steel": "metal",
}
COUNTRY_ALIASES = {
    "CHINA": "CN",
    "INDIA": "IN",
    "VIETNAM": "VN",
    "VIET NAM": "VN",
    "INDONESIA": "ID",
    "MALAYSIA": "MY",
    "GERMANY": "DE",
    "USA": "US",
    "UNITED STATES": "US",
}


# ---------- field cleanup ----------
def _text(v: Any) -> Optional[str]:
    if isinstance(v, str) and v.strip():
        return v.strip()
    if isinstance(v, list):
        for x in v:
            t = _text(x)
            if t:
                return t
    if isinstance(v, dict):
        return _text(v.get("name"))
    return None


def _canon(value: Optional[str], aliases: Dict[str, str], default: str) -> str:
    v = (value or "").strip().lower()
    if not v:
        return default
    return aliases.get(v, v)


def _origin(value: Any) -> str:
    if isinstance(value, dict):
        value = value.get("identifier") or value.get("addressCountry") or value.get("name")
    v = _text(value)
    if not v:
        return DEFAULT_ORIGIN
    v = v.upper()
    return COUNTRY_ALIASES.get(v, v)


def _price(value: Any) -> float:
    try:
        return parse_number(value)
    except InvalidWeight:
        return 0.0


def _weight_kg(value: Any, unit: Optional[str] = None) -> float:
    """Mass in kg; missing, zero, negative or unreadable weights fall back to 1 kg."""
    if value is None or value == "":
        return DEFAULT_WEIGHT_KG
    try:
        num = parse_number(value)
    except InvalidWeight:
        return DEFAULT_WEIGHT_KG
    if num <= 0:
        return DEFAULT_WEIGHT_KG
    if unit is None and isinstance(value, str):
        # "2.5 lb" style strings carry their own unit after the number
        m = NUM_RE.match(value)
        unit = value[m.end():].strip() or None
    canon = norm_unit(unit) or "kg"
    return num * TO_KG[canon]


# ---------- JSON-LD ----------
def _is_product(obj: Dict[str, Any]) -> bool:
    t = obj.get("@type")
    if isinstance(t, list):
        return "Product" in t
    return t == "Product"


def _find_product(data: Any) -> Optional[Dict[str, Any]]:
    if isinstance(data, list):
        for item in data:
            found = _find_product(item)
            if found:
                return found
        return None
    if not isinstance(data, dict):
        return None
    if _is_product(data):
        return data
    if "@graph" in data:
        return _find_product(data["@graph"])
    return None


def _ld_blocks(soup: BeautifulSoup) -> Iterable[Any]:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except ValueError as e:
            logger.debug("[parse] skipping unreadable ld+json block: %s", e)
            continue


def _record_from_ld(p: Dict[str, Any]) -> ProductRecord:
    offers = p.get("offers")
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    price = offers.get("price") if isinstance(offers, dict) else None

    weight = p.get("weight")
    if isinstance(weight, dict):
        weight_kg = _weight_kg(weight.get("value"), weight.get("unitCode") or weight.get("unitText"))
    else:
        weight_kg = _weight_kg(weight)

    return ProductRecord(
        name=_text(p.get("name")),
        price=_price(price),
        weight_kg=weight_kg,
        category=_canon(_text(p.get("category")), CATEGORY_ALIASES, DEFAULT_CATEGORY),
        material=_canon(_text(p.get("material")), MATERIAL_ALIASES, DEFAULT_MATERIAL),
        origin=_origin(p.get("countryOfOrigin")),
    )


def parse_structured_data(soup: BeautifulSoup) -> Optional[ProductRecord]:
    for block in _ld_blocks(soup):
        product = _find_product(block)
        if product:
            return _record_from_ld(product)
    return None


# ---------- meta tags ----------
def _meta(soup: BeautifulSoup, prop: str) -> Optional[str]:
    tag = soup.find("meta", attrs={"property": prop})
    if tag is None:
        return None
    content = tag.get("content")
    return content.strip() if isinstance(content, str) and content.strip() else None


def parse_meta_tags(soup: BeautifulSoup) -> ProductRecord:
    name = _meta(soup, "og:title")
    if not name and soup.title and soup.title.string:
        name = soup.title.string.strip() or None

    return ProductRecord(
        name=name,
        price=_price(_meta(soup, "product:price:amount")),
        weight_kg=_weight_kg(_meta(soup, "product:weight:value"), _meta(soup, "product:weight:units")),
        category=_canon(_meta(soup, "product:category"), CATEGORY_ALIASES, DEFAULT_CATEGORY),
        material=_canon(_meta(soup, "product:material"), MATERIAL_ALIASES, DEFAULT_MATERIAL),
        origin=_origin(_meta(soup, "product:origin")),
    )


# ---------- Public entry ----------
def extract_product(html: str) -> ProductRecord:
    soup = BeautifulSoup(html or "", "html.parser")
    record = parse_structured_data(soup)
    if record:
        logger.info("[parse] product from ld+json: %s", record.name)
        return record
    record = parse_meta_tags(soup)
    logger.info("[parse] product from meta tags: %s", record.name)
    return record
