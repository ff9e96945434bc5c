import pytest

from ecofootprint.calculator import (
    calculate_scraped,
    calculate_structured,
    round_half_up,
    score_of,
)
from ecofootprint.errors import InvalidUnit, InvalidWeight
from ecofootprint.schemas import ProductInput, ProductRecord


# ---- scraped ----------------------------------------------------------------
def test_laptop_from_china():
    rec = ProductRecord(name="Laptop", weight_kg=1, category="electronics", material="composite", origin="CN")
    res = calculate_scraped(rec)
    assert res.breakdown.manufacturing == 85
    assert res.breakdown.materials == 15
    assert res.breakdown.transportation == 80
    assert res.carbon_footprint == 180
    assert res.assumptions == [
        "Manufacturing: 85g/kg for electronics",
        "Material: 15g/kg for composite",
        "sea shipping from CN (8000km at 0.01g/kg/km)",
    ]


def test_unknown_values_use_defaults():
    rec = ProductRecord(weight_kg=2, category="toys", material="bamboo", origin="FR")
    res = calculate_scraped(rec)
    assert res.breakdown.manufacturing == 100
    assert res.breakdown.materials == 30
    assert res.breakdown.transportation == 5000  # 2 kg * 0.5 * 5000 km by air
    assert res.assumptions[0] == "Manufacturing: 50g/kg for general"
    assert res.assumptions[1] == "Material: 15g/kg for composite"
    assert res.assumptions[2].startswith("air shipping from FR (5000km")


def test_parts_are_rounded_independently():
    rec = ProductRecord(weight_kg=0.1, category="electronics", material="composite", origin="CN")
    res = calculate_scraped(rec)
    b = res.breakdown
    assert (b.manufacturing, b.materials, b.transportation) == (9, 2, 8)
    assert res.carbon_footprint == 18


@pytest.mark.parametrize("weight", [0, 0.05, 0.37, 1.234, 3.5, 12.9, 250])
def test_total_within_rounding_of_parts(weight):
    rec = ProductRecord(weight_kg=weight, category="furniture", material="glass", origin="US")
    res = calculate_scraped(rec)
    b = res.breakdown
    assert abs(res.carbon_footprint - (b.manufacturing + b.materials + b.transportation)) <= 2


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2


# ---- structured -------------------------------------------------------------
def _input(**kw):
    base = dict(weight=10, unit="lb", product_type="electronics",
                manufacturer_region="europe", materials=["aluminum"])
    base.update(kw)
    return ProductInput(**base)


def test_ten_pounds_of_european_electronics():
    res = calculate_structured(_input())
    assert res.breakdown.manufacturing == pytest.approx(51.03, abs=0.01)
    assert res.breakdown.materials == pytest.approx(37.19, abs=0.01)
    assert res.breakdown.transportation == pytest.approx(2.72, abs=0.01)
    assert res.breakdown.energy == pytest.approx(17.86, abs=0.01)
    assert res.carbon_footprint.value == pytest.approx(108.805, abs=0.01)
    assert res.carbon_footprint.display == "108.81 kg CO₂e"
    assert res.factors.energy_mix == 0.35
    assert res.score.rating == "POOR"


def test_total_uses_unrounded_parts():
    res = calculate_structured(_input())
    b = res.breakdown
    parts = b.manufacturing + b.materials + b.transportation + b.energy
    assert res.carbon_footprint.value != parts
    assert res.carbon_footprint.value == pytest.approx(parts, abs=0.05)


def test_materials_are_a_set_and_unknowns_add_nothing():
    once = calculate_structured(_input(materials=["aluminum"]))
    twice = calculate_structured(_input(materials=["aluminum", "aluminum", "vibranium"]))
    assert twice.carbon_footprint.value == pytest.approx(once.carbon_footprint.value)
    assert twice.factors.materials == ["aluminum", "vibranium"]


def test_no_materials():
    res = calculate_structured(_input(materials=[], weight=1, unit="kg", product_type="general",
                                      manufacturer_region="global"))
    # 5.0 manufacturing + 0 materials + 1.0 transport + 2.1 energy
    assert res.carbon_footprint.value == pytest.approx(8.1)
    assert res.score.rating == "GOOD"


def test_stone_is_not_a_unit():
    with pytest.raises(InvalidUnit):
        calculate_structured(_input(unit="stone"))


def test_negative_weight_rejected():
    with pytest.raises(InvalidWeight):
        calculate_structured(_input(weight=-1))


# ---- score ------------------------------------------------------------------
@pytest.mark.parametrize("total,rating,pct", [
    (0, "EXCELLENT", 0),
    (2.5, "EXCELLENT", 50),
    (5, "EXCELLENT", 100),
    (7.5, "GOOD", 50),
    (12, "FAIR", 40),
    (15, "FAIR", 100),
    (15.01, "POOR", 0),
    (1000, "POOR", 0),
])
def test_score_tiers(total, rating, pct):
    s = score_of(total)
    assert s.rating == rating
    assert s.percentage == pct


def test_score_scale_always_complete():
    s = score_of(3)
    assert [t.rating for t in s.scale] == ["EXCELLENT", "GOOD", "FAIR", "POOR"]
    assert [t.threshold for t in s.scale] == [5, 10, 15, None]
    assert s.color == "#4CAF50"


def test_score_tiers_are_monotonic():
    order = ["EXCELLENT", "GOOD", "FAIR", "POOR"]
    seen = [order.index(score_of(x / 4).rating) for x in range(0, 100)]
    assert seen == sorted(seen)
    assert all(0 <= score_of(x / 4).percentage <= 100 for x in range(0, 100))
