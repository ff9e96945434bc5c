from ecofootprint.parsers import extract_product

from .pages import META_PAGE, PRODUCT_PAGE


def _ld(body):
    return f'<html><head><script type="application/ld+json">{body}</script></head></html>'


def test_structured_data_wins():
    rec = extract_product(PRODUCT_PAGE)
    assert rec.name == 'Laptop 15" Pro'
    assert rec.price == 999.0
    assert rec.weight_kg == 1
    assert rec.category == "electronics"
    assert rec.material == "composite"
    assert rec.origin == "CN"


def test_product_inside_graph_with_pounds():
    rec = extract_product(_ld(
        '{"@graph": [{"@type": "WebPage"}, {"@type": ["Product"], "name": "Chair",'
        ' "category": "Furniture", "weight": {"value": "10", "unitCode": "LBR"},'
        ' "countryOfOrigin": {"@type": "Country", "name": "Vietnam"}}]}'
    ))
    assert rec.name == "Chair"
    assert rec.category == "furniture"
    assert abs(rec.weight_kg - 4.53592) < 1e-9
    assert rec.origin == "VN"


def test_meta_tags_when_no_structured_data():
    rec = extract_product(META_PAGE)
    assert rec.name == "Cotton T-Shirt"
    assert rec.price == 19.99
    assert rec.weight_kg == 0.2
    assert rec.category == "clothing"
    assert rec.material == "cotton"
    assert rec.origin == "IN"


def test_broken_json_falls_back_to_meta():
    html = META_PAGE.replace("</head>", '<script type="application/ld+json">{"@type": </script></head>')
    assert extract_product(html).name == "Cotton T-Shirt"


def test_defaults_for_bare_page():
    rec = extract_product("<html><head><title>Just a page</title></head></html>")
    assert rec.name == "Just a page"
    assert rec.weight_kg == 1
    assert rec.category == "general"
    assert rec.material == "composite"
    assert rec.origin == "CN"


def test_unusable_weight_defaults_to_one_kg():
    html = '<meta property="product:weight:value" content="heavy">'
    assert extract_product(html).weight_kg == 1


def test_weight_units_meta():
    html = ('<meta property="product:weight:value" content="500">'
            '<meta property="product:weight:units" content="g">')
    assert extract_product(html).weight_kg == 0.5


def test_material_aliases():
    assert extract_product(_ld('{"@type": "Product", "material": "Aluminium"}')).material == "metal"


def test_exponent_weight_keeps_its_unit():
    rec = extract_product(_ld('{"@type": "Product", "weight": "1e3 g"}'))
    assert rec.weight_kg == 1


def test_weight_string_with_unit_after_number():
    rec = extract_product(_ld('{"@type": "Product", "weight": "2.5 lbs"}'))
    assert abs(rec.weight_kg - 2.5 * 0.453592) < 1e-9


def test_zero_weight_defaults_to_one_kg():
    assert extract_product(_ld('{"@type": "Product", "weight": {"value": 0}}')).weight_kg == 1
    assert extract_product('<meta property="product:weight:value" content="0">').weight_kg == 1
