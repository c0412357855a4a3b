"""Catalog and filter checks against the seeded spares."""
import pytest
from pydantic import ValidationError

from loomspares.models import Category, ProductNotFoundError
from loomspares.tools.catalog_tools import create_catalog
from loomspares.tools.filter_tools import get_filter_tools


@pytest.fixture
def catalog():
    return create_catalog()


def test_seed_catalog(catalog):
    products = catalog.list_products()
    assert len(products) == 6
    assert catalog.get_all_categories() == ["TOYOTA", "PICANOL", "TSUDAKOMA", "DORNIER", "UNIVERSAL"]
    assert catalog.get_product_by_code("rkm-toy-001").name == "Toyota Air Jet Reed"


def test_map_category(catalog):
    assert catalog.map_category("show me toyota spares") == "TOYOTA"
    assert catalog.map_category("parts for jat 710") == "TOYOTA"
    assert catalog.map_category("omni plus heddles") == "PICANOL"
    assert catalog.map_category("zw 408 temple") == "TSUDAKOMA"
    assert catalog.map_category("something for any loom") == "UNIVERSAL"
    assert catalog.map_category("how long is delivery") is None


def test_search_products(catalog):
    names = {p.name for p in catalog.search_products("air jet")}
    assert names == {"Toyota Air Jet Reed", "Toyota Main Nozzle"}
    assert {p.id for p in catalog.search_products("GTMax")} == {"3"}
    assert len(catalog.search_products("   ")) == 6
    assert catalog.search_products("sulzer") == []


def test_add_product_generates_id_and_code(catalog):
    product = catalog.add_product({
        "name": "Toyota Weft Cutter",
        "category": "toyota",
        "price": 640,
        "stock": 8,
    })
    assert product.category == Category.TOYOTA
    assert product.code == "RKM-TOY-003"
    assert product.id.isdigit()
    assert catalog.get_product_by_id(product.id) is product


def test_add_product_replaces_colliding_id(catalog):
    product = catalog.add_product({"id": "1", "name": "Spare Reed", "category": "TOYOTA",
                                   "price": 100, "stock": 1})
    assert product.id != "1"
    assert len(catalog.list_products()) == 7


@pytest.mark.parametrize("data", [
    {"name": "   ", "category": "TOYOTA", "price": 10, "stock": 1},
    {"name": "Reed", "category": "SULZER", "price": 10, "stock": 1},
    {"name": "Reed", "category": "TOYOTA", "price": -1, "stock": 1},
    {"name": "Reed", "category": "TOYOTA", "price": 10, "stock": -5},
])
def test_add_product_rejects_invalid_data(catalog, data):
    with pytest.raises(ValidationError):
        catalog.add_product(data)
    assert len(catalog.list_products()) == 6


def test_update_product(catalog):
    updated = catalog.update_product("1", {"price": 2600, "stock": 40, "id": "99"})
    assert updated.id == "1"
    assert updated.price == 2600
    assert updated.name == "Toyota Air Jet Reed"
    assert catalog.get_product_by_id("1").stock == 40


def test_update_and_delete_unknown_product(catalog):
    with pytest.raises(ProductNotFoundError):
        catalog.update_product("missing", {"price": 1})
    with pytest.raises(KeyError):
        catalog.delete_product("missing")


def test_delete_product(catalog):
    removed = catalog.delete_product("3")
    assert removed.code == "RKM-PIC-001"
    assert catalog.get_product_by_id("3") is None
    assert "PICANOL" not in catalog.get_all_categories()


def test_low_stock_products(catalog):
    assert {p.id for p in catalog.get_low_stock_products(20)} == {"2", "5"}
    assert catalog.get_low_stock_products(0) == []


def test_filter_by_price_sorted(catalog):
    results = get_filter_tools().filter_by_price(catalog.list_products(), max_price=500)
    assert [p.id for p in results] == ["6", "3"]


def test_apply_multiple_filters(catalog):
    filters = get_filter_tools()
    products = catalog.list_products()

    toyota = filters.apply_multiple_filters(products, category="toyota")
    assert [p.id for p in toyota] == ["2", "1"]

    assert [p.id for p in filters.apply_multiple_filters(products, tag="Air Jet", max_price=2000)] == ["2"]
    assert [p.id for p in filters.apply_multiple_filters(products, loom_model="zax")] == ["4"]
    assert len(filters.apply_multiple_filters(products, limit=2)) == 2


def test_generated_code_skips_codes_in_use(catalog):
    catalog.delete_product("1")
    product = catalog.add_product({"name": "Toyota Weft Brake", "category": "TOYOTA",
                                   "price": 900, "stock": 10})
    assert product.code == "RKM-TOY-003"
    codes = [p.code for p in catalog.list_products()]
    assert len(codes) == len(set(codes))
    assert catalog.get_product_by_code("RKM-TOY-002").name == "Toyota Main Nozzle"


def test_search_within_category_keeps_catalog_order(catalog):
    catalog.add_product({"name": "Toyota Weft Cutter", "category": "TOYOTA", "price": 640, "stock": 8})
    names = [p.name for p in catalog.search_products("", "toyota")]
    assert names == ["Toyota Air Jet Reed", "Toyota Main Nozzle", "Toyota Weft Cutter"]
    assert [p.id for p in catalog.search_products("air jet", "TOYOTA")] == ["1", "2"]
    assert catalog.search_products("air jet", "PICANOL") == []
