"""CSV import/export, analytics figures and the photo matcher."""
import io

import pytest
from pydantic import ValidationError

from loomspares.tools.analytics_tools import get_category_summary, get_inventory_stats
from loomspares.tools.catalog_tools import create_catalog
from loomspares.tools.formatting import format_price, stock_label
from loomspares.tools.image_tools import recognize_parts
from loomspares.tools.import_tools import (
    FORM_LIST_SEPARATORS,
    clean_price,
    clean_stock,
    export_products_csv,
    import_products_csv,
    parse_specifications,
    split_list,
)

CSV_TEXT = """Name,Category,Price,Stock,Tags,Specifications
Warp Stop Motion,picanol,"₹1,200",30,sensor; warp,Type: Electrical; Voltage: 24V
Bad Price,TOYOTA,abc,5,,
Bad Category,SULZER,100,5,,
Half Stock,DORNIER,100,2.5,,
"""


def test_split_list():
    assert split_list("reed; air jet | nozzle") == ["reed", "air jet", "nozzle"]
    assert split_list("JAT 710, JAT 810 series; ZAX") == ["JAT 710, JAT 810 series", "ZAX"]
    assert split_list("") == []


def test_split_list_form_separators():
    text = "reed; air jet | nozzle,  hooks\n"
    assert split_list(text, FORM_LIST_SEPARATORS) == ["reed", "air jet", "nozzle", "hooks"]


def test_import_keeps_commas_inside_list_values():
    catalog = create_catalog(seed=False)
    csv_text = 'name,category,price,stock,compatibility\nReed,TOYOTA,100,5,"JAT 710, JAT 810 series; ZAX"\n'
    result = import_products_csv(io.StringIO(csv_text), catalog)
    assert result["imported"][0].compatibility == ["JAT 710, JAT 810 series", "ZAX"]


@pytest.mark.parametrize("price", ["inf", "-inf", "nan", "Infinity"])
def test_import_rejects_non_finite_prices(price):
    catalog = create_catalog(seed=False)
    result = import_products_csv(io.StringIO(f"name,category,price,stock\nReed,TOYOTA,{price},5\n"), catalog)
    assert result["imported"] == []
    assert result["errors"][0].startswith("Line 2:")
    assert catalog.list_products() == []


def test_product_model_rejects_infinite_price():
    catalog = create_catalog(seed=False)
    with pytest.raises(ValidationError):
        catalog.add_product({"name": "Reed", "category": "TOYOTA", "price": float("inf"), "stock": 5})


def test_parse_specifications():
    specs = parse_specifications("Material: Steel; Dents: 80/inch\nno colon here; Ratio: 1:2")
    assert specs == {"Material": "Steel", "Dents": "80/inch", "Ratio": "1:2"}


@pytest.mark.parametrize("value,expected", [
    ("₹1,200", 1200.0),
    ("Rs. 450", 450.0),
    ("INR 99.5", 99.5),
    (75, 75.0),
])
def test_clean_price(value, expected):
    assert clean_price(value) == expected


@pytest.mark.parametrize("value", [None, "", "abc"])
def test_clean_price_invalid(value):
    with pytest.raises(ValueError):
        clean_price(value)


def test_clean_stock():
    assert clean_stock("1,000") == 1000
    assert clean_stock("12.0") == 12
    with pytest.raises(ValueError):
        clean_stock("2.5")


def test_import_reports_bad_rows():
    catalog = create_catalog(seed=False)
    result = import_products_csv(io.StringIO(CSV_TEXT), catalog)

    assert [p.name for p in result["imported"]] == ["Warp Stop Motion"]
    product = catalog.list_products()[0]
    assert product.price == 1200
    assert product.code == "RKM-PIC-001"
    assert product.tags == ["sensor", "warp"]
    assert product.specifications == {"Type": "Electrical", "Voltage": "24V"}

    assert len(result["errors"]) == 3
    assert result["errors"][0].startswith("Line 3:")
    assert result["errors"][1].startswith("Line 4:")
    assert result["errors"][2].startswith("Line 5:")


def test_import_missing_columns():
    catalog = create_catalog(seed=False)
    result = import_products_csv(io.StringIO("name,price\nReed,10\n"), catalog)
    assert result["imported"] == []
    assert result["errors"] == ["Missing required columns: category, stock"]
    assert catalog.list_products() == []


def test_export_then_import_keeps_products():
    seeded = create_catalog()
    data = export_products_csv(seeded.list_products())
    assert data.decode("utf-8").splitlines()[0].startswith("id,code,name,category,price,stock")

    target = create_catalog(seed=False)
    result = import_products_csv(io.BytesIO(data), target)
    assert result["errors"] == []

    for original, copy in zip(seeded.list_products(), target.list_products()):
        assert copy.code == original.code
        assert copy.name == original.name
        assert copy.category == original.category
        assert copy.price == original.price
        assert copy.compatibility == original.compatibility
        assert copy.specifications == original.specifications


def test_inventory_stats():
    products = create_catalog().list_products()
    stats = get_inventory_stats(products, message_count=4, low_stock_threshold=20)
    assert stats == {
        "total_products": 6,
        "total_stock_value": 329300,
        "total_units": 520,
        "low_stock_count": 2,
        "message_count": 4,
    }


def test_category_summary():
    summary = get_category_summary(create_catalog().list_products())
    assert list(summary["category"]) == ["TOYOTA", "TSUDAKOMA", "DORNIER", "UNIVERSAL", "PICANOL"]
    toyota = summary.iloc[0]
    assert toyota["products"] == 2
    assert toyota["units"] == 63
    assert toyota["value"] == 145800


def test_category_summary_empty():
    summary = get_category_summary([])
    assert summary.empty
    assert list(summary.columns) == ["category", "products", "units", "value"]


def test_recognize_parts_returns_first_two():
    products = create_catalog().list_products()
    assert [p.id for p in recognize_parts(b"\x89PNG", products)] == ["1", "2"]
    assert recognize_parts(None, products) == []
    assert recognize_parts(b"\x89PNG", products[:1]) == products[:1]


def test_formatting_helpers():
    assert format_price(1234.5) == "₹1,234.50"
    assert format_price(2500, 0) == "₹2,500"
    assert stock_label(0, 20) == "Out of Stock"
    assert stock_label(20, 20) == "Low Stock"
    assert stock_label(21, 20) == "In Stock"
