"""Enquiry cart, estimation text and WhatsApp link checks."""
from datetime import datetime

import pytest
from pydantic import ValidationError

from loomspares.models import CustomerDetails
from loomspares.tools.cart_tools import EnquiryCart
from loomspares.tools.catalog_tools import create_catalog
from loomspares.tools.quotation_tools import (
    build_estimation,
    build_whatsapp_link,
    format_estimation_text,
)

FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0)


@pytest.fixture
def catalog():
    return create_catalog()


@pytest.fixture
def cart(catalog):
    cart = EnquiryCart()
    cart.add_item(catalog.get_product_by_id("1"), 2)
    cart.add_item(catalog.get_product_by_id("2"))
    return cart


@pytest.fixture
def customer():
    return CustomerDetails(name="  Ravi Kumar ", phone="+91 98765 43210", company="Sri Textiles")


def test_cart_totals(cart):
    assert cart.item_count == 3
    assert cart.total == 2 * 2500 + 1850
    assert not cart.is_empty


def test_add_same_product_merges_lines(cart, catalog):
    cart.add_item(catalog.get_product_by_id("1"), 3)
    assert len(cart.items) == 2
    assert cart.get_item("1").quantity == 5


def test_add_item_rejects_zero_quantity(cart, catalog):
    with pytest.raises(ValueError):
        cart.add_item(catalog.get_product_by_id("3"), 0)


def test_update_quantity(cart):
    assert cart.update_quantity("2", 4).quantity == 4
    assert cart.update_quantity("2", 0) is None
    assert cart.get_item("2") is None
    assert cart.update_quantity("missing", 3) is None


def test_remove_and_clear(cart):
    assert cart.remove_item("1")
    assert not cart.remove_item("1")
    cart.clear()
    assert cart.is_empty
    assert cart.total == 0


def test_sync_products_follows_catalog_edits(cart, catalog):
    catalog.update_product("1", {"price": 3000})
    catalog.delete_product("2")
    cart.sync_products(catalog.list_products())
    assert [item.product.id for item in cart.items] == ["1"]
    assert cart.total == 6000


def test_customer_requires_name_and_phone():
    with pytest.raises(ValidationError):
        CustomerDetails(name="   ", phone="12345")
    with pytest.raises(ValidationError):
        CustomerDetails(name="Ravi", phone="")


def test_build_estimation(cart, customer):
    estimation = build_estimation(cart, customer, now=FIXED_NOW)
    assert estimation.number == "EST-20240115-103000"
    assert estimation.valid_until == datetime(2024, 1, 30, 10, 30, 0)
    assert estimation.customer.name == "Ravi Kumar"
    assert estimation.total == 6850
    assert estimation.item_count == 3


def test_estimation_is_a_snapshot(cart, customer):
    estimation = build_estimation(cart, customer, now=FIXED_NOW)
    cart.update_quantity("1", 10)
    cart.clear()
    assert estimation.items[0].quantity == 2
    assert estimation.total == 6850


def test_build_estimation_errors(customer):
    with pytest.raises(ValueError):
        build_estimation(EnquiryCart(), customer)


def test_build_estimation_rejects_zero_validity(cart, customer):
    with pytest.raises(ValueError):
        build_estimation(cart, customer, validity_days=0)


def test_estimation_text(cart, customer):
    text = format_estimation_text(build_estimation(cart, customer, validity_days=7, now=FIXED_NOW))
    lines = text.splitlines()

    assert lines[0].endswith("- ESTIMATION*")
    assert "Estimation No: EST-20240115-103000" in lines
    assert "Date: 15 Jan 2024" in lines
    assert "Valid Until: 22 Jan 2024" in lines
    assert "Customer: Ravi Kumar" in lines
    assert "Company: Sri Textiles" in lines
    assert "1. Toyota Air Jet Reed (RKM-TOY-001)" in lines
    assert "   2 x ₹2,500.00 = ₹5,000.00" in lines
    assert "Total Items: 3" in lines
    assert "*TOTAL: ₹6,850.00*" in lines
    assert not any(line.startswith("Email:") for line in lines)
    assert not any(line.startswith("Notes:") for line in lines)


def test_whatsapp_link_encoding():
    link = build_whatsapp_link("Hi *there*\nA&B ₹", phone="+91 98765 43210")
    assert link == "https://wa.me/919876543210?text=Hi%20%2Athere%2A%0AA%26B%20%E2%82%B9"


def test_whatsapp_link_without_number():
    assert build_whatsapp_link("hello", phone="") == "https://wa.me/?text=hello"
