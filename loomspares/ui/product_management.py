"""
Product management page: search, add, edit, delete, CSV import and export.
"""

import base64
from typing import Dict, Optional

import streamlit as st
from pydantic import ValidationError

from loomspares.models import CATEGORIES, Product, ProductNotFoundError
from loomspares.tools.import_tools import (
    FORM_LIST_SEPARATORS,
    export_products_csv,
    format_specifications,
    import_products_csv,
    parse_specifications,
    split_list,
)
from loomspares.ui.product_display import render_product_grid
from loomspares.ui.state import get_cart, get_catalog


def _image_to_data_uri(uploaded_file) -> str:
    encoded = base64.b64encode(uploaded_file.getvalue()).decode("ascii")
    return f"data:{uploaded_file.type};base64,{encoded}"


def _validation_message(error: ValidationError) -> str:
    return "; ".join(f"{err['loc'][-1]}: {err['msg']}" for err in error.errors())


def render_product_form(form_key: str, product: Optional[Product] = None) -> Optional[Dict]:
    """
    Render the add / edit form.

    Returns:
        Product data when submitted with the required fields, else None
    """
    with st.form(form_key, clear_on_submit=product is None):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", key=f"{form_key}_name", value=product.name if product else "")
            category = st.selectbox(
                "Category *",
                CATEGORIES,
                key=f"{form_key}_category",
                index=CATEGORIES.index(product.category.value) if product else 0
            )
            price = st.number_input(
                "Price (₹) *", key=f"{form_key}_price", min_value=0.0, step=50.0,
                value=float(product.price) if product else 0.0
            )
        with col2:
            code = st.text_input(
                "Code", key=f"{form_key}_code", value=product.code if product else "",
                placeholder="Leave blank to auto-generate"
            )
            stock = st.number_input(
                "Stock *", key=f"{form_key}_stock", min_value=0, step=1,
                value=int(product.stock) if product else 0
            )
            image_url = st.text_input(
                "Image URL",
                key=f"{form_key}_image_url",
                value=product.image if product and product.image and not product.image.startswith("data:") else ""
            )

        description = st.text_area("Description", key=f"{form_key}_description", value=product.description if product else "")
        compatibility = st.text_input(
            "Compatible looms (comma separated)",
            key=f"{form_key}_compatibility",
            value=", ".join(product.compatibility) if product else ""
        )
        tags = st.text_input("Tags (comma separated)", key=f"{form_key}_tags", value=", ".join(product.tags) if product else "")
        specifications = st.text_area(
            "Specifications (one 'Key: Value' per line)",
            key=f"{form_key}_specifications",
            value=format_specifications(product.specifications, "\n") if product else ""
        )
        image_file = st.file_uploader("Or upload an image", key=f"{form_key}_image_file", type=["png", "jpg", "jpeg", "webp"])

        submitted = st.form_submit_button("💾 Save Product", use_container_width=True)

    if not submitted:
        return None

    if not name.strip():
        st.warning("⚠️ Product name is required.")
        return None

    image = image_url.strip() or None
    if image_file is not None:
        image = _image_to_data_uri(image_file)
    elif product and product.image and not image_url.strip() and product.image.startswith("data:"):
        image = product.image

    return {
        "name": name,
        "code": code,
        "category": category,
        "price": price,
        "stock": int(stock),
        "description": description,
        "image": image,
        "compatibility": split_list(compatibility, FORM_LIST_SEPARATORS),
        "tags": split_list(tags, FORM_LIST_SEPARATORS),
        "specifications": parse_specifications(specifications),
    }


@st.dialog("✏️ Edit Product", width="large")
def edit_product_dialog(product: Product):
    data = render_product_form(f"edit_form_{product.id}", product)
    if data is None:
        return
    try:
        get_catalog().update_product(product.id, data)
    except ValidationError as e:
        st.warning(f"⚠️ {_validation_message(e)}")
        return
    except ProductNotFoundError:
        st.error("This product no longer exists.")
        return
    get_cart().sync_products(get_catalog().list_products())
    st.session_state.estimation = None
    st.rerun()


def delete_product(product_id: str):
    try:
        product = get_catalog().delete_product(product_id)
    except ProductNotFoundError:
        return
    get_cart().sync_products(get_catalog().list_products())
    st.session_state.estimation = None
    st.toast(f"🗑️ Deleted {product.name}")


def render_csv_tools():
    catalog = get_catalog()

    with st.expander("📥 Import / 📤 Export CSV"):
        st.caption(
            "Columns: name, category, price, stock (required); code, description, image, "
            "compatibility, tags, specifications (optional). Separate list values with ';'."
        )
        uploaded = st.file_uploader("CSV file", type=["csv"], key="csv_import")
        if uploaded is not None and st.button("📥 Import products", key="csv_import_button"):
            result = import_products_csv(uploaded, catalog)
            if result["imported"]:
                st.success(f"✅ Imported {len(result['imported'])} products.")
            for error in result["errors"]:
                st.warning(error)

        st.download_button(
            "📤 Export catalog",
            data=export_products_csv(catalog.list_products()),
            file_name="rkm_loom_spares_catalog.csv",
            mime="text/csv",
            use_container_width=True
        )


def render_product_management():
    """Products tab."""
    catalog = get_catalog()

    st.subheader("📦 Product Management")

    col1, col2 = st.columns([3, 1])
    with col1:
        search_term = st.text_input("🔍 Search products...", key="product_search",
                                    placeholder="Name, code, loom model or tag")
    with col2:
        category = st.selectbox("Category", ["All"] + CATEGORIES, key="product_category")

    with st.expander("➕ Add Product"):
        data = render_product_form("add_product_form")
        if data is not None:
            try:
                product = catalog.add_product(data)
                st.success(f"✅ Added {product.name} ({product.code})")
            except ValidationError as e:
                st.warning(f"⚠️ {_validation_message(e)}")

    render_csv_tools()

    products = catalog.search_products(search_term, None if category == "All" else category)

    st.caption(f"Showing {len(products)} of {len(catalog.list_products())} products")
    render_product_grid(products, "catalog", on_edit=edit_product_dialog, on_delete=delete_product)
