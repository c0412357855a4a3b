"""
Product display components: product cards and grids.
"""

import streamlit as st
from typing import Callable, List, Optional

from loomspares.models import Product
from loomspares.tools.formatting import format_price, stock_label
from loomspares.ui.state import get_cart, get_catalog


def add_to_enquiry(product: Product, quantity: int = 1):
    # Transcript cards hold snapshots, so resolve against the live catalog
    current = get_catalog().get_product_by_id(product.id)
    if current is None:
        st.toast(f"⚠️ {product.name} is no longer in the catalog")
        return
    get_cart().add_item(current, quantity)
    st.session_state.estimation = None
    st.toast(f"➕ Added {current.name} to your enquiry")


def render_product_card(product: Product, key_prefix: str,
                        on_edit: Optional[Callable] = None,
                        on_delete: Optional[Callable] = None):
    """
    Render a product card.

    Args:
        product: Product to show
        key_prefix: Unique prefix for widget keys (a product can appear in several places)
        on_edit: Called with the product when the edit button is pressed
        on_delete: Button callback receiving the product id
    """
    show_actions = on_edit is not None and on_delete is not None

    with st.container(border=True):
        col1, col2 = st.columns([3, 1])

        with col1:
            st.markdown(f"**{product.name}**")
            st.caption(f"{product.code} • {product.category.value}")

        with col2:
            st.markdown(f"**{format_price(product.price, 0)}**")

        if product.image:
            st.image(product.image, use_container_width=True)

        if product.description:
            st.write(product.description)

        label = stock_label(product.stock)
        stock_text = f"Stock: {product.stock} units"
        if label == "In Stock":
            st.success(f"{stock_text} • {label}")
        else:
            st.warning(f"{stock_text} • {label}")

        if product.compatibility:
            st.caption(f"🔧 Fits: {', '.join(product.compatibility)}")
        if product.tags:
            st.caption(" ".join(f"`{tag}`" for tag in product.tags))

        if product.specifications:
            with st.expander("📋 Specifications"):
                for key, value in product.specifications.items():
                    st.text(f"• {key}: {value}")

        if show_actions:
            add_col, edit_col, delete_col = st.columns([2, 1, 1])
        else:
            add_col = st.container()

        with add_col:
            st.button(
                "➕ Add to enquiry",
                key=f"{key_prefix}_add_{product.id}",
                on_click=add_to_enquiry,
                args=(product,),
                use_container_width=True
            )

        if show_actions:
            with edit_col:
                if st.button("✏️", key=f"{key_prefix}_edit_{product.id}", help="Edit product"):
                    on_edit(product)
            with delete_col:
                st.button(
                    "🗑️",
                    key=f"{key_prefix}_delete_{product.id}",
                    help="Delete product",
                    on_click=on_delete,
                    args=(product.id,)
                )


def render_product_grid(products: List[Product], key_prefix: str,
                        on_edit: Optional[Callable] = None,
                        on_delete: Optional[Callable] = None,
                        columns: int = 3):
    """
    Render product cards in a grid.

    Args:
        products: Products to show
        key_prefix: Widget key prefix
        on_edit: Edit handler, enables management buttons with on_delete
        on_delete: Delete button callback
        columns: Cards per row
    """
    if not products:
        st.info("No products found matching your criteria.")
        return

    for start in range(0, len(products), columns):
        cols = st.columns(columns)
        for col, product in zip(cols, products[start:start + columns]):
            with col:
                render_product_card(product, key_prefix, on_edit, on_delete)
