"""
Enquiry & Quotation tab: cart lines, customer details and the shareable estimation.
"""

import streamlit as st
from pydantic import ValidationError

from loomspares.models import CustomerDetails
from loomspares.tools.formatting import format_price
from loomspares.tools.quotation_tools import (
    build_estimation,
    build_whatsapp_link,
    format_estimation_text,
)
from loomspares.ui.state import get_cart


def _quantity_key(product_id: str, quantity: int) -> str:
    # Quantity in the key rebuilds the widget when the cart changes elsewhere
    return f"qty_{product_id}_{quantity}"


def _on_quantity_change(product_id: str, key: str):
    get_cart().update_quantity(product_id, int(st.session_state[key]))
    st.session_state.estimation = None


def _on_remove(product_id: str):
    get_cart().remove_item(product_id)
    st.session_state.estimation = None


def _on_clear():
    get_cart().clear()
    st.session_state.estimation = None


def render_cart():
    cart = get_cart()

    st.markdown("#### 🛒 Enquiry Cart")
    if cart.is_empty:
        st.info("Your enquiry is empty. Add spares from the assistant or the Products tab.")
        return

    header = st.columns([4, 2, 2, 1])
    header[0].caption("Product")
    header[1].caption("Quantity")
    header[2].caption("Amount")

    for item in cart.items:
        product = item.product
        cols = st.columns([4, 2, 2, 1])
        with cols[0]:
            st.markdown(f"**{product.name}**")
            st.caption(f"{product.code} • {format_price(product.price)} each")
            if item.quantity > product.stock:
                st.caption(f"⚠️ Only {product.stock} in stock")
        with cols[1]:
            st.number_input(
                "Quantity",
                min_value=0,
                step=1,
                value=item.quantity,
                key=_quantity_key(product.id, item.quantity),
                on_change=_on_quantity_change,
                args=(product.id, _quantity_key(product.id, item.quantity)),
                label_visibility="collapsed"
            )
        with cols[2]:
            st.markdown(format_price(item.line_total))
        with cols[3]:
            st.button("🗑️", key=f"remove_{product.id}", on_click=_on_remove, args=(product.id,))

    st.markdown(f"**Total ({cart.item_count} items): {format_price(cart.total)}**")
    st.button("🧹 Clear enquiry", on_click=_on_clear)


def render_customer_form():
    st.markdown("#### 👤 Customer Details")
    with st.form("customer_form"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *")
            company = st.text_input("Company")
            email = st.text_input("Email")
        with col2:
            phone = st.text_input("Phone / WhatsApp *")
            address = st.text_input("Address")
            notes = st.text_input("Notes")
        submitted = st.form_submit_button("🧾 Generate Estimation", use_container_width=True)

    if not submitted:
        return

    try:
        customer = CustomerDetails(
            name=name, phone=phone, company=company,
            email=email, address=address, notes=notes
        )
    except ValidationError:
        st.warning("⚠️ Name and phone are required to generate an estimation.")
        return

    try:
        st.session_state.estimation = build_estimation(get_cart(), customer)
    except ValueError as e:
        st.warning(f"⚠️ {e}")


def render_estimation():
    estimation = st.session_state.estimation
    if estimation is None:
        return

    text = format_estimation_text(estimation)

    st.markdown(f"#### 🧾 Estimation {estimation.number}")
    st.caption(f"Valid until {estimation.valid_until:%d %b %Y}")
    st.code(text, language=None)

    col1, col2 = st.columns(2)
    with col1:
        st.link_button("📤 Share on WhatsApp", build_whatsapp_link(text), use_container_width=True)
    with col2:
        st.download_button(
            "💾 Download (.txt)",
            data=text,
            file_name=f"{estimation.number}.txt",
            mime="text/plain",
            use_container_width=True
        )


def render_enquiry():
    """Enquiry & Quotation tab."""
    st.subheader("🧾 Enquiry & Quotation")
    render_cart()
    if get_cart().is_empty:
        return
    st.markdown("---")
    render_customer_form()
    render_estimation()
