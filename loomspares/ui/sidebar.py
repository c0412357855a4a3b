from datetime import datetime

import streamlit as st

from loomspares.config import Config
from loomspares.tools.formatting import format_price
from loomspares.ui.state import get_cart, get_catalog, reset_chat


@st.fragment(run_every=Config.STOCK_CHECK_INTERVAL)
def render_stock_monitor():
    """Recompute the low-stock flag from the resident catalog on a timer."""
    low_stock = get_catalog().get_low_stock_products(Config.LOW_STOCK_THRESHOLD)
    st.session_state.low_stock_alert = bool(low_stock)
    st.session_state.last_stock_check = datetime.now()

    if low_stock:
        st.warning(f"📉 {len(low_stock)} item(s) at or below {Config.LOW_STOCK_THRESHOLD} units")
        for product in low_stock:
            st.caption(f"• {product.name}: {product.stock} left")
    else:
        st.success("✅ All items well stocked")
    st.caption(f"Checked at {st.session_state.last_stock_check:%H:%M:%S}")


def render_sidebar():
    with st.sidebar:
        st.markdown(f"## 🧵 {Config.COMPANY_NAME}")
        st.caption(Config.COMPANY_TAGLINE)

        st.markdown("---")
        st.subheader("📦 Stock Monitor")
        render_stock_monitor()

        st.markdown("---")
        st.subheader("🛒 Your Enquiry")
        cart = get_cart()
        if cart.is_empty:
            st.caption("No items yet")
        else:
            st.metric("Items", cart.item_count)
            st.metric("Estimated total", format_price(cart.total, 0))

        st.markdown("---")
        if st.button("🗑️ Clear Chat", use_container_width=True):
            reset_chat()
            st.rerun()

        st.caption("🔧 Powered by: Streamlit, pandas, pydantic")
