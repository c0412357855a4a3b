import streamlit as st

st.set_page_config(
    page_title="RKM Loom Spares",
    page_icon="🧵",
    layout="wide",
    initial_sidebar_state="expanded"
)

from loomspares.config import Config
from loomspares.ui import (
    init_session_state,
    render_analytics,
    render_chat_interface,
    render_enquiry,
    render_product_management,
    render_sidebar,
)

# Validate once per server process
@st.cache_resource
def validate_config_once():
    Config.validate_config()
    return True

validate_config_once()

# Catalog, transcript and cart live only for this browser session
init_session_state()

def main():
    render_sidebar()

    st.markdown(f"# 🧵 {Config.COMPANY_NAME}")
    st.caption(Config.COMPANY_TAGLINE)

    cart_label = f"🧾 Enquiry & Quotation ({st.session_state.cart.item_count})"
    chat_tab, products_tab, enquiry_tab, analytics_tab = st.tabs(
        ["🤖 AI Assistant", "📦 Products", cart_label, "📊 Analytics"]
    )

    with chat_tab:
        render_chat_interface()
    with products_tab:
        render_product_management()
    with enquiry_tab:
        render_enquiry()
    with analytics_tab:
        render_analytics()

if __name__ == "__main__":
    main()
