"""
Analytics tab: inventory metrics and category overview.
"""

import streamlit as st

from loomspares.config import Config
from loomspares.tools.analytics_tools import get_category_summary, get_inventory_stats
from loomspares.tools.formatting import format_price
from loomspares.ui.state import get_catalog


def render_analytics():
    catalog = get_catalog()
    products = catalog.list_products()

    st.subheader("📊 Business Analytics")

    stats = get_inventory_stats(products, len(st.session_state.messages), Config.LOW_STOCK_THRESHOLD)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Products", stats["total_products"], help="Active in inventory")
    col2.metric("Total Stock Value", format_price(stats["total_stock_value"], 0),
                help="Current inventory value")
    col3.metric("Low Stock Items", stats["low_stock_count"], help="Require restocking")
    col4.metric("AI Interactions", stats["message_count"], help="Messages this session")

    st.markdown("#### 🏭 Product Categories Overview")
    summary = get_category_summary(products)
    if summary.empty:
        st.info("No products in the catalog yet.")
        return

    st.dataframe(
        summary,
        hide_index=True,
        use_container_width=True,
        column_config={
            "category": "Category",
            "products": "Products",
            "units": "Units",
            "value": st.column_config.NumberColumn("Total Value", format="₹%.0f"),
        }
    )
    st.bar_chart(summary.set_index("category")["value"])

    low_stock = catalog.get_low_stock_products(Config.LOW_STOCK_THRESHOLD)
    if low_stock:
        st.markdown("#### 📉 Low Stock")
        for product in low_stock:
            st.warning(f"{product.name} ({product.code}): {product.stock} units left")
