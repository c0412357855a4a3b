"""
Analytics Tools: dashboard figures computed from the resident catalog.
"""

from typing import Dict, List

import pandas as pd

from loomspares.models import Product

SUMMARY_COLUMNS = ["category", "products", "units", "value"]


def products_to_dataframe(products: List[Product]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "id": p.id,
                "code": p.code,
                "name": p.name,
                "category": p.category.value,
                "price": p.price,
                "stock": p.stock,
            }
            for p in products
        ],
        columns=["id", "code", "name", "category", "price", "stock"],
    )


def get_inventory_stats(products: List[Product], message_count: int,
                        low_stock_threshold: int) -> Dict:
    """Headline metrics for the analytics tab."""
    return {
        "total_products": len(products),
        "total_stock_value": sum(p.price * p.stock for p in products),
        "total_units": sum(p.stock for p in products),
        "low_stock_count": sum(1 for p in products if p.is_low_stock(low_stock_threshold)),
        "message_count": message_count,
    }


def get_category_summary(products: List[Product]) -> pd.DataFrame:
    """Per-category product count, units in stock and stock value, highest value first."""
    df = products_to_dataframe(products)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df["value"] = df["price"] * df["stock"]
    summary = (
        df.groupby("category", sort=False)
        .agg(products=("id", "count"), units=("stock", "sum"), value=("value", "sum"))
        .reset_index()
        .sort_values("value", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
    return summary[SUMMARY_COLUMNS]
