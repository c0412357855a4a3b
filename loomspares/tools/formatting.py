"""
Formatting helpers shared by the assistant, the quotation text and the UI.
"""

from loomspares.config import Config


def format_price(amount: float, decimals: int = 2) -> str:
    """Format an amount in rupees, e.g. 2500 -> '₹2,500.00'."""
    return f"{Config.CURRENCY_SYMBOL}{amount:,.{decimals}f}"


def stock_label(stock: int, threshold: int = None) -> str:
    """In Stock / Low Stock / Out of Stock badge text."""
    if threshold is None:
        threshold = Config.LOW_STOCK_THRESHOLD
    if stock <= 0:
        return "Out of Stock"
    if stock <= threshold:
        return "Low Stock"
    return "In Stock"
