"""
Quotation Tools: turn the enquiry cart into an estimation and a shareable text block.
"""

from datetime import datetime, timedelta
from typing import Optional
from urllib.parse import quote

from loomspares.config import Config
from loomspares.models import CustomerDetails, Estimation
from loomspares.tools.cart_tools import EnquiryCart
from loomspares.tools.formatting import format_price

WHATSAPP_BASE_URL = "https://wa.me/"

ESTIMATION_TERMS = [
    "Prices are in Indian Rupees and exclude GST and freight.",
    "Delivery in 3-5 business days from order confirmation.",
    "All spares carry a 1-year warranty against manufacturing defects.",
]


def build_estimation(cart: EnquiryCart, customer: CustomerDetails,
                     validity_days: Optional[int] = None,
                     now: Optional[datetime] = None) -> Estimation:
    """
    Create an estimation document from the cart contents.

    Args:
        cart: Enquiry cart, must not be empty
        customer: Validated customer contact details
        validity_days: Days until the estimation expires (defaults to config)
        now: Creation time, mainly for tests

    Raises:
        ValueError: if the cart is empty or validity_days is not positive
    """
    if cart.is_empty:
        raise ValueError("Add at least one product to the enquiry before generating an estimation")

    if validity_days is None:
        validity_days = Config.QUOTATION_VALIDITY_DAYS
    if validity_days <= 0:
        raise ValueError("Estimation validity must be at least one day")

    created_at = now or datetime.now()
    return Estimation(
        number=f"EST-{created_at:%Y%m%d-%H%M%S}",
        customer=customer,
        items=[item.model_copy(deep=True) for item in cart.items],
        created_at=created_at,
        valid_until=created_at + timedelta(days=validity_days),
    )


def format_estimation_text(estimation: Estimation) -> str:
    """Plain-text estimation suitable for WhatsApp (uses *bold* markers)."""
    customer = estimation.customer
    lines = [
        f"*{Config.COMPANY_NAME} - ESTIMATION*",
        f"Estimation No: {estimation.number}",
        f"Date: {estimation.created_at:%d %b %Y}",
        f"Valid Until: {estimation.valid_until:%d %b %Y}",
        "",
        f"Customer: {customer.name}",
        f"Phone: {customer.phone}",
    ]
    if customer.company:
        lines.append(f"Company: {customer.company}")
    if customer.email:
        lines.append(f"Email: {customer.email}")
    if customer.address:
        lines.append(f"Address: {customer.address}")

    lines.extend(["", "*Items:*"])
    for i, item in enumerate(estimation.items, 1):
        product = item.product
        lines.append(f"{i}. {product.name} ({product.code})")
        lines.append(
            f"   {item.quantity} x {format_price(product.price)} = {format_price(item.line_total)}"
        )

    lines.extend([
        "",
        f"Total Items: {estimation.item_count}",
        f"*TOTAL: {format_price(estimation.total)}*",
    ])

    if customer.notes:
        lines.extend(["", f"Notes: {customer.notes}"])

    lines.extend(["", "Terms:"])
    lines.extend(f"- {term}" for term in ESTIMATION_TERMS)
    return "\n".join(lines)


def build_whatsapp_link(text: str, phone: Optional[str] = None) -> str:
    """wa.me deep link with prefilled text; without a number WhatsApp asks for a contact."""
    if phone is None:
        phone = Config.WHATSAPP_NUMBER
    digits = "".join(ch for ch in phone if ch.isdigit())
    return f"{WHATSAPP_BASE_URL}{digits}?text={quote(text, safe='')}"
