"""
Cart Tools: the enquiry cart a visitor fills before asking for an estimation.
"""

from typing import List, Optional

from loomspares.models import EnquiryItem, Product


class EnquiryCart:
    """Cart lines keyed by product id, one line per product."""

    def __init__(self):
        self._items: List[EnquiryItem] = []

    @property
    def items(self) -> List[EnquiryItem]:
        return list(self._items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self._items)

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: str) -> Optional[EnquiryItem]:
        return next((i for i in self._items if i.product.id == product_id), None)

    def add_item(self, product: Product, quantity: int = 1) -> EnquiryItem:
        """Add a product, merging with an existing line for the same product."""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        existing = self.get_item(product.id)
        if existing:
            existing.quantity += quantity
            # Refresh the snapshot in case the product was edited
            existing.product = product
            return existing

        item = EnquiryItem(product=product, quantity=quantity)
        self._items.append(item)
        return item

    def update_quantity(self, product_id: str, quantity: int) -> Optional[EnquiryItem]:
        """Set a line's quantity. Zero or less removes the line."""
        item = self.get_item(product_id)
        if item is None:
            return None
        if quantity <= 0:
            self.remove_item(product_id)
            return None
        item.quantity = quantity
        return item

    def remove_item(self, product_id: str) -> bool:
        item = self.get_item(product_id)
        if item is None:
            return False
        self._items.remove(item)
        return True

    def sync_products(self, products: List[Product]):
        """Drop lines for deleted products and refresh snapshots of edited ones."""
        by_id = {p.id: p for p in products}
        self._items = [i for i in self._items if i.product.id in by_id]
        for item in self._items:
            item.product = by_id[item.product.id]

    def clear(self):
        self._items = []
