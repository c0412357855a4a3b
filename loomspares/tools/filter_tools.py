"""
Filter Tools: product filtering and sorting over the in-memory catalog.
Used by the assistant for price/category constraints and by the products page.
"""

from typing import List, Optional

from loomspares.models import Category, Product


class FilterTools:
    """Tools for filtering and sorting product lists."""

    def filter_by_price(self, products: List[Product], min_price: float = 0,
                        max_price: float = float('inf')) -> List[Product]:
        """Filter products by price range, cheapest first."""
        matched = [p for p in products if min_price <= p.price <= max_price]
        return self.sort_products_by_price(matched)

    def filter_by_category_and_price(self, products: List[Product], category: str,
                                     min_price: float = 0,
                                     max_price: float = float('inf')) -> List[Product]:
        """Filter products by category and price range."""
        category = Category(category.upper())
        in_category = [p for p in products if p.category == category]
        return self.filter_by_price(in_category, min_price, max_price)

    def filter_by_tag(self, products: List[Product], tag: str) -> List[Product]:
        tag = tag.strip().lower()
        return [p for p in products if any(t.lower() == tag for t in p.tags)]

    def filter_by_compatibility(self, products: List[Product], loom_model: str) -> List[Product]:
        """Products listing a compatible loom model containing the given text."""
        loom_model = loom_model.strip().lower()
        return [
            p for p in products
            if any(loom_model in model.lower() for model in p.compatibility)
        ]

    def filter_in_stock(self, products: List[Product]) -> List[Product]:
        return [p for p in products if p.stock > 0]

    def sort_products_by_price(self, products: List[Product],
                               ascending: bool = True) -> List[Product]:
        """Sort a list of products by price."""
        return sorted(products, key=lambda x: x.price, reverse=not ascending)

    def sort_products_by_stock(self, products: List[Product],
                               ascending: bool = True) -> List[Product]:
        """Sort products by stock (lowest first by default)."""
        return sorted(products, key=lambda x: x.stock, reverse=not ascending)

    def apply_multiple_filters(self, products: List[Product],
                               category: Optional[str] = None,
                               min_price: float = 0,
                               max_price: float = float('inf'),
                               tag: Optional[str] = None,
                               loom_model: Optional[str] = None,
                               in_stock_only: bool = False,
                               limit: int = 20) -> List[Product]:
        """
        Apply multiple filters at once.

        Args:
            products: Products to filter
            category: Category literal
            min_price: Minimum price
            max_price: Maximum price
            tag: Exact tag (case-insensitive)
            loom_model: Partial compatible loom model
            in_stock_only: Drop products with zero stock
            limit: Max results
        """
        results = list(products)
        if category:
            results = self.filter_by_category_and_price(results, category, min_price, max_price)
        else:
            results = self.filter_by_price(results, min_price, max_price)
        if tag:
            results = self.filter_by_tag(results, tag)
        if loom_model:
            results = self.filter_by_compatibility(results, loom_model)
        if in_stock_only:
            results = self.filter_in_stock(results)
        return results[:limit]

# Singleton instance
_filter_tools_instance = None

def get_filter_tools() -> FilterTools:
    """Get or create the FilterTools singleton instance."""
    global _filter_tools_instance
    if _filter_tools_instance is None:
        _filter_tools_instance = FilterTools()
    return _filter_tools_instance
