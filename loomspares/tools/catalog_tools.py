"""
Catalog Tools: in-memory product catalog for one page session.
Used by the assistant, the product management page and the analytics tab.
"""

import re
import time
from typing import Any, Dict, List, Optional

from loomspares.models import CATEGORIES, Category, Product, ProductNotFoundError

# Manufacturer and loom-model synonym mapping
CATEGORY_SYNONYMS = {
    "toyota": "TOYOTA",
    "jat": "TOYOTA",
    "jat710": "TOYOTA",
    "jat810": "TOYOTA",

    "picanol": "PICANOL",
    "omniplus": "PICANOL",
    "omni plus": "PICANOL",
    "gtmax": "PICANOL",
    "optimax": "PICANOL",

    "tsudakoma": "TSUDAKOMA",
    "tsudakoma zax": "TSUDAKOMA",
    "zax": "TSUDAKOMA",
    "zw": "TSUDAKOMA",

    "dornier": "DORNIER",
    "rapier": "DORNIER",

    "universal": "UNIVERSAL",
    "all looms": "UNIVERSAL",
    "any loom": "UNIVERSAL",
}

SEED_PRODUCTS = [
    {
        "id": "1",
        "code": "RKM-TOY-001",
        "name": "Toyota Air Jet Reed",
        "category": "TOYOTA",
        "price": 2500,
        "stock": 45,
        "description": "High-quality stainless steel reed for Toyota air jet looms",
        "compatibility": ["JAT 710", "JAT 810"],
        "tags": ["reed", "air jet"],
        "specifications": {"Material": "Stainless steel", "Dents": "80/inch"},
    },
    {
        "id": "2",
        "code": "RKM-TOY-002",
        "name": "Toyota Main Nozzle",
        "category": "TOYOTA",
        "price": 1850,
        "stock": 18,
        "description": "Replacement main nozzle for consistent weft insertion",
        "compatibility": ["JAT 710"],
        "tags": ["nozzle", "air jet"],
        "specifications": {"Bore": "3.2 mm"},
    },
    {
        "id": "3",
        "code": "RKM-PIC-001",
        "name": "Picanol Heddle Hooks",
        "category": "PICANOL",
        "price": 150,
        "stock": 120,
        "description": "Durable heddle hooks for textile production",
        "compatibility": ["OmniPlus 800", "GTMax"],
        "tags": ["hooks", "heddle"],
        "specifications": {"Finish": "Nickel plated"},
    },
    {
        "id": "4",
        "code": "RKM-TSU-001",
        "name": "Tsudakoma Loom Temple",
        "category": "TSUDAKOMA",
        "price": 3200,
        "stock": 25,
        "description": "Adjustable temple for fabric weaving",
        "compatibility": ["ZAX 9100", "ZW 408"],
        "tags": ["temple"],
        "specifications": {"Rings": "12", "Width": "Adjustable"},
    },
    {
        "id": "5",
        "code": "RKM-DOR-001",
        "name": "Dornier Rapier Gripper",
        "category": "DORNIER",
        "price": 4750,
        "stock": 12,
        "description": "Precision rapier gripper head for Dornier rapier looms",
        "compatibility": ["P1", "P2"],
        "tags": ["rapier", "gripper"],
        "specifications": {"Side": "Left / Right"},
    },
    {
        "id": "6",
        "code": "RKM-UNI-001",
        "name": "Shuttle Loom Picker",
        "category": "UNIVERSAL",
        "price": 95,
        "stock": 300,
        "description": "Buffalo hide picker suitable for most shuttle looms",
        "compatibility": ["Shuttle looms"],
        "tags": ["picker", "shuttle"],
        "specifications": {"Material": "Buffalo hide"},
    },
]


class CatalogTools:
    """Product list with create / read / update / delete and search."""

    def __init__(self, products: Optional[List[Product]] = None):
        self.products: List[Product] = list(products or [])

    def map_category(self, query: str) -> Optional[str]:
        """Map user query terms to a category literal."""
        query_lower = query.lower()
        for category in CATEGORIES:
            if category.lower() in query_lower:
                return category
        for synonym in sorted(CATEGORY_SYNONYMS, key=len, reverse=True):
            if re.search(rf"\b{re.escape(synonym)}\b", query_lower):
                return CATEGORY_SYNONYMS[synonym]
        return None

    def list_products(self) -> List[Product]:
        return list(self.products)

    def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def get_product_by_code(self, code: str) -> Optional[Product]:
        code = code.strip().lower()
        return next((p for p in self.products if p.code.lower() == code), None)

    def get_products_by_category(self, category: str) -> List[Product]:
        category = Category(category.upper())
        return [p for p in self.products if p.category == category]

    def get_all_categories(self) -> List[str]:
        """Categories that currently have at least one product."""
        present = {p.category.value for p in self.products}
        return [c for c in CATEGORIES if c in present]

    def search_products(self, search_term: str, category: Optional[str] = None) -> List[Product]:
        """
        Case-insensitive partial match on name, code, category, tags and compatibility.
        Results keep catalog order; `category` narrows them to one category.
        """
        term = search_term.strip().lower()
        products = self.get_products_by_category(category) if category else self.list_products()
        if not term:
            return products

        def matches(product: Product) -> bool:
            fields = [product.name, product.code, product.category.value]
            fields.extend(product.tags)
            fields.extend(product.compatibility)
            return any(term in field.lower() for field in fields)

        return [p for p in products if matches(p)]

    def get_low_stock_products(self, threshold: int) -> List[Product]:
        return [p for p in self.products if p.is_low_stock(threshold)]

    def add_product(self, data: Dict[str, Any]) -> Product:
        """Validate and append a product. Raises pydantic.ValidationError on bad input."""
        data = dict(data)
        if not data.get("id") or self.get_product_by_id(str(data["id"])):
            data["id"] = self._generate_id()
        if not str(data.get("code") or "").strip():
            data["code"] = self._generate_code(str(data.get("category", "")))

        product = Product(**data)
        self.products.append(product)
        return product

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Product:
        """Replace fields of an existing product, keeping its id."""
        for index, product in enumerate(self.products):
            if product.id == product_id:
                merged = product.model_dump()
                merged.update(changes)
                merged["id"] = product_id
                updated = Product(**merged)
                self.products[index] = updated
                return updated
        raise ProductNotFoundError(product_id)

    def delete_product(self, product_id: str) -> Product:
        product = self.get_product_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        self.products.remove(product)
        return product

    def _generate_id(self) -> str:
        candidate = int(time.time() * 1000)
        existing = {p.id for p in self.products}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def _generate_code(self, category: str) -> str:
        prefix = category.strip().upper()[:3] or "GEN"
        pattern = re.compile(rf"^RKM-{re.escape(prefix)}-(\d+)$")
        suffixes = [
            int(match.group(1))
            for match in (pattern.match(p.code.upper()) for p in self.products)
            if match
        ]
        return f"RKM-{prefix}-{max(suffixes, default=0) + 1:03d}"


def create_catalog(seed: bool = True) -> CatalogTools:
    """Build a fresh catalog for a new session, optionally with the seed spares."""
    products = [Product(**row) for row in SEED_PRODUCTS] if seed else []
    return CatalogTools(products)
