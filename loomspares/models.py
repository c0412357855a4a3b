"""
Data models for the loom spares catalog, chat transcript and quotations.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    """Loom manufacturer a spare belongs to."""
    TOYOTA = "TOYOTA"
    PICANOL = "PICANOL"
    TSUDAKOMA = "TSUDAKOMA"
    DORNIER = "DORNIER"
    UNIVERSAL = "UNIVERSAL"


CATEGORIES = [c.value for c in Category]


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ProductNotFoundError(KeyError):
    """Raised when a product id is not in the catalog."""


class Product(BaseModel):
    id: str
    code: str = ""
    name: str = Field(..., min_length=1)
    category: Category
    price: float = Field(..., ge=0, allow_inf_nan=False)
    stock: int = Field(..., ge=0)
    description: str = ""
    image: Optional[str] = None
    compatibility: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    specifications: Dict[str, str] = Field(default_factory=dict)

    @field_validator("name", "code", "description", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("category", mode="before")
    @classmethod
    def _upper_category(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def is_low_stock(self, threshold: int) -> bool:
        return self.stock <= threshold


class Message(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    recommendations: List[Product] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)


class EnquiryItem(BaseModel):
    product: Product
    quantity: int = Field(1, ge=1)

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class CustomerDetails(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    company: str = ""
    email: str = ""
    address: str = ""
    notes: str = ""

    @field_validator("name", "phone", "company", "email", "address", "notes", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class Estimation(BaseModel):
    number: str
    customer: CustomerDetails
    items: List[EnquiryItem] = Field(..., min_length=1)
    created_at: datetime
    valid_until: datetime

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self.items)

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)
