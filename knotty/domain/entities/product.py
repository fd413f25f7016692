"""Product entity"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..value_objects.entity_ids import ProductId
from ..value_objects.money import Money
from ..exceptions import ValidationError


@dataclass
class Product:
    id: ProductId
    name: str
    description: str
    price: Money
    color: str
    size: str
    shape: str
    images: List[str] = field(default_factory=list)
    stock: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self):
        for attr in ("name", "description", "color", "size", "shape"):
            if not getattr(self, attr) or not str(getattr(self, attr)).strip():
                raise ValidationError(f"Product {attr} is required")
        if self.stock is None or self.stock < 0:
            raise ValidationError("Stock cannot be negative")

    @classmethod
    def create(cls, **fields) -> 'Product':
        return cls(id=ProductId.generate(), **fields)

    def update(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[Money] = None,
        color: Optional[str] = None,
        size: Optional[str] = None,
        shape: Optional[str] = None,
        images: Optional[List[str]] = None,
        stock: Optional[int] = None,
    ) -> None:
        """Partial update; omitted fields are left alone"""
        changes = {
            "name": name,
            "description": description,
            "color": color,
            "size": size,
            "shape": shape,
        }
        for attr, value in changes.items():
            if value is None:
                continue
            if not value.strip():
                raise ValidationError(f"Product {attr} is required")
            setattr(self, attr, value)

        if price is not None:
            self.price = price
        if images is not None:
            self.images = list(images)
        if stock is not None:
            if stock < 0:
                raise ValidationError("Stock cannot be negative")
            self.stock = stock
        self.updated_at = datetime.utcnow()

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity
