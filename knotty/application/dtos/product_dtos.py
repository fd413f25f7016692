"""Product DTOs"""

from pydantic import Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from .base import CamelModel


class ProductCreateDTO(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    color: str = Field(..., min_length=1)
    size: str = Field(..., min_length=1)
    shape: str = Field(..., min_length=1)
    images: List[str] = []
    stock: int = Field(0, ge=0)


class ProductUpdateDTO(CamelModel):
    """Partial update; omitted fields are unchanged"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    color: Optional[str] = None
    size: Optional[str] = None
    shape: Optional[str] = None
    images: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)


class ProductResponseDTO(CamelModel):
    id: UUID
    name: str
    description: str
    price: float
    currency: str
    color: str
    size: str
    shape: str
    images: List[str]
    stock: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, product):
        return cls(
            id=product.id.value,
            name=product.name,
            description=product.description,
            price=float(product.price.amount),
            currency=product.price.currency,
            color=product.color,
            size=product.size,
            shape=product.shape,
            images=list(product.images),
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
