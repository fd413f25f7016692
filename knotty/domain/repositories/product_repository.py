"""Product repository interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, List, Sequence

from ..entities.product import Product
from ..value_objects.entity_ids import ProductId


@dataclass(frozen=True)
class ProductFilter:
    color: Optional[str] = None
    size: Optional[str] = None
    shape: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None


class IProductRepository(ABC):

    @abstractmethod
    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_many(self, product_ids: Sequence[ProductId]) -> List[Product]:
        pass

    @abstractmethod
    async def find(self, filters: ProductFilter, skip: int = 0, limit: int = 100) -> List[Product]:
        pass

    @abstractmethod
    async def add(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def delete(self, product_id: ProductId) -> bool:
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: ProductId, quantity: int) -> bool:
        """Atomically take `quantity` units; False when stock is short"""
        pass
