"""Order repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.order import Order
from ..value_objects.entity_ids import OrderId, ProductId, UserId


class IOrderRepository(ABC):

    @abstractmethod
    async def get_by_id(self, order_id: OrderId) -> Optional[Order]:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UserId, limit: Optional[int] = None) -> List[Order]:
        pass

    @abstractmethod
    async def get_all(self, skip: int = 0, limit: int = 100) -> List[Order]:
        pass

    @abstractmethod
    async def add(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def update(self, order: Order) -> Order:
        pass

    @abstractmethod
    async def has_delivered_order_with_product(self, user_id: UserId, product_id: ProductId) -> bool:
        pass
