"""Review repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Tuple

from ..entities.review import Review
from ..value_objects.entity_ids import ProductId, UserId


class IReviewRepository(ABC):

    @abstractmethod
    async def get_by_product(self, product_id: ProductId) -> List[Review]:
        pass

    @abstractmethod
    async def get_by_user_and_product(self, user_id: UserId, product_id: ProductId) -> Optional[Review]:
        pass

    @abstractmethod
    async def add(self, review: Review) -> Review:
        pass

    @abstractmethod
    async def average_rating(self, product_id: ProductId) -> Tuple[float, int]:
        """(average, count); (0, 0) when the product has no reviews"""
        pass
