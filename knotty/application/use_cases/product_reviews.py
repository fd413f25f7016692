"""Product review use cases"""

import logging
from typing import List

from ...domain.entities.review import Review
from ...domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from ...domain.value_objects.entity_ids import ProductId, UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.review_dtos import AverageRatingDTO, CreateReviewDTO, ReviewResponseDTO


class ListProductReviewsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, product_id: ProductId) -> List[ReviewResponseDTO]:
        async with self.unit_of_work:
            reviews = await self.unit_of_work.reviews.get_by_product(product_id)
            return [ReviewResponseDTO.from_entity(r) for r in reviews]


class GetAverageRatingUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, product_id: ProductId) -> AverageRatingDTO:
        async with self.unit_of_work:
            average, count = await self.unit_of_work.reviews.average_rating(product_id)
            return AverageRatingDTO(avg_rating=average, count=count)


class CreateReviewUseCase:
    """Only customers who received the product may review it, once"""

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, product_id: ProductId, user_id: UserId, request: CreateReviewDTO) -> ReviewResponseDTO:
        async with self.unit_of_work:
            if not await self.unit_of_work.products.get_by_id(product_id):
                raise NotFoundError("Product not found")

            if not await self.unit_of_work.orders.has_delivered_order_with_product(user_id, product_id):
                raise ForbiddenError("Only verified buyers can post reviews.")

            if await self.unit_of_work.reviews.get_by_user_and_product(user_id, product_id):
                raise ConflictError("You have already reviewed this product.")

            review = Review.create(
                product_id=product_id,
                user_id=user_id,
                rating=request.rating,
                comment=request.comment,
                photos=request.photos,
                is_verified_buyer=True,
            )
            await self.unit_of_work.reviews.add(review)
            await self.unit_of_work.commit()

        self.logger.info("Review %s posted by user %s for product %s", review.id, user_id, product_id)
        return ReviewResponseDTO.from_entity(review)
