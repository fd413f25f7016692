"""Review repository implementation"""

from typing import Optional, List, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.entities.review import Review
from ...domain.exceptions import ConflictError
from ...domain.repositories.review_repository import IReviewRepository
from ...domain.value_objects.entity_ids import ProductId, ReviewId, UserId
from ..orm.review_model import ReviewModel


class ReviewRepositoryImpl(IReviewRepository):

    def __init__(self, session: Session):
        self.session = session

    async def get_by_product(self, product_id: ProductId) -> List[Review]:
        models = (
            self.session.query(ReviewModel)
            .filter(ReviewModel.product_id == product_id.value)
            .order_by(ReviewModel.created_at.desc())
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def get_by_user_and_product(self, user_id: UserId, product_id: ProductId) -> Optional[Review]:
        model = (
            self.session.query(ReviewModel)
            .filter(ReviewModel.user_id == user_id.value, ReviewModel.product_id == product_id.value)
            .first()
        )
        return self._map_to_entity(model) if model else None

    async def add(self, review: Review) -> Review:
        model = ReviewModel(
            id=review.id.value,
            product_id=review.product_id.value,
            user_id=review.user_id.value,
            rating=review.rating,
            comment=review.comment,
            photos=list(review.photos),
            is_verified_buyer=review.is_verified_buyer,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )
        self.session.add(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError("You have already reviewed this product") from e
        return review

    async def average_rating(self, product_id: ProductId) -> Tuple[float, int]:
        average, count = (
            self.session.query(func.avg(ReviewModel.rating), func.count(ReviewModel.id))
            .filter(ReviewModel.product_id == product_id.value)
            .one()
        )
        if not count:
            return 0.0, 0
        return round(float(average), 2), count

    def _map_to_entity(self, model: ReviewModel) -> Review:
        return Review(
            id=ReviewId(model.id),
            product_id=ProductId(model.product_id),
            user_id=UserId(model.user_id),
            rating=model.rating,
            comment=model.comment,
            photos=list(model.photos or []),
            is_verified_buyer=model.is_verified_buyer,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
