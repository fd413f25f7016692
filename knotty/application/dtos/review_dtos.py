"""Review DTOs"""

from pydantic import Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from .base import CamelModel


class CreateReviewDTO(CamelModel):
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=1)
    photos: List[str] = []


class ReviewResponseDTO(CamelModel):
    id: UUID
    product_id: UUID
    user_id: UUID
    rating: int
    comment: str
    photos: List[str]
    is_verified_buyer: bool
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, review):
        return cls(
            id=review.id.value,
            product_id=review.product_id.value,
            user_id=review.user_id.value,
            rating=review.rating,
            comment=review.comment,
            photos=list(review.photos),
            is_verified_buyer=review.is_verified_buyer,
            created_at=review.created_at,
        )


class AverageRatingDTO(CamelModel):
    avg_rating: float
    count: int
