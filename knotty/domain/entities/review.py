"""Review entity"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from ..value_objects.entity_ids import ProductId, ReviewId, UserId
from ..exceptions import ValidationError


@dataclass
class Review:
    id: ReviewId
    product_id: ProductId
    user_id: UserId
    rating: int
    comment: str
    photos: List[str] = field(default_factory=list)
    is_verified_buyer: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        product_id: ProductId,
        user_id: UserId,
        rating: int,
        comment: str,
        photos: List[str] = None,
        is_verified_buyer: bool = False,
    ) -> 'Review':
        if rating is None or not 1 <= rating <= 5:
            raise ValidationError("Rating must be between 1 and 5")
        if not comment or not comment.strip():
            raise ValidationError("Comment is required")
        return cls(
            id=ReviewId.generate(),
            product_id=product_id,
            user_id=user_id,
            rating=rating,
            comment=comment.strip(),
            photos=list(photos or []),
            is_verified_buyer=is_verified_buyer,
        )
