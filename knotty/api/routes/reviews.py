"""Product review routes, mounted under /products"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_current_principal, get_request_logger, get_unit_of_work, principal_user_id
from ...application.dtos.review_dtos import AverageRatingDTO, CreateReviewDTO, ReviewResponseDTO
from ...application.use_cases.product_reviews import (
    CreateReviewUseCase,
    GetAverageRatingUseCase,
    ListProductReviewsUseCase,
)
from ...core.security import SessionClaims
from ...domain.value_objects.entity_ids import ProductId

router = APIRouter()


@router.get("/{product_id}/reviews", response_model=List[ReviewResponseDTO])
async def list_reviews(
    product_id: UUID,
    unit_of_work = Depends(get_unit_of_work)
):
    return await ListProductReviewsUseCase(unit_of_work).execute(ProductId(product_id))


@router.get("/{product_id}/reviews/average", response_model=AverageRatingDTO)
async def get_average_rating(
    product_id: UUID,
    unit_of_work = Depends(get_unit_of_work)
):
    return await GetAverageRatingUseCase(unit_of_work).execute(ProductId(product_id))


@router.post("/{product_id}/reviews", response_model=ReviewResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_review(
    product_id: UUID,
    request: CreateReviewDTO,
    principal: SessionClaims = Depends(get_current_principal),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    """Post a review; only verified buyers may do so"""
    use_case = CreateReviewUseCase(unit_of_work, logger)
    return await use_case.execute(ProductId(product_id), principal_user_id(principal), request)
