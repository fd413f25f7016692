"""Catalog routes"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from ...api.dependencies import get_current_admin, get_request_logger, get_unit_of_work
from ...application.dtos.base import MessageResponse
from ...application.dtos.product_dtos import ProductCreateDTO, ProductResponseDTO, ProductUpdateDTO
from ...application.use_cases.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from ...core.security import SessionClaims
from ...domain.repositories.product_repository import ProductFilter
from ...domain.value_objects.entity_ids import ProductId

router = APIRouter()


@router.get("", response_model=List[ProductResponseDTO])
async def list_products(
    color: Optional[str] = None,
    size: Optional[str] = None,
    shape: Optional[str] = None,
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    search: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    unit_of_work = Depends(get_unit_of_work)
):
    """Public catalog with optional filters"""
    filters = ProductFilter(
        color=color,
        size=size,
        shape=shape,
        min_price=min_price,
        max_price=max_price,
        search=search,
    )
    return await ListProductsUseCase(unit_of_work).execute(filters, skip=skip, limit=limit)


@router.get("/{product_id}", response_model=ProductResponseDTO)
async def get_product(
    product_id: UUID,
    unit_of_work = Depends(get_unit_of_work)
):
    return await GetProductUseCase(unit_of_work).execute(ProductId(product_id))


@router.post("", response_model=ProductResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreateDTO,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    return await CreateProductUseCase(unit_of_work, logger).execute(request)


@router.put("/{product_id}", response_model=ProductResponseDTO)
async def update_product(
    product_id: UUID,
    request: ProductUpdateDTO,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    return await UpdateProductUseCase(unit_of_work, logger).execute(ProductId(product_id), request)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: UUID,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    await DeleteProductUseCase(unit_of_work, logger).execute(ProductId(product_id))
    return MessageResponse(message="Product deleted successfully")
