"""Order routes"""

from fastapi import APIRouter, Depends, Query, status
from typing import List
from uuid import UUID

from ...application.use_cases.place_order import PlaceOrderUseCase
from ...application.use_cases.manage_orders import (
    ListAllOrdersUseCase,
    ListUserOrdersUseCase,
    UpdateOrderStatusUseCase,
)
from ...application.dtos.order_dtos import OrderResponseDTO, PlaceOrderDTO, UpdateOrderStatusDTO
from ...api.dependencies import (
    get_current_admin,
    get_current_customer,
    get_request_logger,
    get_unit_of_work,
    principal_user_id,
)
from ...core.security import SessionClaims
from ...domain.value_objects.entity_ids import OrderId


router = APIRouter()


@router.post("", response_model=OrderResponseDTO, status_code=status.HTTP_201_CREATED)
async def place_order(
    order_data: PlaceOrderDTO,
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    """Place an order; stock is reserved for every line or for none"""
    use_case = PlaceOrderUseCase(unit_of_work, logger)
    return await use_case.execute(order_data, principal_user_id(principal))


@router.get("/my", response_model=List[OrderResponseDTO])
async def get_my_orders(
    principal: SessionClaims = Depends(get_current_customer),
    unit_of_work = Depends(get_unit_of_work)
):
    return await ListUserOrdersUseCase(unit_of_work).execute(principal_user_id(principal))


@router.get("", response_model=List[OrderResponseDTO])
async def get_all_orders(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work)
):
    return await ListAllOrdersUseCase(unit_of_work).execute(skip=skip, limit=limit)


@router.put("/{order_id}/status", response_model=OrderResponseDTO)
async def update_order_status(
    order_id: UUID,
    request: UpdateOrderStatusDTO,
    admin: SessionClaims = Depends(get_current_admin),
    unit_of_work = Depends(get_unit_of_work),
    logger = Depends(get_request_logger)
):
    use_case = UpdateOrderStatusUseCase(unit_of_work, logger)
    return await use_case.execute(OrderId(order_id), request.status)
