"""Order DTOs for API requests and responses"""

from pydantic import Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from .base import CamelModel
from ...domain.enums import OrderStatus


class OrderItemRequest(CamelModel):
    product_id: UUID
    quantity: int = Field(..., ge=1)


class PlaceOrderDTO(CamelModel):
    """Request DTO for placing an order"""
    items: List[OrderItemRequest] = Field(..., min_length=1)
    shipping_address: str = Field(..., min_length=1)


class OrderItemResponse(CamelModel):
    product_id: UUID
    quantity: int
    unit_price: float


class OrderResponseDTO(CamelModel):
    """Response DTO for order data"""
    id: UUID
    user_id: UUID
    items: List[OrderItemResponse]
    total: float
    currency: str
    shipping_address: str
    status: OrderStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, order):
        """Convert domain entity to DTO"""
        return cls(
            id=order.id.value,
            user_id=order.user_id.value,
            items=[
                OrderItemResponse(
                    product_id=item.product_id.value,
                    quantity=item.quantity,
                    unit_price=float(item.unit_price.amount),
                )
                for item in order.items
            ],
            total=float(order.total.amount),
            currency=order.total.currency,
            shipping_address=order.shipping_address,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class UpdateOrderStatusDTO(CamelModel):
    """Request DTO for moving an order through its lifecycle"""
    status: OrderStatus
