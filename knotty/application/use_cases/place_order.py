"""Place Order Use Case"""

import logging

from ...domain.entities.order import Order, OrderItem
from ...domain.exceptions import InsufficientStockError, NotFoundError
from ...domain.value_objects.entity_ids import ProductId, UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.order_dtos import PlaceOrderDTO, OrderResponseDTO
from ...core.logger import log_domain_events


class PlaceOrderUseCase:
    """Use case for placing a new order.

    Prices are captured from the catalog at placement. Stock for every line is
    taken with a conditional decrement inside the same transaction as the order
    insert, so a short line rolls back the decrements of the lines before it.
    """

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: PlaceOrderDTO, user_id: UserId) -> OrderResponseDTO:
        """Execute the place order use case"""
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")
            user.ensure_active()

            items = []
            for line in request.items:
                product_id = ProductId(line.product_id)
                product = await self.unit_of_work.products.get_by_id(product_id)
                if not product:
                    raise NotFoundError("Product not found")

                if not await self.unit_of_work.products.decrement_stock(product_id, line.quantity):
                    self.logger.info(
                        "Order rejected for user %s: %s has %d left, %d requested",
                        user_id, product_id, product.stock, line.quantity,
                    )
                    raise InsufficientStockError(f"Not enough stock for {product.name}")

                items.append(OrderItem(
                    product_id=product_id,
                    quantity=line.quantity,
                    unit_price=product.price,
                ))

            order = Order.place(user_id, items, request.shipping_address)
            await self.unit_of_work.orders.add(order)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, order.get_events())
        return OrderResponseDTO.from_entity(order)
