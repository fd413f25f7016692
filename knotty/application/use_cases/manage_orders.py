"""Order listing and status use cases"""

import logging
from typing import List

from ...domain.enums import OrderStatus
from ...domain.exceptions import NotFoundError
from ...domain.value_objects.entity_ids import OrderId, UserId
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.order_dtos import OrderResponseDTO
from ...core.logger import log_domain_events


class ListUserOrdersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> List[OrderResponseDTO]:
        """Orders of one customer, newest first"""
        async with self.unit_of_work:
            orders = await self.unit_of_work.orders.get_by_user_id(user_id)
            return [OrderResponseDTO.from_entity(o) for o in orders]


class ListAllOrdersUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, skip: int = 0, limit: int = 100) -> List[OrderResponseDTO]:
        async with self.unit_of_work:
            orders = await self.unit_of_work.orders.get_all(skip=skip, limit=limit)
            return [OrderResponseDTO.from_entity(o) for o in orders]


class UpdateOrderStatusUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, order_id: OrderId, status: OrderStatus) -> OrderResponseDTO:
        async with self.unit_of_work:
            order = await self.unit_of_work.orders.get_by_id(order_id)
            if not order:
                raise NotFoundError("Order not found")

            order.change_status(status)
            await self.unit_of_work.orders.update(order)
            await self.unit_of_work.commit()

        log_domain_events(self.logger, order.get_events())
        return OrderResponseDTO.from_entity(order)
