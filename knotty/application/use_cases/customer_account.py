"""Wishlist and shipping address use cases"""

import logging
from typing import List

from ...domain.exceptions import NotFoundError, ValidationError
from ...domain.value_objects.entity_ids import ProductId, UserId
from ...domain.value_objects.shipping_address import ShippingAddress
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.product_dtos import ProductResponseDTO
from ...application.dtos.user_dtos import ShippingAddressDto, ShippingAddressesResponse, WishlistResponse


class GetWishlistUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId) -> List[ProductResponseDTO]:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            products = await self.unit_of_work.products.get_many(user.wishlist)
            by_id = {p.id: p for p in products}
            return [ProductResponseDTO.from_entity(by_id[pid]) for pid in user.wishlist if pid in by_id]


class AddToWishlistUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, user_id: UserId, product_id: ProductId) -> WishlistResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            if not await self.unit_of_work.products.get_by_id(product_id):
                raise NotFoundError("Product not found")

            if user.add_to_wishlist(product_id):
                await self.unit_of_work.users.update(user)
                await self.unit_of_work.commit()
                self.logger.info("User %s added product %s to wishlist", user.id, product_id)

        return WishlistResponse(
            message="Product added to wishlist",
            wishlist=[p.value for p in user.wishlist],
        )


class RemoveFromWishlistUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, product_id: ProductId) -> WishlistResponse:
        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            user.remove_from_wishlist(product_id)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        return WishlistResponse(
            message="Product removed from wishlist",
            wishlist=[p.value for p in user.wishlist],
        )


class AddShippingAddressUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, user_id: UserId, request: ShippingAddressDto) -> ShippingAddressesResponse:
        try:
            address = ShippingAddress(
                address=request.address,
                city=request.city,
                state=request.state,
                zip_code=request.zip_code,
                country=request.country,
                is_default=request.is_default,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        async with self.unit_of_work:
            user = await self.unit_of_work.users.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")

            user.add_shipping_address(address)
            await self.unit_of_work.users.update(user)
            await self.unit_of_work.commit()

        return ShippingAddressesResponse(
            shipping_addresses=[ShippingAddressDto.from_value(a) for a in user.shipping_addresses],
        )
