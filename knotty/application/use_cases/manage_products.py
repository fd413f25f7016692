"""Catalog use cases"""

import logging
from typing import List

from ...domain.entities.product import Product
from ...domain.exceptions import NotFoundError
from ...domain.value_objects.entity_ids import ProductId
from ...domain.value_objects.money import Money
from ...domain.repositories.product_repository import ProductFilter
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.product_dtos import ProductCreateDTO, ProductResponseDTO, ProductUpdateDTO


class ListProductsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, filters: ProductFilter, skip: int = 0, limit: int = 100) -> List[ProductResponseDTO]:
        async with self.unit_of_work:
            products = await self.unit_of_work.products.find(filters, skip=skip, limit=limit)
            return [ProductResponseDTO.from_entity(p) for p in products]


class GetProductUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, product_id: ProductId) -> ProductResponseDTO:
        async with self.unit_of_work:
            product = await self.unit_of_work.products.get_by_id(product_id)
            if not product:
                raise NotFoundError("Product not found")
            return ProductResponseDTO.from_entity(product)


class CreateProductUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, request: ProductCreateDTO) -> ProductResponseDTO:
        product = Product.create(
            name=request.name,
            description=request.description,
            price=Money(request.price),
            color=request.color,
            size=request.size,
            shape=request.shape,
            images=list(request.images),
            stock=request.stock,
        )

        async with self.unit_of_work:
            await self.unit_of_work.products.add(product)
            await self.unit_of_work.commit()

        self.logger.info("Product %s created", product.id)
        return ProductResponseDTO.from_entity(product)


class UpdateProductUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, product_id: ProductId, request: ProductUpdateDTO) -> ProductResponseDTO:
        async with self.unit_of_work:
            product = await self.unit_of_work.products.get_by_id(product_id)
            if not product:
                raise NotFoundError("Product not found")

            product.update(
                name=request.name,
                description=request.description,
                price=Money(request.price) if request.price is not None else None,
                color=request.color,
                size=request.size,
                shape=request.shape,
                images=request.images,
                stock=request.stock,
            )
            await self.unit_of_work.products.update(product)
            await self.unit_of_work.commit()

        self.logger.info("Product %s updated", product.id)
        return ProductResponseDTO.from_entity(product)


class DeleteProductUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, logger=None):
        self.unit_of_work = unit_of_work
        self.logger = logger or logging.getLogger(__name__)

    async def execute(self, product_id: ProductId) -> None:
        async with self.unit_of_work:
            if not await self.unit_of_work.products.delete(product_id):
                raise NotFoundError("Product not found")
            await self.unit_of_work.commit()

        self.logger.info("Product %s deleted", product_id)
