"""Product repository implementation using SQLAlchemy ORM"""

from typing import Optional, List, Sequence

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...domain.entities.product import Product
from ...domain.exceptions import ConflictError
from ...domain.repositories.product_repository import IProductRepository, ProductFilter
from ...domain.value_objects.entity_ids import ProductId
from ...domain.value_objects.money import Money
from ..orm.product_model import ProductModel


class ProductRepositoryImpl(IProductRepository):
    """Repository implementation for Product aggregate"""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, product_id: ProductId) -> Optional[Product]:
        """Get product by ID"""
        model = self.session.get(ProductModel, product_id.value)
        return self._map_to_entity(model) if model else None

    async def get_many(self, product_ids: Sequence[ProductId]) -> List[Product]:
        """Get products by IDs, silently skipping unknown ones"""
        ids = [p.value for p in product_ids]
        if not ids:
            return []
        models = self.session.query(ProductModel).filter(ProductModel.id.in_(ids)).all()
        return [self._map_to_entity(model) for model in models]

    async def find(self, filters: ProductFilter, skip: int = 0, limit: int = 100) -> List[Product]:
        """Catalog listing with optional attribute, price and text filters"""
        query = self.session.query(ProductModel)

        if filters.color:
            query = query.filter(func.lower(ProductModel.color) == filters.color.lower())
        if filters.size:
            query = query.filter(func.lower(ProductModel.size) == filters.size.lower())
        if filters.shape:
            query = query.filter(func.lower(ProductModel.shape) == filters.shape.lower())
        if filters.min_price is not None:
            query = query.filter(ProductModel.price >= Money(filters.min_price).to_cents())
        if filters.max_price is not None:
            query = query.filter(ProductModel.price <= Money(filters.max_price).to_cents())
        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            query = query.filter(or_(
                ProductModel.name.ilike(pattern),
                ProductModel.description.ilike(pattern),
            ))

        models = (
            query.order_by(ProductModel.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def add(self, product: Product) -> Product:
        """Add a new product"""
        model = ProductModel(id=product.id.value, created_at=product.created_at)
        self._update_model_from_entity(model, product)
        self.session.add(model)
        self.session.flush()
        return product

    async def update(self, product: Product) -> Product:
        """Update an existing product"""
        existing = self.session.get(ProductModel, product.id.value)
        if existing:
            self._update_model_from_entity(existing, product)
            self.session.flush()
        return product

    async def delete(self, product_id: ProductId) -> bool:
        """Delete product"""
        model = self.session.get(ProductModel, product_id.value)
        if not model:
            return False
        self.session.delete(model)
        try:
            self.session.flush()
        except IntegrityError as e:
            raise ConflictError("Product is referenced by existing orders and cannot be deleted") from e
        return True

    async def decrement_stock(self, product_id: ProductId, quantity: int) -> bool:
        # Conditional update so concurrent orders can never drive stock below zero
        result = self.session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id.value, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    def _update_model_from_entity(self, model: ProductModel, product: Product) -> None:
        """Update ORM model from domain entity"""
        model.name = product.name
        model.description = product.description
        model.price = product.price.to_cents()
        model.currency = product.price.currency
        model.color = product.color
        model.size = product.size
        model.shape = product.shape
        model.images = list(product.images)
        model.stock = product.stock
        model.updated_at = product.updated_at

    def _map_to_entity(self, model: ProductModel) -> Product:
        """Map ORM model to domain entity"""
        return Product(
            id=ProductId(model.id),
            name=model.name,
            description=model.description,
            price=Money.from_cents(model.price, model.currency),
            color=model.color,
            size=model.size,
            shape=model.shape,
            images=list(model.images or []),
            stock=model.stock,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
