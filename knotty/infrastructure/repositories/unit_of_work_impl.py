"""Unit of Work implementation with proper async support"""

from sqlalchemy.orm import Session

from ...domain.repositories.unit_of_work import IUnitOfWork
from .user_repository_impl import UserRepositoryImpl
from .product_repository_impl import ProductRepositoryImpl
from .order_repository_impl import OrderRepositoryImpl
from .review_repository_impl import ReviewRepositoryImpl


class UnitOfWorkImpl(IUnitOfWork):

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepositoryImpl(session)
        self.products = ProductRepositoryImpl(session)
        self.orders = OrderRepositoryImpl(session)
        self.reviews = ReviewRepositoryImpl(session)
        self._committed = False

    async def __aenter__(self):
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Commit transaction"""
        try:
            self.session.commit()
            self._committed = True
        except Exception:
            self.session.rollback()
            raise

    async def rollback(self) -> None:
        """Rollback transaction"""
        self.session.rollback()
