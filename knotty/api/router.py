"""Main API router"""

from fastapi import APIRouter

from .routes import users, products, reviews, orders
from ..core.config import settings

# Main API router
api_router = APIRouter()

# Include all routes
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(reviews.router, prefix="/products", tags=["reviews"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])


@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.VERSION}
