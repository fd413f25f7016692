"""Infrastructure ORM Models"""

from .user_model import UserModel, ShippingAddressModel, user_wishlist
from .product_model import ProductModel
from .order_model import OrderModel, OrderItemModel
from .review_model import ReviewModel

__all__ = [
    'UserModel',
    'ShippingAddressModel',
    'user_wishlist',
    'ProductModel',
    'OrderModel',
    'OrderItemModel',
    'ReviewModel',
]
