from shop_api.models.order import Order
from shop_api.models.product import Product
from shop_api.models.user import User

__all__ = [
    "User",
    "Product",
    "Order",
]
