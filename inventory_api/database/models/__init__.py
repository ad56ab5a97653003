from .user import User
from .product import Product

__all__ = ["User", "Product"]
