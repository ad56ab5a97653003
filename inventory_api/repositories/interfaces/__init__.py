from .user import IUserRepository
from .product import IProductRepository

__all__ = ["IUserRepository", "IProductRepository"]
