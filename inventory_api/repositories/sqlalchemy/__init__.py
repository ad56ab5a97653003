from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_product_repository import SqlalchemyProductRepository

__all__ = ["SqlalchemyUserRepository", "SqlalchemyProductRepository"]
