from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from inventory_api.database import models
from inventory_api.repositories.interfaces import IProductRepository
from inventory_api.repositories.exceptions import DuplicateEntryError

class SqlalchemyProductRepository(IProductRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, product_model: models.Product) -> models.Product:
        self.db.add(product_model)
        self._commit()
        self.db.refresh(product_model)
        return product_model

    def find_by_id(self, product_id: str) -> Optional[models.Product]:
        return self.db.query(models.Product).filter(models.Product.id == product_id).first()

    def find_by_id_with_owner(self, product_id: str) -> Optional[models.Product]:
        return (
            self.db.query(models.Product)
            .options(joinedload(models.Product.owner))
            .filter(models.Product.id == product_id)
            .first()
        )

    def find_by_owner_and_name(self, owner_id: str, name: str) -> Optional[models.Product]:
        return self.db.query(models.Product).filter(
            models.Product.owner_id == owner_id,
            models.Product.name == name
        ).first()

    def count(self) -> int:
        return self.db.query(models.Product).count()

    def list_paginated_with_owner(self, offset: int, limit: int) -> List[models.Product]:
        return (
            self.db.query(models.Product)
            .options(joinedload(models.Product.owner))
            .order_by(models.Product.created_at.desc(), models.Product.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def update(self, product: models.Product) -> models.Product:
        self._commit()
        self.db.refresh(product)
        return product

    def delete(self, product: models.Product) -> bool:
        if product:
            self.db.delete(product)
            self.db.commit()
            return True
        return False

    def find_owned_ids(self, owner_id: str, product_ids: List[str]) -> List[str]:
        if not product_ids:
            return []
        rows = self.db.query(models.Product.id).filter(
            models.Product.id.in_(product_ids),
            models.Product.owner_id == owner_id
        ).all()
        return [row[0] for row in rows]

    def delete_by_ids(self, owner_id: str, product_ids: List[str]) -> int:
        if not product_ids:
            return 0
        deleted = self.db.query(models.Product).filter(
            models.Product.id.in_(product_ids),
            models.Product.owner_id == owner_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def delete_by_owner(self, owner_id: str) -> int:
        deleted = self.db.query(models.Product).filter(
            models.Product.owner_id == owner_id
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntryError(str(e.orig)) from e
