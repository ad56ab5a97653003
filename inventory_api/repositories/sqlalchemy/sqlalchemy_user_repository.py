from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from inventory_api.database import models
from inventory_api.repositories.interfaces import IUserRepository
from inventory_api.repositories.exceptions import DuplicateEntryError

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: models.User) -> models.User:
        self.db.add(user_model)
        self._commit()
        self.db.refresh(user_model)
        return user_model

    def find_by_id(self, user_id: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.email == email).first()

    def find_by_username(self, username: str) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.username == username).first()

    def count(self) -> int:
        return self.db.query(models.User).count()

    def list_paginated(self, offset: int, limit: int) -> List[models.User]:
        return (
            self.db.query(models.User)
            .order_by(models.User.created_at.desc(), models.User.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def update(self, user: models.User) -> models.User:
        self._commit()
        self.db.refresh(user)
        return user

    def delete(self, user: models.User) -> bool:
        if user:
            self.db.delete(user)
            self.db.commit()
            return True
        return False

    def _commit(self):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEntryError(str(e.orig)) from e
