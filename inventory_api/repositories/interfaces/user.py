from abc import ABC, abstractmethod
from typing import List, Optional
from inventory_api.database import models

class IUserRepository(ABC):
    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """
        새로운 사용자를 데이터베이스에 생성합니다.

        Raises:
            DuplicateEntryError: email 또는 username 유니크 제약 조건을 위반했을 때.
        """
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]:
        """이메일(정확히 일치)로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[models.User]:
        """사용자 이름으로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def count(self) -> int:
        """전체 사용자 수를 반환합니다."""
        pass

    @abstractmethod
    def list_paginated(self, offset: int, limit: int) -> List[models.User]:
        """생성 시각 내림차순으로 정렬된 사용자 목록의 일부를 조회합니다."""
        pass

    @abstractmethod
    def update(self, user: models.User) -> models.User:
        """
        변경된 사용자 정보를 저장합니다.

        Raises:
            DuplicateEntryError: 변경된 username이 유니크 제약 조건을 위반했을 때.
        """
        pass

    @abstractmethod
    def delete(self, user: models.User) -> bool:
        """특정 사용자를 데이터베이스에서 삭제합니다."""
        pass
