from abc import ABC, abstractmethod
from typing import List, Optional
from inventory_api.database import models

class IProductRepository(ABC):
    @abstractmethod
    def create(self, product_model: models.Product) -> models.Product:
        """
        새로운 상품을 데이터베이스에 생성합니다.

        Raises:
            DuplicateEntryError: 같은 소유자에게 같은 이름의 상품이 이미 있을 때.
        """
        pass

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[models.Product]:
        """고유 ID로 특정 상품을 조회합니다."""
        pass

    @abstractmethod
    def find_by_id_with_owner(self, product_id: str) -> Optional[models.Product]:
        """고유 ID로 상품을 조회하며, 소유자 정보를 함께 로드합니다."""
        pass

    @abstractmethod
    def find_by_owner_and_name(self, owner_id: str, name: str) -> Optional[models.Product]:
        """소유자 ID와 상품 이름으로 특정 상품을 조회합니다."""
        pass

    @abstractmethod
    def count(self) -> int:
        """전체 상품 수를 반환합니다."""
        pass

    @abstractmethod
    def list_paginated_with_owner(self, offset: int, limit: int) -> List[models.Product]:
        """
        생성 시각 내림차순으로 정렬된 상품 목록의 일부를 소유자 정보와 함께 조회합니다.
        소유자와 관계없이 전체 상품을 대상으로 합니다.
        """
        pass

    @abstractmethod
    def update(self, product: models.Product) -> models.Product:
        """
        변경된 상품 정보를 저장합니다.

        Raises:
            DuplicateEntryError: 변경된 이름이 (owner_id, name) 제약 조건을 위반했을 때.
        """
        pass

    @abstractmethod
    def delete(self, product: models.Product) -> bool:
        """특정 상품을 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def find_owned_ids(self, owner_id: str, product_ids: List[str]) -> List[str]:
        """주어진 ID 목록 중 owner_id가 소유한 상품의 ID만 반환합니다."""
        pass

    @abstractmethod
    def delete_by_ids(self, owner_id: str, product_ids: List[str]) -> int:
        """owner_id가 소유한 상품 중 주어진 ID의 상품을 삭제하고, 삭제된 개수를 반환합니다."""
        pass

    @abstractmethod
    def delete_by_owner(self, owner_id: str) -> int:
        """owner_id가 소유한 모든 상품을 삭제하고, 삭제된 개수를 반환합니다."""
        pass
