import logging
from typing import Dict, Any, List, Optional

from inventory_api.database import models
from inventory_api.repositories.interfaces import IProductRepository
from inventory_api.repositories.exceptions import DuplicateEntryError
from inventory_api.services.exceptions import (
    ValidationError, ConflictError, ProductNotFoundError, UserNotFoundError, OwnershipError
)
from inventory_api.utils.pagination import parse_pagination, page_offset, build_page_info

logger = logging.getLogger(__name__)


class ProductService:
    """사용자별 상품 등록, 조회, 수정, 삭제 기능을 제공합니다. 수정과 삭제는 소유자만 가능합니다."""

    def __init__(self, product_repo: IProductRepository):
        self.product_repo = product_repo

    def create_product(self, owner_id: str, name: str, quantity: float, unit_price: float,
                       description: str) -> Dict[str, Any]:
        """
        인증된 사용자를 소유자로 하는 새 상품을 생성합니다. 상품 이름은 소문자로 정규화됩니다.

        Args:
            owner_id: 상품을 소유할 사용자의 ID.
            name: 상품 이름. 같은 소유자 안에서 유일해야 합니다.
            quantity: 재고 수량.
            unit_price: 단가.
            description: 상품 설명.

        Returns:
            생성된 상품 정보를 담은 딕셔너리.

        Raises:
            ConflictError: 같은 소유자에게 같은 이름의 상품이 이미 있을 때.
            UserNotFoundError: 소유자가 더 이상 존재하지 않을 때.
        """
        normalized_name = name.lower()
        if self.product_repo.find_by_owner_and_name(owner_id, normalized_name):
            raise ConflictError("Product with the same name already exists")

        new_product = models.Product(
            owner_id=owner_id,
            name=normalized_name,
            quantity=quantity,
            unit_price=unit_price,
            description=description,
        )
        try:
            created_product = self.product_repo.create(new_product)
        except DuplicateEntryError:
            # 이름 충돌이 아니라면 소유자 외래 키 위반입니다.
            if self.product_repo.find_by_owner_and_name(owner_id, normalized_name):
                raise ConflictError("Product with the same name already exists")
            raise UserNotFoundError("User not found")
        return created_product.to_dict()

    def list_products(self, page: Any, document_count: Any) -> Dict[str, Any]:
        """
        전체 상품을 생성 시각 내림차순으로, 소유자 정보와 함께 페이지 단위로 조회합니다.

        Raises:
            ValidationError: page 또는 document_count가 양의 정수가 아닐 때.
        """
        page, document_count = parse_pagination(page, document_count)
        total_products = self.product_repo.count()
        products = self.product_repo.list_paginated_with_owner(
            page_offset(page, document_count), document_count
        )

        data = build_page_info(page, document_count, total_products)
        data["totalProducts"] = total_products
        data["allProducts"] = [p.to_dict(include_owner=True) for p in products]
        return data

    def get_product(self, product_id: Optional[str]) -> Dict[str, Any]:
        """
        ID로 특정 상품을 소유자 정보와 함께 조회합니다.

        Raises:
            ValidationError: product_id가 주어지지 않았을 때.
            ProductNotFoundError: 해당 상품을 찾을 수 없을 때.
        """
        if not product_id:
            raise ValidationError("Product ID is required")
        product = self.product_repo.find_by_id_with_owner(product_id)
        if not product:
            raise ProductNotFoundError("Product not found")
        return product.to_dict(include_owner=True)

    def _get_owned_product(self, user_id: str, product_id: str) -> models.Product:
        product = self.product_repo.find_by_id(product_id)
        if not product:
            raise ProductNotFoundError("Product not found")
        if product.owner_id != user_id:
            logger.warning("User '%s' tried to modify product '%s' owned by another user.", user_id, product_id)
            raise OwnershipError("Product does not belong to the user")
        return product

    def update_product(self, user_id: str, product_id: str, name: str, quantity: float,
                       unit_price: float, description: str) -> Dict[str, Any]:
        """
        소유자가 상품의 이름, 수량, 단가, 설명을 모두 변경합니다.

        Raises:
            ValidationError: 필요한 값 중 하나라도 주어지지 않았을 때.
            ProductNotFoundError: 해당 상품을 찾을 수 없을 때.
            OwnershipError: 요청한 사용자가 상품의 소유자가 아닐 때.
            ConflictError: 소유자의 다른 상품과 이름이 겹칠 때.
        """
        if any(value is None or value == "" for value in (product_id, name, quantity, unit_price, description)):
            raise ValidationError("Missing product parameter")

        product = self._get_owned_product(user_id, product_id)
        normalized_name = name.lower()
        same_name = self.product_repo.find_by_owner_and_name(user_id, normalized_name)
        if same_name and same_name.id != product.id:
            raise ConflictError("Product with the same name already exists")

        product.name = normalized_name
        product.quantity = quantity
        product.unit_price = unit_price
        product.description = description
        try:
            updated_product = self.product_repo.update(product)
        except DuplicateEntryError:
            raise ConflictError("Product with the same name already exists")
        return updated_product.to_dict()

    def delete_product(self, user_id: str, product_id: str) -> Dict[str, Any]:
        """
        소유자가 상품을 삭제하고, 삭제된 상품 정보를 반환합니다.

        Raises:
            ProductNotFoundError: 해당 상품을 찾을 수 없을 때.
            OwnershipError: 요청한 사용자가 상품의 소유자가 아닐 때.
        """
        product = self._get_owned_product(user_id, product_id)
        deleted_product = product.to_dict()
        self.product_repo.delete(product)
        return deleted_product

    def delete_multiple_products(self, user_id: str, product_ids: List[str]) -> Dict[str, Any]:
        """
        주어진 ID 중 요청한 사용자가 소유한 상품만 삭제합니다.

        소유하지 않았거나 존재하지 않는 ID는 삭제하지 않고 skippedProductIds로 보고합니다.

        Returns:
            deletedCount와 skippedProductIds를 담은 딕셔너리.

        Raises:
            ValidationError: 주어진 ID 중 요청한 사용자가 소유한 상품이 하나도 없을 때.
        """
        owned_ids = self.product_repo.find_owned_ids(user_id, product_ids)
        if not owned_ids:
            raise ValidationError("Products do not belong to the user")

        deleted_count = self.product_repo.delete_by_ids(user_id, owned_ids)
        owned = set(owned_ids)
        return {
            "deletedCount": deleted_count,
            "skippedProductIds": [pid for pid in product_ids if pid not in owned],
        }
