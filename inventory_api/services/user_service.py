import logging
from typing import Dict, Any, Optional

from inventory_api.database import models
from inventory_api.repositories.interfaces import IUserRepository, IProductRepository
from inventory_api.repositories.exceptions import DuplicateEntryError
from inventory_api.services.password_hasher import PasswordHasher
from inventory_api.services.token_service import TokenService
from inventory_api.services.exceptions import (
    ConflictError, UserNotFoundError, InvalidCredentialsError
)
from inventory_api.utils.pagination import parse_pagination, page_offset, build_page_info

logger = logging.getLogger(__name__)


class UserService:
    """회원 가입, 로그인, 사용자 조회, 사용자 이름 변경, 계정 삭제 기능을 제공합니다."""

    def __init__(self, user_repo: IUserRepository, product_repo: IProductRepository,
                 password_hasher: PasswordHasher, token_service: TokenService):
        """
        UserService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            product_repo: 상품 데이터에 접근하기 위한 리포지토리 (계정 삭제 시 상품 일괄 삭제용).
            password_hasher: 비밀번호 해시 및 검증을 담당하는 객체.
            token_service: 로그인 성공 시 세션 토큰을 발급하는 서비스.
        """
        self.user_repo = user_repo
        self.product_repo = product_repo
        self.password_hasher = password_hasher
        self.token_service = token_service

    def register(self, email: str, password: str, username: str) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다. username은 소문자로 정규화하고, 비밀번호는 해시하여 저장합니다.

        사전 중복 검사는 정확한 오류 메시지를 위한 것이며, 동시 요청에 대한 최종 보장은
        DB의 유니크 제약 조건이 담당합니다.

        Args:
            email: 가입할 이메일 (대소문자를 구분하여 정확히 비교).
            password: 평문 비밀번호.
            username: 사용자 이름.

        Returns:
            생성된 사용자의 id, email, username, createdAt을 담은 딕셔너리. (비밀번호 제외)

        Raises:
            ConflictError: 이메일 또는 사용자 이름이 이미 사용 중일 때.
        """
        if self.user_repo.find_by_email(email):
            raise ConflictError("Email already in use")

        normalized_username = username.lower()
        if self.user_repo.find_by_username(normalized_username):
            raise ConflictError("Username already in use")

        new_user = models.User(
            email=email,
            username=normalized_username,
            password_hash=self.password_hasher.hash(password),
        )
        try:
            created_user = self.user_repo.create(new_user)
        except DuplicateEntryError:
            raise self._conflict_for(email, normalized_username)

        logger.info("User '%s' registered.", created_user.id)
        return created_user.to_dict()

    def _conflict_for(self, email: str, username: str) -> ConflictError:
        # 사전 검사 이후 다른 요청이 먼저 저장한 경우, 어느 필드가 충돌했는지 다시 확인합니다.
        if self.user_repo.find_by_email(email):
            return ConflictError("Email already in use")
        return ConflictError("Username already in use")

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        자격 증명을 검증하고, 성공 시 userId를 담은 세션 토큰을 발급합니다.

        사용자 존재 여부를 노출하지 않도록, 이메일이 없을 때와 비밀번호가 틀렸을 때
        같은 메시지를 사용합니다.

        Raises:
            InvalidCredentialsError: 이메일이 없거나 비밀번호가 일치하지 않을 때.
        """
        user = self.user_repo.find_by_email(email)
        if not user or not self.password_hasher.verify(password, user.password_hash):
            logger.info("Rejected login attempt.")
            raise InvalidCredentialsError("Incorrect credentials")

        token = self.token_service.issue_token(user.id)
        return {
            "token": token,
            "id": user.id,
            "email": user.email,
            "username": user.username,
        }

    def get_user(self, user_id: Optional[str]) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다. (비밀번호 제외)

        Raises:
            UserNotFoundError: user_id가 없거나 해당 사용자를 찾을 수 없을 때.
        """
        user = self.user_repo.find_by_id(user_id) if user_id else None
        if not user:
            raise UserNotFoundError("User not found")
        return user.to_dict()

    def list_users(self, page: Any, document_count: Any) -> Dict[str, Any]:
        """
        생성 시각 내림차순으로 사용자 목록을 페이지 단위로 조회합니다.

        Args:
            page: 1부터 시작하는 페이지 번호.
            document_count: 페이지당 사용자 수.

        Returns:
            page, prevPage, nextPage, documentCount, totalUsers, allUsers를 담은 딕셔너리.

        Raises:
            ValidationError: page 또는 document_count가 양의 정수가 아닐 때.
        """
        page, document_count = parse_pagination(page, document_count)
        total_users = self.user_repo.count()
        users = self.user_repo.list_paginated(page_offset(page, document_count), document_count)

        data = build_page_info(page, document_count, total_users)
        data["totalUsers"] = total_users
        data["allUsers"] = [u.to_dict() for u in users]
        return data

    def update_username(self, user_id: str, username: str) -> Dict[str, Any]:
        """
        인증된 사용자의 username을 변경합니다. 새 username은 소문자로 정규화됩니다.

        현재 사용자 자신의 username과 같은 경우는 충돌로 보지 않습니다.

        Raises:
            UserNotFoundError: 요청한 사용자가 더 이상 존재하지 않을 때.
            ConflictError: 다른 사용자가 이미 해당 username을 사용 중일 때.
        """
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError("User not found")

        normalized_username = username.lower()
        holder = self.user_repo.find_by_username(normalized_username)
        if holder and holder.id != user.id:
            raise ConflictError("Username already in use")

        user.username = normalized_username
        try:
            updated_user = self.user_repo.update(user)
        except DuplicateEntryError:
            raise ConflictError("Username already in use")
        return updated_user.to_dict()

    def delete_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        인증된 사용자와 그 사용자가 소유한 모든 상품을 삭제합니다.

        상품을 먼저 삭제한 뒤 사용자를 삭제합니다. 두 단계는 하나의 트랜잭션이 아니므로,
        사용자 삭제가 실패하면 이미 삭제된 상품은 복구되지 않습니다.

        Returns:
            삭제 전 사용자 정보. 이미 삭제된 사용자라면 None.
        """
        deleted_products = self.product_repo.delete_by_owner(user_id)
        user = self.user_repo.find_by_id(user_id)
        if not user:
            return None

        deleted_user = user.to_dict()
        try:
            self.user_repo.delete(user)
        except Exception:
            logger.error(
                "Deleted %d products of user '%s' but failed to delete the user record.",
                deleted_products, user_id, exc_info=True,
            )
            raise
        logger.info("User '%s' deleted with %d products.", user_id, deleted_products)
        return deleted_user
