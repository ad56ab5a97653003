from typing import Optional

from pydantic import EmailStr

from .base import RequestSchema, NonEmptyStr, PasswordStr


class CreateUserSchema(RequestSchema):
    email: EmailStr
    password: PasswordStr
    username: NonEmptyStr


class LoginSchema(RequestSchema):
    email: NonEmptyStr
    password: PasswordStr


class GetUserSchema(RequestSchema):
    userId: Optional[str] = None


class PaginationSchema(RequestSchema):
    # 양의 정수 여부는 서비스에서 검사하여 "Invalid page or documentCount" 메시지를 사용합니다.
    page: Optional[str] = None
    documentCount: Optional[str] = None


class UpdateUsernameSchema(RequestSchema):
    username: NonEmptyStr


class EmptySchema(RequestSchema):
    pass
