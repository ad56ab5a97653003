# inventory_api/services/exceptions.py

# --- Validation Exceptions ---
class ValidationError(Exception):
    """요청 필드가 누락되었거나, 형식이 잘못되었거나, 허용되지 않은 필드가 있을 때"""
    pass

class ConflictError(Exception):
    """email, username 또는 소유자 범위의 상품 이름이 이미 사용 중일 때"""
    pass

# --- Not Found Exceptions ---
class NotFoundError(Exception):
    """요청한 리소스를 찾을 수 없을 때"""
    pass

class UserNotFoundError(NotFoundError):
    """사용자를 찾을 수 없을 때"""
    pass

class ProductNotFoundError(NotFoundError):
    """상품을 찾을 수 없을 때"""
    pass

class RouteNotFoundError(NotFoundError):
    """요청한 경로(method + path)에 해당하는 라우트가 없을 때"""
    pass

# --- Auth Exceptions ---
class InvalidCredentialsError(Exception):
    """로그인 자격 증명(email, password)이 올바르지 않을 때"""
    pass

class AuthenticationError(Exception):
    """인증 정보(Authorization 헤더)가 없을 때"""
    pass

class AuthorizationError(Exception):
    """인증은 되었으나 요청을 수행할 권한이 없을 때"""
    pass

class TokenInvalidError(AuthorizationError):
    """토큰의 서명이 유효하지 않거나 만료되었을 때"""
    pass

class OwnershipError(AuthorizationError):
    """요청한 사용자가 상품의 소유자가 아닐 때"""
    pass
