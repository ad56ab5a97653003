# inventory_api/middleware/security.py
import logging
from typing import Optional

from inventory_api.services.exceptions import AuthenticationError, TokenInvalidError
from inventory_api.services.token_service import TokenService
from inventory_api.utils.response import JSON_HEADERS, error_response

logger = logging.getLogger(__name__)

# 토큰 없이 접근할 수 있는 경로
PUBLIC_PATHS = frozenset([
    "/api/create-user",
    "/api/login",
    "/api-docs",
])


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Authorization 헤더에서 토큰을 꺼냅니다.
    'Bearer <token>' 형식이 아니면 헤더 전체를 토큰으로 간주합니다.

    Raises:
        AuthenticationError: 헤더가 없을 때.
    """
    if not authorization:
        raise AuthenticationError("You are not authorized!")
    parts = authorization.strip().split(" ")
    if parts[0].lower() == "bearer":
        return parts[1] if len(parts) > 1 else None
    return authorization.strip()


class AuthenticationGate:
    """
    모든 요청을 검사하는 WSGI 미들웨어입니다.

    공개 경로는 그대로 통과시키고, 그 외 경로는 토큰을 검증하여
    디코딩된 payload를 environ['auth']에 저장한 뒤 다음 애플리케이션을 호출합니다.
    """

    def __init__(self, app, token_service: TokenService, public_paths=PUBLIC_PATHS):
        self.app = app
        self.token_service = token_service
        self.public_paths = public_paths

    def __call__(self, environ, start_response):
        path = environ.get("PATH_INFO", "")
        if path in self.public_paths:
            return self.app(environ, start_response)

        try:
            token = extract_token(environ.get("HTTP_AUTHORIZATION"))
            environ["auth"] = self.token_service.validate_token(token)
        except AuthenticationError as e:
            status, body = error_response(401, str(e))
        except TokenInvalidError as e:
            status, body = error_response(403, str(e))
        else:
            return self.app(environ, start_response)

        logger.info("%s %s rejected by authentication gate: %s", environ.get("REQUEST_METHOD", ""), path, status)
        start_response(status, list(JSON_HEADERS))
        return [body.encode("utf-8")]
