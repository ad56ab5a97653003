from datetime import datetime, timezone
from typing import Dict, Any

from jose import JWTError, jwt

from inventory_api.config import Settings
from inventory_api.services.exceptions import TokenInvalidError


class TokenService:
    """
    서버 비밀 키로 서명된 세션 토큰(JWT)을 발급하고 검증합니다.
    토큰은 서버에 저장되지 않으며, 유효성은 서명과 만료 시각만으로 결정됩니다.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_key
        self.algorithm = settings.jwt_algorithm
        self.lifetime = settings.token_lifetime

    def issue_token(self, user_id: str) -> str:
        """
        userId를 담은 서명된 토큰을 발급합니다.

        Args:
            user_id: 토큰에 담을 사용자 ID.

        Returns:
            발급 시각(iat)과 만료 시각(exp)이 포함된 JWT 문자열.
        """
        issued_at = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def validate_token(self, token: str) -> Dict[str, Any]:
        """
        토큰의 서명과 만료 여부를 검증하고, 유효하면 디코딩된 payload를 반환합니다.

        Raises:
            TokenInvalidError: 토큰이 없거나, 서명이 잘못되었거나, 만료되었거나, userId가 없을 때.
        """
        if not token:
            raise TokenInvalidError("Token is invalid or has expired!")
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise TokenInvalidError("Token is invalid or has expired!") from e

        if not payload.get("userId"):
            raise TokenInvalidError("Token is invalid or has expired!")
        return payload
