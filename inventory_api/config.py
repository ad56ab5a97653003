# inventory_api/config.py
import logging
import re
from dataclasses import dataclass
from datetime import timedelta

from decouple import config as env_config

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    '3600', '30m', '1h', '7d' 형태의 문자열을 timedelta로 변환합니다.

    Raises:
        ValueError: 형식이 올바르지 않거나 0 이하의 기간일 때.
    """
    match = _DURATION_PATTERN.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration '{value}'. Use seconds or a number with s/m/h/d suffix.")
    amount, unit = int(match.group(1)), match.group(2)
    if amount <= 0:
        raise ValueError(f"Duration must be positive, got '{value}'.")
    return timedelta(**{_DURATION_UNITS[unit]: amount})


@dataclass(frozen=True)
class Settings:
    """
    애플리케이션 시작 시 한 번 생성되어 각 컴포넌트에 명시적으로 전달되는 설정 객체입니다.
    """
    jwt_key: str
    port: int = 5000
    database_url: str = "sqlite:///inventory.db"
    jwt_algorithm: str = "HS256"
    token_lifetime: timedelta = timedelta(hours=1)
    bcrypt_rounds: int = 12
    log_level: str = "INFO"


def load_settings(source=env_config) -> Settings:
    """
    환경 변수(또는 .env 파일)에서 설정을 읽어 Settings 객체를 생성합니다.

    Args:
        source: decouple의 config 호환 함수. 테스트에서는 다른 소스를 주입할 수 있습니다.

    Raises:
        decouple.UndefinedValueError: JWT_KEY가 설정되지 않았을 때.
        ValueError: 값의 형식이 올바르지 않을 때.
    """
    return Settings(
        jwt_key=source("JWT_KEY"),
        port=source("PORT", default=5000, cast=int),
        database_url=source("DATABASE_URL", default="sqlite:///inventory.db"),
        jwt_algorithm=source("JWT_ALGORITHM", default="HS256"),
        token_lifetime=parse_duration(source("TOKEN_VALIDATION_DURATION", default="1h")),
        bcrypt_rounds=source("BCRYPT_ROUNDS", default=12, cast=int),
        log_level=source("LOG_LEVEL", default="INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
