from typing import Annotated, Any, Dict, Type, TypeVar

import pydantic
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, StringConstraints

from inventory_api.services.exceptions import ValidationError

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


def _reject_nul(value: str) -> str:
    # bcrypt는 NUL 문자가 포함된 비밀번호를 처리하지 못합니다.
    if "\x00" in value:
        raise ValueError("must not contain NUL characters")
    return value


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


PasswordStr = Annotated[str, StringConstraints(min_length=1), AfterValidator(_reject_nul)]

# 숫자 문자열은 변환하지만, true/false는 1.0/0.0으로 바꾸지 않고 거부합니다.
Number = Annotated[float, BeforeValidator(_reject_bool)]

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class RequestSchema(BaseModel):
    """모든 요청 스키마의 기반 클래스. 정의되지 않은 필드는 거부합니다."""
    model_config = ConfigDict(extra="forbid")


def _format_errors(exc: pydantic.ValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        messages.append(f'"{field}" {error["msg"]}')
    return "; ".join(messages)


def validate_request(schema: Type[SchemaT], payload: Dict[str, Any]) -> SchemaT:
    """
    요청 데이터(GET은 쿼리 파라미터, 그 외는 JSON 본문)를 스키마로 검증합니다.

    Returns:
        검증 및 타입 변환이 완료된 스키마 인스턴스.

    Raises:
        ValidationError: 필드가 누락되었거나, 형식이 잘못되었거나, 정의되지 않은 필드가 있을 때.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid or missing JSON body.")
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_format_errors(e)) from e
