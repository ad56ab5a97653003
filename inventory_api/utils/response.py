# inventory_api/utils/response.py
import json
from typing import Any, Optional, Tuple

RESPONSE_STATUS = {
    200: "200 OK",
    201: "201 Created",
    204: "204 No Content",
    400: "400 Bad Request",
    401: "401 Unauthorized",
    403: "403 Forbidden",
    404: "404 Not Found",
    500: "500 Internal Server Error",
}

JSON_HEADERS = [("Content-Type", "application/json")]


def _envelope(status: bool, message: str, data: Any = None, include_data: bool = False, **extra) -> str:
    body = {"status": status, "message": message}
    if include_data:
        body["data"] = data
    body.update(extra)
    return json.dumps(body, default=str)


def success_response(message: str, data: Any = None) -> Tuple[str, str]:
    return RESPONSE_STATUS[200], _envelope(True, message, data, include_data=True)


def created_response(message: str, data: Any = None) -> Tuple[str, str]:
    return RESPONSE_STATUS[201], _envelope(True, message, data, include_data=True)


def error_response(status_code: int, message: str, err: Optional[str] = None) -> Tuple[str, str]:
    """status가 false인 오류 응답을 만듭니다. err는 500 응답의 진단 정보로만 사용됩니다."""
    extra = {"err": err} if err is not None else {}
    return RESPONSE_STATUS[status_code], _envelope(False, message, **extra)
