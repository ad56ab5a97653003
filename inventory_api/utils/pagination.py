from typing import Any, Dict, Optional, Tuple

from inventory_api.services.exceptions import ValidationError

# SQL LIMIT/OFFSET으로 전달할 수 있는 최대값 (64비트 부호 있는 정수)
MAX_SQL_INTEGER = 2 ** 63 - 1


def _to_positive_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdecimal():
        number = int(value.strip())
        return number if number > 0 else None
    return None


def parse_pagination(page: Any, document_count: Any) -> Tuple[int, int]:
    """
    page와 documentCount를 양의 정수로 변환합니다.

    Raises:
        ValidationError: 둘 중 하나라도 없거나 양의 정수가 아닐 때,
            또는 계산된 offset이 DB 정수 범위를 넘을 때.
    """
    parsed_page = _to_positive_int(page)
    parsed_count = _to_positive_int(document_count)
    if parsed_page is None or parsed_count is None:
        raise ValidationError("Invalid page or documentCount")
    if parsed_count > MAX_SQL_INTEGER or page_offset(parsed_page, parsed_count) > MAX_SQL_INTEGER:
        raise ValidationError("Invalid page or documentCount")
    return parsed_page, parsed_count


def page_offset(page: int, document_count: int) -> int:
    return document_count * (page - 1)


def build_page_info(page: int, document_count: int, total: int) -> Dict[str, Optional[int]]:
    """
    이전/다음 페이지 번호를 계산합니다.
    prevPage는 page > 1일 때만, nextPage는 documentCount * page < total일 때만 존재합니다.
    """
    return {
        "page": page,
        "prevPage": page - 1 if page > 1 else None,
        "nextPage": page + 1 if document_count * page < total else None,
        "documentCount": document_count,
    }
