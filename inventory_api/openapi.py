# inventory_api/openapi.py
from typing import Any, Dict, Iterable

from inventory_api.middleware.security import PUBLIC_PATHS

CREATED_PATHS = frozenset(["/api/create-user", "/api/product/create-product"])

ENVELOPE_SCHEMA = {
    "type": "object",
    "properties": {
        "status": {"type": "boolean"},
        "message": {"type": "string"},
        "data": {},
    },
    "required": ["status", "message"],
}


def _query_parameters(schema) -> list:
    json_schema = schema.model_json_schema()
    required = set(json_schema.get("required", []))
    return [
        {
            "name": name,
            "in": "query",
            "required": name in required,
            "schema": {"type": "string"},
        }
        for name in json_schema.get("properties", {})
    ]


def _operation(method: str, path: str, schema, endpoint: str) -> Dict[str, Any]:
    operation = {
        "summary": endpoint.capitalize(),
        "responses": {
            "201" if path in CREATED_PATHS else "200": {
                "description": "Success",
                "content": {"application/json": {"schema": ENVELOPE_SCHEMA}},
            },
            "400": {"description": "Bad request"},
        },
    }
    if path not in PUBLIC_PATHS:
        operation["security"] = [{"bearerAuth": []}]
        operation["responses"]["401"] = {"description": "Missing Authorization header"}
        operation["responses"]["403"] = {"description": "Token is invalid or has expired"}

    if schema is not None:
        if method == "GET":
            operation["parameters"] = _query_parameters(schema)
        elif schema.model_fields:
            operation["requestBody"] = {
                "required": True,
                "content": {"application/json": {"schema": schema.model_json_schema()}},
            }
    return operation


def build_document(routes: Iterable[tuple]) -> Dict[str, Any]:
    """
    라우트 테이블과 요청 스키마로부터 OpenAPI 3.0 문서를 생성합니다.

    Args:
        routes: (method, path pattern, schema, handler, endpoint) 튜플의 목록.
    """
    paths: Dict[str, Dict[str, Any]] = {}
    for method, pattern, schema, _handler, endpoint in routes:
        path = pattern.lstrip("^").rstrip("$")
        if path == "/api-docs":
            continue
        paths.setdefault(path, {})[method.lower()] = _operation(method, path, schema, endpoint)

    return {
        "openapi": "3.0.3",
        "info": {"title": "Inventory API", "version": "0.1.0"},
        "paths": paths,
        "components": {
            "securitySchemes": {
                "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
            },
        },
    }
