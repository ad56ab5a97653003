# inventory_api/middleware/cors.py
from inventory_api.utils.response import RESPONSE_STATUS

CORS_HEADERS = [
    ("Access-Control-Allow-Origin", "*"),
    ("Access-Control-Allow-Methods", "GET, POST, PUT, PATCH, DELETE, OPTIONS"),
    ("Access-Control-Allow-Headers", "Authorization, Content-Type"),
]


class CorsMiddleware:
    """모든 응답에 CORS 헤더를 추가하고, OPTIONS preflight 요청에는 바로 204로 응답합니다."""

    def __init__(self, app):
        self.app = app

    def __call__(self, environ, start_response):
        if environ.get("REQUEST_METHOD") == "OPTIONS":
            start_response(RESPONSE_STATUS[204], list(CORS_HEADERS))
            return [b""]

        def start_response_with_cors(status, headers, exc_info=None):
            return start_response(status, list(headers) + CORS_HEADERS, exc_info)

        return self.app(environ, start_response_with_cors)
