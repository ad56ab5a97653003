# tests/conftest.py
import io
import json
from datetime import timedelta
from urllib.parse import urlencode
from wsgiref.util import setup_testing_defaults

import pytest

from inventory_api.app import create_app
from inventory_api.config import Settings
from inventory_api.database.database import create_db_engine, create_session_factory
from inventory_api.database.db_init import initialize_db


class WsgiClient:
    """WSGI 애플리케이션을 서버 없이 직접 호출하는 테스트용 클라이언트."""

    def __init__(self, app):
        self.app = app

    def request(self, method, path, json_body=None, query=None, token=None, headers=None):
        environ = {}
        setup_testing_defaults(environ)
        body = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
        environ.update({
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "QUERY_STRING": urlencode(query or {}),
            "CONTENT_LENGTH": str(len(body)),
            "CONTENT_TYPE": "application/json",
            "wsgi.input": io.BytesIO(body),
        })
        if token is not None:
            environ["HTTP_AUTHORIZATION"] = f"Bearer {token}"
        for key, value in (headers or {}).items():
            environ[key] = value

        captured = {}

        def start_response(status, response_headers, exc_info=None):
            captured["status"] = status
            captured["headers"] = dict(response_headers)

        chunks = self.app(environ, start_response)
        raw = b"".join(chunks)
        status_code = int(captured["status"].split(" ", 1)[0])
        payload = json.loads(raw) if raw else None
        return status_code, payload, captured["headers"]


@pytest.fixture
def settings() -> Settings:
    """빠른 테스트를 위해 낮은 bcrypt 비용과 메모리 DB를 사용하는 설정."""
    return Settings(
        jwt_key="test-secret",
        database_url="sqlite://",
        token_lifetime=timedelta(hours=1),
        bcrypt_rounds=4,
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.database_url)
    initialize_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(settings, session_factory) -> WsgiClient:
    return WsgiClient(create_app(settings, session_factory))
