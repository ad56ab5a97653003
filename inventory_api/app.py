# inventory_api/app.py
from wsgiref.simple_server import make_server
from urllib.parse import parse_qs
import json
import logging
import re
import sys

from inventory_api.config import Settings, load_settings, configure_logging
from inventory_api.database.database import create_db_engine, create_session_factory
from inventory_api.database.db_init import initialize_db
from inventory_api.repositories.sqlalchemy import SqlalchemyUserRepository, SqlalchemyProductRepository
from inventory_api.services.user_service import UserService
from inventory_api.services.product_service import ProductService
from inventory_api.services.password_hasher import PasswordHasher
from inventory_api.services.token_service import TokenService
from inventory_api.services.exceptions import *
from inventory_api.middleware import AuthenticationGate, CorsMiddleware
from inventory_api.validators import validate_request
from inventory_api.validators.user import (
    CreateUserSchema, LoginSchema, GetUserSchema, PaginationSchema, UpdateUsernameSchema, EmptySchema
)
from inventory_api.validators.product import (
    CreateProductSchema, GetProductSchema, UpdateProductSchema, DeleteProductSchema,
    DeleteMultipleProductsSchema
)
from inventory_api.utils.response import JSON_HEADERS, success_response, created_response, error_response
from inventory_api import openapi

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        return json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValidationError("Invalid or missing JSON body.")

def get_query_data(environ):
    query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    return {key: values[0] for key, values in query.items()}

def get_validated_data(environ, schema):
    """GET 요청은 쿼리 파라미터를, 그 외 요청은 JSON 본문을 스키마로 검증합니다."""
    if environ.get("REQUEST_METHOD") == "GET":
        payload = get_query_data(environ)
    else:
        payload = get_request_data(environ)
    return validate_request(schema, payload)

def get_auth_user_id(environ):
    return environ["auth"]["userId"]

ERROR_STATUS = {
    ValidationError: 400,
    ConflictError: 400,
    UserNotFoundError: 400,
    ProductNotFoundError: 400,
    InvalidCredentialsError: 400,
    OwnershipError: 400,
    AuthenticationError: 401,
    TokenInvalidError: 403,
    RouteNotFoundError: 404,
}

def handle_exception(e, endpoint=None):
    status_code = ERROR_STATUS.get(type(e))
    if status_code:
        return error_response(status_code, str(e))

    logger.error("Unhandled error in %s endpoint", endpoint or "unknown", exc_info=e)
    if endpoint:
        message = f"Oops... Something occurred in the {endpoint} endpoint"
    else:
        message = "Internal server error"
    return error_response(500, message, err=f"{type(e).__name__}: {e}")

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def create_user_handler(environ, data):
    user = environ['services']['user'].register(data.email, data.password, data.username)
    return created_response("User created successfully", user)

def login_handler(environ, data):
    user = environ['services']['user'].login(data.email, data.password)
    return success_response("Login successful", user)

def get_user_handler(environ, data):
    user = environ['services']['user'].get_user(data.userId)
    return success_response("User fetched successfully", user)

def get_all_users_handler(environ, data):
    users = environ['services']['user'].list_users(data.page, data.documentCount)
    return success_response("Users fetched successfully", users)

def update_username_handler(environ, data):
    user = environ['services']['user'].update_username(get_auth_user_id(environ), data.username)
    return success_response("Username updated successfully", user)

def delete_user_handler(environ, data):
    user = environ['services']['user'].delete_user(get_auth_user_id(environ))
    return success_response("User deleted successfully", user)

def create_product_handler(environ, data):
    product = environ['services']['product'].create_product(
        get_auth_user_id(environ), data.name, data.quantity, data.unitPrice, data.description
    )
    return created_response("Product created successfully", product)

def get_all_products_handler(environ, data):
    products = environ['services']['product'].list_products(data.page, data.documentCount)
    return success_response("Get all products successful", products)

def get_product_handler(environ, data):
    product = environ['services']['product'].get_product(data.productId)
    return success_response("Product gotten successfully", product)

def update_product_handler(environ, data):
    product = environ['services']['product'].update_product(
        get_auth_user_id(environ), data.productId, data.name, data.quantity, data.unitPrice, data.description
    )
    return success_response("Update product successful", product)

def delete_product_handler(environ, data):
    product = environ['services']['product'].delete_product(get_auth_user_id(environ), data.productId)
    return success_response("Delete product successful", product)

def delete_multiple_products_handler(environ, data):
    result = environ['services']['product'].delete_multiple_products(
        get_auth_user_id(environ), data.arrayOfProductIds
    )
    return success_response(
        f"Successfully deleted {result['deletedCount']} products that belong to the user", result
    )

def api_docs_handler(environ, data):
    return '200 OK', json.dumps(openapi.build_document(ROUTES))

# (method, path pattern, request schema, handler, endpoint name)
ROUTES = [
    ('POST', r'^/api/create-user$', CreateUserSchema, create_user_handler, 'create user'),
    ('POST', r'^/api/login$', LoginSchema, login_handler, 'login'),
    ('GET', r'^/api/get-user$', GetUserSchema, get_user_handler, 'get user'),
    ('GET', r'^/api/get-all-users$', PaginationSchema, get_all_users_handler, 'get all users'),
    ('PATCH', r'^/api/update-username$', UpdateUsernameSchema, update_username_handler, 'update username'),
    ('DELETE', r'^/api/delete-user$', EmptySchema, delete_user_handler, 'delete user'),
    ('POST', r'^/api/product/create-product$', CreateProductSchema, create_product_handler, 'product creation'),
    ('GET', r'^/api/product/get-all-products$', PaginationSchema, get_all_products_handler, 'get all products'),
    ('GET', r'^/api/product/get-product-by-id$', GetProductSchema, get_product_handler, 'get product'),
    ('PUT', r'^/api/product/update-product$', UpdateProductSchema, update_product_handler, 'update product'),
    ('DELETE', r'^/api/product/delete-product$', DeleteProductSchema, delete_product_handler, 'delete product'),
    ('DELETE', r'^/api/product/delete-multiple-products$', DeleteMultipleProductsSchema,
     delete_multiple_products_handler, 'delete multiple products'),
    ('GET', r'^/api-docs$', None, api_docs_handler, 'api docs'),
]

def find_route(method, path):
    for route_method, pattern, schema, handler, endpoint in ROUTES:
        if method == route_method and re.match(pattern, path):
            return schema, handler, endpoint
    return None

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def create_app(settings: Settings, session_factory=None):
    """
    설정으로부터 WSGI 애플리케이션을 생성합니다.

    세션 팩토리, 비밀번호 해셔, 토큰 서비스는 한 번만 만들고,
    요청마다 새 DB 세션과 리포지토리, 서비스를 생성하여 핸들러에 전달합니다.

    Args:
        settings: 애플리케이션 설정.
        session_factory: DB 세션 팩토리. 없으면 settings.database_url로 생성합니다.

    Returns:
        CORS와 인증 미들웨어가 적용된 WSGI 애플리케이션.
    """
    if session_factory is None:
        session_factory = create_session_factory(create_db_engine(settings.database_url))
    password_hasher = PasswordHasher(settings.bcrypt_rounds)
    token_service = TokenService(settings)

    def application(environ, start_response):
        path = environ.get("PATH_INFO", "")
        method = environ.get("REQUEST_METHOD", "")
        endpoint = None
        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services)
            user_repo = SqlalchemyUserRepository(db_session)
            product_repo = SqlalchemyProductRepository(db_session)

            # 2. 생성된 서비스 객체들을 environ을 통해 핸들러에 전달
            environ['services'] = {
                'user': UserService(user_repo, product_repo, password_hasher, token_service),
                'product': ProductService(product_repo),
            }

            # 3. 라우팅, 입력 검증 및 핸들러 실행
            route = find_route(method, path)
            if not route:
                raise RouteNotFoundError("Route not found")
            schema, handler, endpoint = route
            data = get_validated_data(environ, schema) if schema else None
            status, response_body = handler(environ, data)

        except Exception as e:
            status, response_body = handle_exception(e, endpoint)
        finally:
            db_session.close()

        logger.info("%s %s -> %s", method, path, status)
        start_response(status, list(JSON_HEADERS))
        return [response_body.encode("utf-8")]

    return CorsMiddleware(AuthenticationGate(application, token_service))

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    settings = load_settings()
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    initialize_db(engine)
    app = create_app(settings, create_session_factory(engine))

    try:
        with make_server("", settings.port, app) as httpd:
            logger.info("Serving inventory API on port %d...", settings.port)
            httpd.serve_forever()
    except Exception:
        logger.exception("Error starting server")
        sys.exit(1)

if __name__ == "__main__":
    main()
