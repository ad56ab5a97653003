# tests/test_app.py
import io
from unittest.mock import patch

import pytest

# ===================================================================
#  헬퍼 함수
# ===================================================================

def register(client, email, username, password="password"):
    return client.request("POST", "/api/create-user", {"email": email, "password": password, "username": username})

def login(client, email, password="password"):
    status, body, _ = client.request("POST", "/api/login", {"email": email, "password": password})
    assert status == 200, body
    return body["data"]

def create_product(client, token, name, quantity=5, unit_price=100.0, description="phone"):
    return client.request("POST", "/api/product/create-product", {
        "name": name, "quantity": quantity, "unitPrice": unit_price, "description": description,
    }, token=token)

def assert_no_password(value):
    """응답 어디에도 비밀번호 관련 필드가 없는지 재귀적으로 확인합니다."""
    if isinstance(value, dict):
        assert not {"password", "passwordHash", "password_hash"} & set(value)
        for item in value.values():
            assert_no_password(item)
    elif isinstance(value, list):
        for item in value:
            assert_no_password(item)

@pytest.fixture
def alice(client):
    register(client, "alice@gmail.com", "Alice")
    return login(client, "alice@gmail.com")

@pytest.fixture
def bob(client):
    register(client, "bob@gmail.com", "bob")
    return login(client, "bob@gmail.com")

# ===================================================================
#  회원 가입 / 로그인
# ===================================================================
class TestAccounts:
    def test_create_user(self, client):
        status, body, _ = register(client, "tester@gmail.com", "Liza")

        assert status == 201
        assert body["status"] is True
        assert body["message"] == "User created successfully"
        assert body["data"]["email"] == "tester@gmail.com"
        assert body["data"]["username"] == "liza"
        assert_no_password(body)

    def test_duplicate_email(self, client):
        register(client, "tester@gmail.com", "liza")

        status, body, _ = register(client, "tester@gmail.com", "weber")

        assert status == 400
        assert body == {"status": False, "message": "Email already in use"}

    def test_username_differing_only_in_case(self, client):
        register(client, "tester@gmail.com", "liza")

        status, body, _ = register(client, "tester2@gmail.com", "LIZA")

        assert status == 400
        assert body["message"] == "Username already in use"

    def test_create_user_rejects_unknown_fields(self, client):
        status, body, _ = client.request("POST", "/api/create-user", {
            "email": "tester@gmail.com", "password": "password", "username": "liza", "role": "admin",
        })

        assert status == 400
        assert body["status"] is False
        assert '"role"' in body["message"]

    def test_invalid_json_body(self, client):
        status, body, _ = client.request(
            "POST", "/api/login",
            headers={"wsgi.input": io.BytesIO(b"{not json"), "CONTENT_LENGTH": "9"},
        )

        assert status == 400
        assert body["message"] == "Invalid or missing JSON body."

    def test_login_is_enumeration_safe(self, client):
        """잘못된 비밀번호와 존재하지 않는 이메일이 같은 상태 코드와 메시지를 반환하는지 테스트합니다."""
        register(client, "tester@gmail.com", "liza")

        wrong_password = client.request("POST", "/api/login", {"email": "tester@gmail.com", "password": "passwords"})
        unknown_email = client.request("POST", "/api/login", {"email": "testerr@gmail.com", "password": "passwords"})

        assert wrong_password[0] == unknown_email[0] == 400
        assert wrong_password[1] == unknown_email[1] == {"status": False, "message": "Incorrect credentials"}

    def test_password_with_nul_character(self, client):
        status, body, _ = register(client, "tester@gmail.com", "liza", password="pa\u0000ss")
        login_status, _, _ = client.request("POST", "/api/login", {"email": "tester@gmail.com", "password": "pa\u0000ss"})

        assert status == 400
        assert '"password"' in body["message"]
        assert login_status == 400

    def test_login_returns_token(self, client):
        register(client, "tester@gmail.com", "liza")

        status, body, _ = client.request("POST", "/api/login", {"email": "tester@gmail.com", "password": "password"})

        assert status == 200
        assert body["message"] == "Login successful"
        assert set(body["data"]) == {"token", "id", "email", "username"}

# ===================================================================
#  인증 게이트
# ===================================================================
class TestAuthentication:
    def test_missing_token(self, client):
        status, body, _ = client.request("GET", "/api/get-user")

        assert status == 401
        assert body == {"status": False, "message": "You are not authorized!"}

    def test_invalid_token(self, client):
        status, body, _ = client.request("GET", "/api/get-user", token="garbage")

        assert status == 403
        assert body["message"] == "Token is invalid or has expired!"

    def test_bare_token_header(self, client, alice):
        status, body, _ = client.request(
            "GET", "/api/get-user", query={"userId": alice["id"]},
            headers={"HTTP_AUTHORIZATION": alice["token"]},
        )

        assert status == 200
        assert body["data"]["username"] == "alice"

    def test_unknown_route(self, client, alice):
        status, body, _ = client.request("GET", "/api/does-not-exist", token=alice["token"])

        assert status == 404
        assert body == {"status": False, "message": "Route not found"}

    def test_cors_headers_on_every_response(self, client):
        _, _, headers = client.request("GET", "/api/get-user")

        assert headers["Access-Control-Allow-Origin"] == "*"

# ===================================================================
#  사용자 조회 / 변경 / 삭제
# ===================================================================
class TestUsers:
    def test_get_user(self, client, alice):
        status, body, _ = client.request("GET", "/api/get-user", query={"userId": alice["id"]}, token=alice["token"])

        assert status == 200
        assert body["message"] == "User fetched successfully"
        assert body["data"]["id"] == alice["id"]
        assert_no_password(body)

    @pytest.mark.parametrize("query", [{}, {"userId": "missing"}])
    def test_get_user_not_found(self, client, alice, query):
        status, body, _ = client.request("GET", "/api/get-user", query=query, token=alice["token"])

        assert status == 400
        assert body["message"] == "User not found"

    def test_get_all_users_pagination(self, client, alice):
        """15명 중 10개씩 조회: 1페이지 nextPage=2, 2페이지 prevPage=1 / nextPage=null."""
        for i in range(14):
            register(client, f"user{i}@gmail.com", f"user{i}")

        status, first, _ = client.request("GET", "/api/get-all-users", query={"page": 1, "documentCount": 10}, token=alice["token"])
        _, second, _ = client.request("GET", "/api/get-all-users", query={"page": 2, "documentCount": 10}, token=alice["token"])

        assert status == 200
        assert first["data"]["totalUsers"] == 15
        assert len(first["data"]["allUsers"]) == 10
        assert (first["data"]["prevPage"], first["data"]["nextPage"]) == (None, 2)
        assert len(second["data"]["allUsers"]) == 5
        assert (second["data"]["prevPage"], second["data"]["nextPage"]) == (1, None)
        assert_no_password(first)

    def test_get_all_users_requires_pagination(self, client, alice):
        status, body, _ = client.request("GET", "/api/get-all-users", query={"page": 1}, token=alice["token"])

        assert status == 400
        assert body["message"] == "Invalid page or documentCount"

    @pytest.mark.parametrize("page", ["\u00b2", str(10 ** 20)])
    def test_get_all_users_rejects_unusable_page(self, client, alice, page):
        status, body, _ = client.request("GET", "/api/get-all-users", query={"page": page, "documentCount": 10}, token=alice["token"])

        assert status == 400
        assert body["message"] == "Invalid page or documentCount"

    def test_update_username(self, client, alice):
        status, body, _ = client.request("PATCH", "/api/update-username", {"username": "Lizy"}, token=alice["token"])

        assert status == 200
        assert body["data"]["username"] == "lizy"
        assert_no_password(body)

    def test_update_username_taken(self, client, alice, bob):
        status, body, _ = client.request("PATCH", "/api/update-username", {"username": "BOB"}, token=alice["token"])

        assert status == 400
        assert body["message"] == "Username already in use"

    def test_delete_user_cascades_to_products(self, client, alice, bob):
        """계정을 삭제하면 소유한 상품을 더 이상 조회할 수 없는지 테스트합니다."""
        _, created, _ = create_product(client, alice["token"], "Samsung S1")
        product_id = created["data"]["id"]

        status, body, _ = client.request("DELETE", "/api/delete-user", token=alice["token"])

        assert status == 200
        assert body["data"]["id"] == alice["id"]
        assert_no_password(body)
        status, body, _ = client.request("GET", "/api/product/get-product-by-id", query={"productId": product_id}, token=bob["token"])
        assert status == 400
        assert body["message"] == "Product not found"

    def test_deleted_user_token_cannot_update(self, client, alice):
        client.request("DELETE", "/api/delete-user", token=alice["token"])

        status, body, _ = client.request("PATCH", "/api/update-username", {"username": "ghost"}, token=alice["token"])

        assert status == 400
        assert body["message"] == "User not found"

# ===================================================================
#  상품
# ===================================================================
class TestProducts:
    def test_create_product(self, client, alice):
        status, body, _ = create_product(client, alice["token"], "Samsung S1")

        assert status == 201
        assert body["message"] == "Product created successfully"
        assert body["data"]["name"] == "samsung s1"
        assert body["data"]["owner"] == alice["id"]

    def test_product_name_is_unique_per_owner(self, client, alice, bob):
        create_product(client, alice["token"], "Samsung S1")

        status, body, _ = create_product(client, alice["token"], "samsung s1")
        other_owner_status, _, _ = create_product(client, bob["token"], "samsung s1")

        assert status == 400
        assert body["message"] == "Product with the same name already exists"
        assert other_owner_status == 201

    def test_get_product_by_id_includes_owner(self, client, alice, bob):
        _, created, _ = create_product(client, alice["token"], "Samsung S1")

        status, body, _ = client.request(
            "GET", "/api/product/get-product-by-id", query={"productId": created["data"]["id"]}, token=bob["token"]
        )

        assert status == 200
        assert body["data"]["owner"]["username"] == "alice"
        assert_no_password(body)

    def test_get_product_requires_id(self, client, alice):
        status, body, _ = client.request("GET", "/api/product/get-product-by-id", token=alice["token"])

        assert status == 400
        assert body["message"] == "Product ID is required"

    def test_get_all_products_is_global(self, client, alice, bob):
        create_product(client, alice["token"], "first")
        create_product(client, bob["token"], "second")

        status, body, _ = client.request(
            "GET", "/api/product/get-all-products", query={"page": 1, "documentCount": 10}, token=alice["token"]
        )

        assert status == 200
        assert body["data"]["totalProducts"] == 2
        assert [p["name"] for p in body["data"]["allProducts"]] == ["second", "first"]
        assert_no_password(body)

    def test_update_product(self, client, alice):
        _, created, _ = create_product(client, alice["token"], "Samsung S1")

        status, body, _ = client.request("PUT", "/api/product/update-product", {
            "productId": created["data"]["id"], "name": "Samsung S2",
            "quantity": 3, "unitPrice": 120.5, "description": "updated",
        }, token=alice["token"])

        assert status == 200
        assert body["message"] == "Update product successful"
        assert body["data"]["name"] == "samsung s2"
        assert body["data"]["unitPrice"] == 120.5

    def test_update_product_of_other_user(self, client, alice, bob):
        """다른 사용자의 토큰으로 수정하면 400으로 거부되고 상품이 변경되지 않는지 테스트합니다."""
        _, created, _ = create_product(client, alice["token"], "Samsung S1")
        product_id = created["data"]["id"]

        status, body, _ = client.request("PUT", "/api/product/update-product", {
            "productId": product_id, "name": "hacked", "quantity": 0, "unitPrice": 0, "description": "hacked",
        }, token=bob["token"])

        assert status == 400
        assert body["message"] == "Product does not belong to the user"
        _, fetched, _ = client.request("GET", "/api/product/get-product-by-id", query={"productId": product_id}, token=alice["token"])
        assert fetched["data"]["name"] == "samsung s1"

    def test_create_product_rejects_boolean_quantity(self, client, alice):
        status, body, _ = create_product(client, alice["token"], "Samsung S1", quantity=True)

        assert status == 400
        assert '"quantity"' in body["message"]

    def test_update_product_missing_field(self, client, alice):
        status, body, _ = client.request("PUT", "/api/product/update-product", {
            "productId": "p-1", "name": "x", "quantity": 1, "unitPrice": 1,
        }, token=alice["token"])

        assert status == 400
        assert '"description"' in body["message"]

    def test_delete_product(self, client, alice):
        _, created, _ = create_product(client, alice["token"], "Samsung S1")
        product_id = created["data"]["id"]

        status, body, _ = client.request("DELETE", "/api/product/delete-product", {"productId": product_id}, token=alice["token"])

        assert status == 200
        assert body["data"]["id"] == product_id
        status, _, _ = client.request("GET", "/api/product/get-product-by-id", query={"productId": product_id}, token=alice["token"])
        assert status == 400

    def test_delete_product_of_other_user(self, client, alice, bob):
        _, created, _ = create_product(client, alice["token"], "Samsung S1")

        status, body, _ = client.request(
            "DELETE", "/api/product/delete-product", {"productId": created["data"]["id"]}, token=bob["token"]
        )

        assert status == 400
        assert body["message"] == "Product does not belong to the user"

    def test_delete_product_not_found(self, client, alice):
        status, body, _ = client.request("DELETE", "/api/product/delete-product", {"productId": "missing"}, token=alice["token"])

        assert status == 400
        assert body["message"] == "Product not found"

    def test_delete_multiple_products_only_owned(self, client, alice, bob):
        """소유한 상품과 소유하지 않은 상품을 섞어 삭제하면 소유한 상품만 삭제되는지 테스트합니다."""
        owned = [create_product(client, alice["token"], f"a{i}")[1]["data"]["id"] for i in range(2)]
        foreign = create_product(client, bob["token"], "b0")[1]["data"]["id"]

        status, body, _ = client.request(
            "DELETE", "/api/product/delete-multiple-products", {"arrayOfProductIds": owned + [foreign]}, token=alice["token"]
        )

        assert status == 200
        assert body["message"] == "Successfully deleted 2 products that belong to the user"
        assert body["data"] == {"deletedCount": 2, "skippedProductIds": [foreign]}
        status, _, _ = client.request("GET", "/api/product/get-product-by-id", query={"productId": foreign}, token=bob["token"])
        assert status == 200

    def test_delete_multiple_products_none_owned(self, client, alice, bob):
        foreign = create_product(client, bob["token"], "b0")[1]["data"]["id"]

        status, body, _ = client.request(
            "DELETE", "/api/product/delete-multiple-products", {"arrayOfProductIds": [foreign]}, token=alice["token"]
        )

        assert status == 400
        assert body["message"] == "Products do not belong to the user"

# ===================================================================
#  문서 / 서버 오류
# ===================================================================
class TestMisc:
    def test_api_docs_is_public(self, client):
        status, body, _ = client.request("GET", "/api-docs")

        assert status == 200
        assert body["openapi"].startswith("3.")
        assert "/api/product/update-product" in body["paths"]
        assert "put" in body["paths"]["/api/product/update-product"]
        assert "security" not in body["paths"]["/api/login"]["post"]

    def test_unexpected_error_is_generic_500(self, client, alice):
        with patch("inventory_api.services.user_service.UserService.get_user", side_effect=RuntimeError("boom")):
            status, body, _ = client.request("GET", "/api/get-user", query={"userId": alice["id"]}, token=alice["token"])

        assert status == 500
        assert body["status"] is False
        assert body["message"] == "Oops... Something occurred in the get user endpoint"
        assert body["err"] == "RuntimeError: boom"
