"""
Integration tests for the HTTP API: routing, access control, envelope and error translation.

These go through the full stack (middleware -> access-control dependencies ->
services -> SQLite) using the real app with get_db/get_settings overridden.
"""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from inventory.core.security import PASSWORD_MAX_LEN, ROLE_ADMIN, ROLE_USER, USERNAME_MAX_LEN
from inventory.services.products import ProductService
from tests.support import ADMIN_PASSWORD, ApiHarness, auth_header, token_for


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.harness = ApiHarness()
        self.client = self.harness.client
        self.admin = auth_header(self.harness.admin_token())
        self.user = auth_header(self.harness.user_token())

    def tearDown(self) -> None:
        self.harness.close()

    def _create_product(self, name: str = "Widget", price: float = 9.99) -> dict:
        resp = self.client.post(
            "/api/products",
            json={"name": name, "description": "test", "price": price},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["data"]


class TestLoginRoute(ApiTestCase):
    def test_login_returns_token_and_sanitized_user(self) -> None:
        resp = self.client.post(
            "/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD}
        )
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Login successful")
        self.assertIsNone(body["errors"])
        data = body["data"]
        self.assertTrue(data["token"])
        self.assertIn("expiration", data)
        self.assertEqual(data["user"]["username"], "admin")
        self.assertEqual(data["user"]["role"], ROLE_ADMIN)
        self.assertEqual(data["user"]["email"], "admin@example.com")
        self.assertNotIn("password", data["user"])
        self.assertNotIn("passwordHash", data["user"])

    def test_issued_token_opens_protected_route(self) -> None:
        login = self.client.post(
            "/api/auth/login", json={"username": "admin", "password": ADMIN_PASSWORD}
        )
        token = login.json()["data"]["token"]
        resp = self.client.get("/api/auth/users", headers=auth_header(token))
        self.assertEqual(resp.status_code, 200)

    def test_missing_fields_is_bad_request(self) -> None:
        resp = self.client.post("/api/auth/login", json={"username": "admin"})
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_bad_credentials_do_not_reveal_which_field(self) -> None:
        wrong_password = self.client.post(
            "/api/auth/login", json={"username": "admin", "password": "nope-nope"}
        )
        unknown_user = self.client.post(
            "/api/auth/login", json={"username": "ghost", "password": ADMIN_PASSWORD}
        )
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_user.status_code, 401)
        self.assertEqual(wrong_password.json(), unknown_user.json())


class TestRegisterRoute(ApiTestCase):
    def test_register_then_login(self) -> None:
        resp = self.client.post(
            "/api/auth/register", json={"username": "bob", "password": "secret1"}
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["role"], ROLE_USER)
        self.assertEqual(data["email"], "")
        login = self.client.post(
            "/api/auth/login", json={"username": "bob", "password": "secret1"}
        )
        self.assertEqual(login.status_code, 200)

    def test_short_password(self) -> None:
        resp = self.client.post(
            "/api/auth/register", json={"username": "bob", "password": "12345"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertFalse(resp.json()["success"])

    def test_duplicate_username(self) -> None:
        body = {"username": "bob", "password": "secret1"}
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 200)
        resp = self.client.post("/api/auth/register", json=body)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Username already exists")

    def test_oversized_credentials_are_bad_request(self) -> None:
        long_name = {"username": "u" * (USERNAME_MAX_LEN + 1), "password": "secret1"}
        long_password = {"username": "bob", "password": "p" * (PASSWORD_MAX_LEN + 1)}
        for body in (long_name, long_password):
            resp = self.client.post("/api/auth/register", json=body)
            self.assertEqual(resp.status_code, 400)
            self.assertFalse(resp.json()["success"])
        resp = self.client.post("/api/auth/login", json=long_password)
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(any("password" in e for e in resp.json()["errors"]))


class TestAccessControl(ApiTestCase):
    def test_missing_token_is_unauthenticated(self) -> None:
        resp = self.client.get("/api/products")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("WWW-Authenticate"), "Bearer")
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertIsNone(body["data"])

    def test_garbage_token_is_unauthenticated(self) -> None:
        resp = self.client.get("/api/products", headers=auth_header("not.a.jwt"))
        self.assertEqual(resp.status_code, 401)

    def test_expired_token_is_unauthenticated(self) -> None:
        stale = token_for(
            self.harness.settings,
            username="admin",
            role=ROLE_ADMIN,
            user_id=1,
            now=datetime.now(UTC) - timedelta(hours=1, minutes=1),
        )
        for method, path in (("GET", "/api/products"), ("GET", "/api/auth/users")):
            with self.subTest(path=path):
                resp = self.client.request(method, path, headers=auth_header(stale))
                self.assertEqual(resp.status_code, 401)

    def test_non_admin_gets_forbidden(self) -> None:
        cases = (
            ("GET", "/api/auth/users", None),
            ("POST", "/api/products", {"name": "Widget", "price": 1}),
            ("PUT", "/api/products/1", {"name": "Widget", "price": 1}),
            ("DELETE", "/api/products/1", None),
        )
        for method, path, body in cases:
            with self.subTest(method=method, path=path):
                resp = self.client.request(method, path, json=body, headers=self.user)
                self.assertEqual(resp.status_code, 403)
                self.assertEqual(resp.json()["message"], "Administrator access required")
                self.assertFalse(resp.json()["success"])

    def test_forbidden_route_never_runs_the_service(self) -> None:
        with patch.object(ProductService, "create") as create:
            resp = self.client.post(
                "/api/products", json={"name": "Widget", "price": 1}, headers=self.user
            )
        self.assertEqual(resp.status_code, 403)
        create.assert_not_called()

    def test_authenticated_user_can_read_products(self) -> None:
        self.assertEqual(self.client.get("/api/products", headers=self.user).status_code, 200)


class TestProfileAndUsers(ApiTestCase):
    def test_profile_of_logged_in_user(self) -> None:
        resp = self.client.get("/api/auth/profile", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["username"], "admin")

    def test_profile_without_stored_record(self) -> None:
        resp = self.client.get("/api/auth/profile", headers=self.user)
        self.assertEqual(resp.status_code, 404)

    def test_list_users_is_sanitized(self) -> None:
        self.client.post("/api/auth/register", json={"username": "bob", "password": "secret1"})
        resp = self.client.get("/api/auth/users", headers=self.admin)
        self.assertEqual(resp.status_code, 200)
        users = resp.json()["data"]
        self.assertEqual([u["username"] for u in users], ["admin", "bob"])
        for user in users:
            self.assertEqual(set(user), {"id", "username", "email", "role"})


class TestProductRoutes(ApiTestCase):
    def test_create_returns_201_with_location(self) -> None:
        resp = self.client.post(
            "/api/products",
            json={"name": "Widget", "description": "blue", "price": 9.99},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()["data"]
        self.assertIsInstance(data["id"], int)
        self.assertTrue(data["createdAt"])
        self.assertEqual(datetime.fromisoformat(data["createdAt"]).utcoffset(), timedelta(0))
        self.assertEqual(data["price"], 9.99)
        self.assertTrue(resp.headers["Location"].endswith(f"/api/products/{data['id']}"))

    def test_create_validation(self) -> None:
        for body in ({"name": "", "price": 5}, {"name": "Widget", "price": 0}):
            with self.subTest(body=body):
                resp = self.client.post("/api/products", json=body, headers=self.admin)
                self.assertEqual(resp.status_code, 400)
                self.assertFalse(resp.json()["success"])

    def test_malformed_body_is_bad_request(self) -> None:
        resp = self.client.post(
            "/api/products", json={"name": "Widget", "price": "cheap"}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["message"], "Invalid request")
        self.assertTrue(any("price" in e for e in body["errors"]))

    def test_non_finite_price_is_bad_request(self) -> None:
        created = self._create_product()
        json_headers = {**self.admin, "Content-Type": "application/json"}
        for raw in (b'{"name": "W", "price": 1e309}', b'{"name": "W", "price": NaN}'):
            with self.subTest(body=raw):
                post = self.client.post("/api/products", content=raw, headers=json_headers)
                self.assertEqual(post.status_code, 400)
                self.assertFalse(post.json()["success"])
                put = self.client.put(
                    f"/api/products/{created['id']}", content=raw, headers=json_headers
                )
                self.assertEqual(put.status_code, 400)
        listed = self.client.get("/api/products", headers=self.user).json()["data"]
        self.assertEqual(listed["totalCount"], 1)
        self.assertEqual(listed["items"][0]["price"], 9.99)

    def test_huge_page_number_is_bad_request(self) -> None:
        resp = self.client.get(
            "/api/products",
            params={"pageNumber": "10000000000000000000"},
            headers=self.user,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(any("pageNumber" in e for e in resp.json()["errors"]))

    def test_get_and_missing(self) -> None:
        created = self._create_product()
        resp = self.client.get(f"/api/products/{created['id']}", headers=self.user)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["name"], "Widget")
        self.assertEqual(self.client.get("/api/products/9999", headers=self.user).status_code, 404)

    def test_update(self) -> None:
        created = self._create_product()
        resp = self.client.put(
            f"/api/products/{created['id']}",
            json={"name": "Gadget", "description": "", "price": 3.5},
            headers=self.admin,
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["name"], "Gadget")
        self.assertEqual(data["createdAt"], created["createdAt"])

    def test_update_missing_regardless_of_body(self) -> None:
        resp = self.client.put(
            "/api/products/9999", json={"name": "", "price": -1}, headers=self.admin
        )
        self.assertEqual(resp.status_code, 404)

    def test_delete_twice(self) -> None:
        created = self._create_product()
        first = self.client.delete(f"/api/products/{created['id']}", headers=self.admin)
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["data"], {"deletedId": created["id"]})
        second = self.client.delete(f"/api/products/{created['id']}", headers=self.admin)
        self.assertEqual(second.status_code, 404)

    def test_list_pagination_and_camel_case(self) -> None:
        for i in range(1, 26):
            self._create_product(name=f"Item {i:02d}", price=float(i))
        resp = self.client.get(
            "/api/products", params={"pageNumber": 2, "pageSize": 10}, headers=self.user
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual([p["name"] for p in data["items"]], [f"Item {i:02d}" for i in range(11, 21)])
        self.assertEqual(data["pageNumber"], 2)
        self.assertEqual(data["pageSize"], 10)
        self.assertEqual(data["totalCount"], 25)
        self.assertEqual(data["totalPages"], 3)
        self.assertTrue(data["hasPrevious"])
        self.assertTrue(data["hasNext"])

    def test_list_filter_and_sort(self) -> None:
        self._create_product(name="Blue widget", price=5)
        self._create_product(name="Red widget", price=2)
        self._create_product(name="Gadget", price=7)
        resp = self.client.get(
            "/api/products",
            params={"name": "widget", "sortByPrice": "DESC"},
            headers=self.user,
        )
        names = [p["name"] for p in resp.json()["data"]["items"]]
        self.assertEqual(names, ["Blue widget", "Red widget"])


class TestRequestPipeline(ApiTestCase):
    def test_unhandled_error_becomes_generic_500(self) -> None:
        with patch.object(ProductService, "get", side_effect=RuntimeError("db exploded")):
            with self.assertLogs("inventory.api.middleware", level="ERROR") as logs:
                resp = self.client.get("/api/products/1", headers=self.user)
        self.assertEqual(resp.status_code, 500)
        body = resp.json()
        self.assertEqual(body["message"], "Internal server error")
        self.assertFalse(body["success"])
        self.assertNotIn("db exploded", resp.text)
        self.assertTrue(any("db exploded" in line for line in logs.output))

    def test_request_id_header_and_logging(self) -> None:
        with self.assertLogs("inventory.api.middleware", level="INFO") as logs:
            resp = self.client.get("/api/health")
        request_id = resp.headers["X-Request-ID"]
        self.assertEqual(len(request_id), 8)
        self.assertTrue(any(request_id in line and "started" in line for line in logs.output))
        self.assertTrue(any(request_id in line and "-> 200" in line for line in logs.output))

    def test_unknown_route_uses_envelope(self) -> None:
        resp = self.client.get("/api/nothing-here")
        self.assertEqual(resp.status_code, 404)
        self.assertFalse(resp.json()["success"])

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()["data"]
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["database"], "connected")


if __name__ == "__main__":
    unittest.main()
