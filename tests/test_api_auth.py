import asyncio
import unittest

from fastapi.testclient import TestClient

from api.main import app
from auth.dependencies import get_credential_store
from auth.exceptions import StorageFailure
from auth.stores.memory_store import MemoryCredentialStore
from tests.helpers import seed_account


class FailingStore(MemoryCredentialStore):
    async def find_account_by_username(self, username):
        raise StorageFailure("connection refused by db-primary:5432")


class AuthApiTestCase(unittest.TestCase):
    def setUp(self):
        self.store = MemoryCredentialStore()
        asyncio.run(seed_account(self.store, "alice", "secret1", "s1"))
        app.dependency_overrides[get_credential_store] = lambda: self.store
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def login(self, username="alice", pw="secret1", remember=False):
        return self.client.post(
            "/auth/login",
            json={"username": username, "pw": pw, "remember": remember},
        )


class TestLoginEndpoint(AuthApiTestCase):
    def test_login_returns_session_and_refresh_token(self):
        response = self.login()

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(set(body), {"session", "refresh_token"})
        self.assertRegex(body["session"], r"^[0-9a-f]{64}$")
        self.assertRegex(body["refresh_token"], r"^[0-9a-f]{64}$")
        self.assertNotEqual(body["session"], body["refresh_token"])

    def test_remember_defaults_to_false(self):
        response = self.client.post("/auth/login", json={"username": "alice", "pw": "secret1"})
        self.assertEqual(response.status_code, 200)

    def test_wrong_password_and_unknown_user_look_the_same(self):
        wrong = self.login(pw="wrong")
        unknown = self.login(username="mallory")

        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(wrong.json(), unknown.json())
        self.assertEqual(wrong.json()["message"], "Not authorized")

    def test_empty_or_oversized_credentials_are_not_authorized(self):
        cases = {
            "empty password": {"username": "alice", "pw": ""},
            "empty username": {"username": "", "pw": "secret1"},
            "long username": {"username": "a" * 300, "pw": "secret1"},
        }
        for name, body in cases.items():
            with self.subTest(name):
                response = self.client.post("/auth/login", json=body)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json()["message"], "Not authorized")

    def test_missing_fields_are_validation_errors(self):
        response = self.client.post("/auth/login", json={"username": "alice"})
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["message"], "Validation error")

    def test_storage_failure_is_a_generic_internal_error(self):
        app.dependency_overrides[get_credential_store] = lambda: FailingStore()

        response = self.login()

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["message"], "Internal server error")
        self.assertNotIn("db-primary", response.text)


class TestRefreshEndpoint(AuthApiTestCase):
    def test_refresh_rotates_the_token(self):
        rt1 = self.login().json()["refresh_token"]

        first = self.client.post("/auth/refresh", json={"refresh_token": rt1})
        self.assertEqual(first.status_code, 200)
        rt2 = first.json()["refresh_token"]
        self.assertNotEqual(rt1, rt2)

        stale = self.client.post("/auth/refresh", json={"refresh_token": rt1})
        self.assertEqual(stale.status_code, 401)

        second = self.client.post("/auth/refresh", json={"refresh_token": rt2})
        self.assertEqual(second.status_code, 200)

    def test_empty_or_oversized_refresh_token_is_not_authorized(self):
        self.login()
        for token in ["", "f" * 300]:
            with self.subTest(token=token[:8]):
                response = self.client.post("/auth/refresh", json={"refresh_token": token})
                self.assertEqual(response.status_code, 401)

    def test_unknown_refresh_token(self):
        response = self.client.post("/auth/refresh", json={"refresh_token": "0" * 64})
        self.assertEqual(response.status_code, 401)


class TestHealthEndpoint(AuthApiTestCase):
    def test_root(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
