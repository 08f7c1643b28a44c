import time
import unittest
from datetime import timedelta
from unittest.mock import patch

from fastapi import Depends
from fastapi.testclient import TestClient
from sqlmodel import Session

from tokenauth.auth.service import get_password_hash
from tokenauth.core.database import get_session
from tokenauth.core.settings import settings
from tokenauth.main import app
from tokenauth.tokens.dependencies import get_token_service
from tokenauth.tokens.service import TokenService
from tokenauth.tokens.store import TokenStore

from helpers import FakeClock, add_user, make_engine


class TestAuthAPI(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        # Argon2 is deliberately slow, hash once for every test
        cls.password_hash = get_password_hash("s3cret!pw")

    def setUp(self):
        self.engine = make_engine()
        self.clock = FakeClock()

        def override_get_session():
            with Session(self.engine) as session:
                yield session

        def override_get_token_service(session: Session = Depends(get_session)):
            return TokenService(TokenStore(session, clock=self.clock), ttl=timedelta(hours=48))

        app.dependency_overrides[get_session] = override_get_session
        app.dependency_overrides[get_token_service] = override_get_token_service
        self.client = TestClient(app)

        with Session(self.engine) as session:
            self.alice_id = add_user(session, "alice", self.password_hash).id
            self.admin_id = add_user(session, "root", self.password_hash, is_admin=True).id

    def tearDown(self):
        app.dependency_overrides.clear()
        self.engine.dispose()

    def login(self, username="alice", password="s3cret!pw"):
        return self.client.post("/auth/login", json={"username": username, "password": password})

    def bearer(self, token):
        return {"Authorization": f"Bearer {token}"}

    def test_root(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(settings.PROJECT_NAME, resp.json()["message"])

    def test_login_returns_bearer_token(self):
        resp = self.login()
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["token_type"], "bearer")
        self.assertEqual(len(body["access_token"]), 24)
        self.assertTrue(body["expires_at"].startswith("2026-01-03T12:00:00"))

    def test_login_wrong_password(self):
        resp = self.login(password="wrong")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Incorrect username or password")

    def test_login_unknown_user(self):
        resp = self.login(username="nobody")
        self.assertEqual(resp.status_code, 401)

    def test_me_with_valid_token(self):
        token = self.login().json()["access_token"]
        resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], self.alice_id)
        self.assertEqual(resp.json()["username"], "alice")
        self.assertNotIn("hashed_password", resp.json())

    def test_missing_header_is_unauthorized(self):
        resp = self.client.get("/users/me")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer")

    def test_expired_and_unknown_tokens_look_the_same(self):
        token = self.login().json()["access_token"]

        self.clock.advance(hours=47, minutes=59)
        self.assertEqual(self.client.get("/users/me", headers=self.bearer(token)).status_code, 200)

        self.clock.advance(minutes=2)
        expired = self.client.get("/users/me", headers=self.bearer(token))
        unknown = self.client.get("/users/me", headers=self.bearer("AAAAAAAAAAAAAAAAAAAAAA=="))

        self.assertEqual(expired.status_code, 401)
        self.assertEqual(unknown.status_code, 401)
        self.assertEqual(expired.json(), unknown.json())
        self.assertEqual(expired.headers["WWW-Authenticate"], unknown.headers["WWW-Authenticate"])

    def test_logout_deletes_only_presented_token(self):
        first = self.login().json()["access_token"]
        second = self.login().json()["access_token"]

        resp = self.client.post("/auth/logout", headers=self.bearer(first))
        self.assertEqual(resp.status_code, 200)

        self.assertEqual(self.client.get("/users/me", headers=self.bearer(first)).status_code, 401)
        self.assertEqual(self.client.get("/users/me", headers=self.bearer(second)).status_code, 200)

    def test_logout_all(self):
        first = self.login().json()["access_token"]
        second = self.login().json()["access_token"]

        resp = self.client.post("/auth/logout-all", headers=self.bearer(first))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["revoked"], 2)

        for token in (first, second):
            self.assertEqual(self.client.get("/users/me", headers=self.bearer(token)).status_code, 401)

    def test_admin_lists_tokens_without_secrets(self):
        self.login()
        self.clock.advance(hours=49)
        self.login()
        admin_token = self.login("root").json()["access_token"]

        resp = self.client.get(f"/users/{self.alice_id}/tokens", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 200)
        tokens = resp.json()
        self.assertEqual([t["active"] for t in tokens], [False, True])
        for t in tokens:
            self.assertEqual(set(t), {"id", "user_id", "expires_at", "active"})

    def test_admin_token_listing_unknown_user(self):
        admin_token = self.login("root").json()["access_token"]
        resp = self.client.get("/users/9999/tokens", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 404)

    def test_non_admin_cannot_list_tokens(self):
        token = self.login().json()["access_token"]
        resp = self.client.get(f"/users/{self.alice_id}/tokens", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 403)

    def test_admin_deletes_token(self):
        user_token = self.login().json()["access_token"]
        admin_token = self.login("root").json()["access_token"]
        token_id = self.client.get(f"/users/{self.alice_id}/tokens", headers=self.bearer(admin_token)).json()[0]["id"]

        resp = self.client.delete(f"/tokens/{token_id}", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 204)
        resp = self.client.delete(f"/tokens/{token_id}", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 204)

        self.assertEqual(self.client.get("/users/me", headers=self.bearer(user_token)).status_code, 401)

    def test_admin_creates_and_deletes_user(self):
        admin_token = self.login("root").json()["access_token"]

        resp = self.client.post(
            "/users",
            json={"username": "carol", "password": "another!pw1", "full_name": "Carol"},
            headers=self.bearer(admin_token),
        )
        self.assertEqual(resp.status_code, 201)
        carol_id = resp.json()["id"]

        duplicate = self.client.post(
            "/users",
            json={"username": "carol", "password": "another!pw1"},
            headers=self.bearer(admin_token),
        )
        self.assertEqual(duplicate.status_code, 400)

        carol_token = self.login("carol", "another!pw1").json()["access_token"]
        self.assertEqual(self.client.get("/users/me", headers=self.bearer(carol_token)).status_code, 200)

        resp = self.client.delete(f"/users/{carol_id}", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.get("/users/me", headers=self.bearer(carol_token)).status_code, 401)

        users = self.client.get("/users", headers=self.bearer(admin_token)).json()
        self.assertNotIn("carol", [u["username"] for u in users])

    def test_admin_cannot_be_deleted(self):
        admin_token = self.login("root").json()["access_token"]
        resp = self.client.delete(f"/users/{self.admin_id}", headers=self.bearer(admin_token))
        self.assertEqual(resp.status_code, 403)

    def test_malformed_authorization_headers_are_unauthorized(self):
        unknown = self.client.get("/users/me", headers=self.bearer("AAAAAAAAAAAAAAAAAAAAAA=="))

        for header in ("Basic abc", "Bearer ", "Bearer", "abc", "Token xyz"):
            resp = self.client.get("/users/me", headers={"Authorization": header})
            self.assertEqual(resp.status_code, 401, header)
            self.assertEqual(resp.json(), unknown.json(), header)
            self.assertEqual(resp.headers["WWW-Authenticate"], "Bearer", header)

    def test_token_lookup_uses_its_own_session(self):
        token = self.login().json()["access_token"]
        request_sessions = []
        lookup_sessions = []
        original_authenticate = TokenService.authenticate

        def recording_service(session: Session = Depends(get_session)):
            request_sessions.append(session)
            return TokenService(TokenStore(session, clock=self.clock), ttl=timedelta(hours=48))

        def recording_authenticate(self_, secret):
            lookup_sessions.append(self_.store.session)
            return original_authenticate(self_, secret)

        app.dependency_overrides[get_token_service] = recording_service
        with patch.object(TokenService, "authenticate", recording_authenticate):
            resp = self.client.get("/users/me", headers=self.bearer(token))

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(request_sessions), 1)
        self.assertEqual(len(lookup_sessions), 1)
        self.assertIsNot(lookup_sessions[0], request_sessions[0])

    def test_slow_token_lookup_times_out(self):
        token = self.login().json()["access_token"]

        def slow_authenticate(self_, secret):
            time.sleep(0.5)
            return 1

        with patch.object(settings, "AUTH_TIMEOUT_SECONDS", 0.05), \
                patch.object(TokenService, "authenticate", slow_authenticate):
            resp = self.client.get("/users/me", headers=self.bearer(token))
        self.assertEqual(resp.status_code, 503)

    def test_issuance_failure_is_internal_error(self):
        def failing_service(session: Session = Depends(get_session)):
            return TokenService(
                TokenStore(session, clock=self.clock),
                max_attempts=2,
                generator=lambda: "fixed-secret",
            )

        self.assertEqual(self.login().status_code, 200)
        app.dependency_overrides[get_token_service] = failing_service
        self.assertEqual(self.login().status_code, 200)
        resp = self.login()
        self.assertEqual(resp.status_code, 500)


if __name__ == "__main__":
    unittest.main()
