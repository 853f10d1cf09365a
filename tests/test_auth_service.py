"""Tests for app.services.auth: login, register, refresh and current_user over SQLite."""

import os
import tempfile
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.models import User
from app.services.auth import (
    AccountDisabled,
    AuthError,
    EmailTaken,
    InvalidCredentials,
    InvalidRefreshToken,
    UsernameTaken,
    UserNotFound,
)
from app.services.tokens import TokenInvalid
from app.services.users import UserStore
from tests.support import (
    auth_service,
    file_session_factory,
    memory_session_factory,
    token_service,
)


class AuthServiceTestCase(unittest.TestCase):
    """Fresh database and AuthService per test."""

    def setUp(self) -> None:
        self.db = memory_session_factory()()
        self.tokens = token_service()
        self.auth = auth_service(self.db, self.tokens)

    def tearDown(self) -> None:
        self.db.close()


class TestRegister(AuthServiceTestCase):

    def test_register_returns_tokens_for_new_user(self) -> None:
        result = self.auth.register("alice", "pw1-secret", "alice@x.com")
        self.assertEqual(result.username, "alice")
        self.assertEqual(result.email, "alice@x.com")
        self.assertEqual(result.role, "USER")
        self.assertEqual(result.token_type, "bearer")
        self.assertEqual(result.expires_in, 86_400_000)
        self.assertEqual(self.tokens.extract_subject(result.access_token), "alice")
        self.assertEqual(self.tokens.extract_role(result.access_token), "USER")
        self.assertEqual(self.tokens.extract_subject(result.refresh_token), "alice")

    def test_register_persists_hashed_password_and_defaults(self) -> None:
        self.auth.register("alice", "pw1-secret", "alice@x.com", first_name="Alice", last_name="A")
        user = UserStore(self.db).get_by_username("alice")
        self.assertIsNotNone(user)
        self.assertNotEqual(user.password_hash, "pw1-secret")
        self.assertTrue(user.password_hash.startswith("$2"))
        self.assertTrue(user.enabled)
        self.assertEqual(user.role, "USER")
        self.assertEqual(user.first_name, "Alice")
        self.assertEqual(user.last_name, "A")
        self.assertIsNotNone(user.created_at)
        self.assertIsNone(user.last_login_at)

    def test_duplicate_username_fails_even_with_new_email(self) -> None:
        self.auth.register("alice", "pw1-secret", "alice@x.com")
        with self.assertRaises(UsernameTaken):
            self.auth.register("alice", "other-pass", "different@x.com")

    def test_duplicate_username_and_email_reports_username(self) -> None:
        self.auth.register("alice", "pw1-secret", "alice@x.com")
        with self.assertRaises(UsernameTaken):
            self.auth.register("alice", "pw1-secret", "alice@x.com")

    def test_duplicate_email_fails(self) -> None:
        self.auth.register("alice", "pw1-secret", "alice@x.com")
        with self.assertRaises(EmailTaken):
            self.auth.register("alice2", "pw1-secret", "alice@x.com")

    def test_unique_index_conflict_is_mapped_when_prechecks_pass(self) -> None:
        self.auth.register("bob", "pw1-secret", "bob@x.com")
        with patch.object(UserStore, "exists_by_username", return_value=False), patch.object(
            UserStore, "exists_by_email", return_value=False
        ):
            with self.assertRaises(UsernameTaken):
                self.auth.register("bob", "pw2-secret", "bob2@x.com")
            with self.assertRaises(EmailTaken):
                self.auth.register("bobby", "pw2-secret", "bob@x.com")
        self.assertEqual(self.db.query(User).count(), 1)

    def test_errors_are_auth_errors_with_messages(self) -> None:
        self.auth.register("alice", "pw1-secret", "alice@x.com")
        with self.assertRaises(AuthError) as ctx:
            self.auth.register("alice", "pw1-secret", "alice@x.com")
        self.assertEqual(ctx.exception.message, "Username already exists.")


class TestLogin(AuthServiceTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.auth.register("alice", "pw1-secret", "alice@x.com")

    def test_login_by_username(self) -> None:
        result = self.auth.login("alice", "pw1-secret")
        self.assertEqual(result.username, "alice")
        self.assertEqual(result.role, "USER")
        self.assertTrue(self.tokens.is_valid(result.access_token, "alice"))

    def test_login_by_email(self) -> None:
        result = self.auth.login("alice@x.com", "pw1-secret")
        self.assertEqual(result.username, "alice")
        self.assertEqual(result.email, "alice@x.com")

    def test_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.auth.login("alice", "wrong")

    def test_unknown_identifier(self) -> None:
        with self.assertRaises(InvalidCredentials):
            self.auth.login("nobody", "pw1-secret")

    def test_disabled_account_rejected_with_correct_password(self) -> None:
        user = UserStore(self.db).get_by_username("alice")
        user.enabled = False
        self.db.commit()
        with self.assertRaises(AccountDisabled):
            self.auth.login("alice", "pw1-secret")

    def test_disabled_check_precedes_password_check(self) -> None:
        user = UserStore(self.db).get_by_username("alice")
        user.enabled = False
        self.db.commit()
        with self.assertRaises(AccountDisabled):
            self.auth.login("alice", "wrong")

    def test_login_records_last_login(self) -> None:
        before = datetime.now(UTC).replace(tzinfo=None) - timedelta(seconds=1)
        self.auth.login("alice", "pw1-secret")
        user = UserStore(self.db).get_by_username("alice")
        self.assertIsNotNone(user.last_login_at)
        self.assertGreaterEqual(user.last_login_at.replace(tzinfo=None), before)

    def test_last_login_failure_does_not_fail_login(self) -> None:
        with patch.object(
            UserStore,
            "update_last_login",
            side_effect=OperationalError("UPDATE users", {}, Exception("db down")),
        ):
            with self.assertLogs("app.services.auth", level="WARNING") as logs:
                result = self.auth.login("alice", "pw1-secret")
        self.assertEqual(result.username, "alice")
        self.assertEqual(result.email, "alice@x.com")
        self.assertIn("Could not record last login", logs.output[0])

    def test_username_wins_over_email_match_of_another_user(self) -> None:
        # A username that looks like someone else's email still logs in as itself.
        self.auth.register("bob@x.com", "bob-secret", "bob-real@x.com")
        self.auth.register("carol", "carol-secret", "bob@x.com")
        result = self.auth.login("bob@x.com", "bob-secret")
        self.assertEqual(result.username, "bob@x.com")


class TestRefresh(AuthServiceTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.registered = self.auth.register("alice", "pw1-secret", "alice@x.com")

    def test_refresh_issues_new_pair(self) -> None:
        result = self.auth.refresh(self.registered.refresh_token)
        self.assertEqual(result.username, "alice")
        self.assertEqual(self.tokens.extract_role(result.access_token), "USER")
        self.assertEqual(self.tokens.extract_subject(result.refresh_token), "alice")

    def test_garbage_token(self) -> None:
        for bad in ["garbage", "invalid.token.here", ""]:
            with self.subTest(token=bad):
                with self.assertRaises(InvalidRefreshToken):
                    self.auth.refresh(bad)

    def test_expired_refresh_token(self) -> None:
        stamp = datetime.now(UTC) - timedelta(days=8)
        expired = token_service(clock=lambda: stamp).issue_refresh_token("alice")
        with self.assertRaises(InvalidRefreshToken) as ctx:
            self.auth.refresh(expired)
        self.assertIsInstance(ctx.exception.__cause__, TokenInvalid)

    def test_unknown_subject(self) -> None:
        token = self.tokens.issue_refresh_token("ghost")
        with self.assertRaises(InvalidRefreshToken):
            self.auth.refresh(token)

    def test_refresh_does_not_recheck_enabled(self) -> None:
        user = UserStore(self.db).get_by_username("alice")
        user.enabled = False
        self.db.commit()
        result = self.auth.refresh(self.registered.refresh_token)
        self.assertEqual(result.username, "alice")


class TestCurrentUser(AuthServiceTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.registered = self.auth.register("alice", "pw1-secret", "alice@x.com")

    def test_resolves_user(self) -> None:
        user = self.auth.current_user(self.registered.access_token)
        self.assertEqual(user.username, "alice")
        self.assertEqual(user.email, "alice@x.com")

    def test_invalid_token_propagates(self) -> None:
        with self.assertRaises(TokenInvalid):
            self.auth.current_user("invalid.token.here")

    def test_unknown_user(self) -> None:
        token = self.tokens.issue_access_token("ghost", "USER")
        with self.assertRaises(UserNotFound):
            self.auth.current_user(token)


class TestScenario(AuthServiceTestCase):
    """register alice, then log in by username, with a wrong password, and by email."""

    def test_alice(self) -> None:
        registered = self.auth.register("alice", "pw1", "alice@x.com")
        self.assertEqual(registered.username, "alice")
        self.assertEqual(registered.role, "USER")
        self.assertEqual(self.auth.login("alice", "pw1").username, "alice")
        with self.assertRaises(InvalidCredentials):
            self.auth.login("alice", "wrong")
        self.assertEqual(self.auth.login("alice@x.com", "pw1").username, "alice")


class TestConcurrentRegistration(unittest.TestCase):
    """Two registrations racing for the same username: exactly one wins."""

    def setUp(self) -> None:
        fd, self.path = tempfile.mkstemp(suffix=".db")
        os.close(fd)
        self.factory = file_session_factory(self.path)

    def tearDown(self) -> None:
        self.factory.kw["bind"].dispose()
        os.unlink(self.path)

    def _register(self, email: str, barrier: threading.Barrier) -> str:
        db = self.factory()
        try:
            auth = auth_service(db)
            barrier.wait(timeout=10)
            try:
                auth.register("bob", "bob-secret", email)
            except UsernameTaken:
                return "taken"
            return "ok"
        finally:
            db.close()

    def test_exactly_one_succeeds(self) -> None:
        barrier = threading.Barrier(2)
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(self._register, "bob1@x.com", barrier),
                pool.submit(self._register, "bob2@x.com", barrier),
            ]
            outcomes = sorted(f.result(timeout=60) for f in futures)
        self.assertEqual(outcomes, ["ok", "taken"])
        db = self.factory()
        try:
            self.assertEqual(db.query(User).filter(User.username == "bob").count(), 1)
        finally:
            db.close()


if __name__ == "__main__":
    unittest.main()
