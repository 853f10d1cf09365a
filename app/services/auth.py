"""Login, registration, token refresh and current-user lookup."""

import logging

from sqlalchemy.exc import SQLAlchemyError

from app.core.security import PasswordHasher
from app.models import User
from app.models.user import DEFAULT_ROLE
from app.schemas.auth import AuthResponse
from app.services.tokens import TokenInvalid, TokenService
from app.services.users import DuplicateUserError, UserStore

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Base for rejected authentication requests. Never transient; do not retry."""

    default_message = "Authentication failed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(AuthError):
    default_message = "Invalid username or password."


class AccountDisabled(AuthError):
    default_message = "Account is disabled."


class UsernameTaken(AuthError):
    default_message = "Username already exists."


class EmailTaken(AuthError):
    default_message = "Email already exists."


class InvalidRefreshToken(AuthError):
    default_message = "Invalid refresh token."


class UserNotFound(AuthError):
    default_message = "User not found."


class AuthService:
    """
    Compose the credential store, password hasher and token service.

    Holds no mutable state; build one per request around that request's session.
    """

    def __init__(self, store: UserStore, tokens: TokenService, hasher: PasswordHasher) -> None:
        self.store = store
        self.tokens = tokens
        self.hasher = hasher

    def login(self, identifier: str, password: str) -> AuthResponse:
        """
        Authenticate by username or email and issue an access/refresh pair.

        Raises InvalidCredentials for an unknown identifier or wrong password and
        AccountDisabled for a disabled account (checked before the password).
        The last-login timestamp is best-effort: a failed write is logged and
        does not fail the login.
        """
        user = self.store.get_by_username_or_email(identifier)
        if user is None:
            logger.info("Login rejected", extra={"reason": "unknown_identifier"})
            raise InvalidCredentials()
        if not user.enabled:
            logger.info("Login rejected", extra={"reason": "disabled", "username": user.username})
            raise AccountDisabled()
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected", extra={"reason": "bad_password", "username": user.username})
            raise InvalidCredentials()

        username, email, role = user.username, user.email, user.role
        try:
            self.store.update_last_login(user)
        except SQLAlchemyError as e:
            self.store.db.rollback()
            logger.warning("Could not record last login for %s: %s", username, e)

        logger.info("Login succeeded", extra={"username": username})
        return self._auth_response(username, email, role)

    def register(
        self,
        username: str,
        password: str,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> AuthResponse:
        """
        Create a USER account and issue tokens.

        Username conflicts are reported before email conflicts. The pre-checks
        only short-circuit; the unique indexes decide when two registrations race.
        """
        if self.store.exists_by_username(username):
            raise UsernameTaken()
        if self.store.exists_by_email(email):
            raise EmailTaken()

        user = User(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
            role=DEFAULT_ROLE,
            enabled=True,
            first_name=first_name,
            last_name=last_name,
        )
        try:
            user = self.store.save(user)
        except DuplicateUserError as e:
            if e.field == "username":
                raise UsernameTaken() from e
            raise EmailTaken() from e

        logger.info("User registered", extra={"username": user.username})
        return self._auth_response(user.username, user.email, user.role)

    def refresh(self, refresh_token: str) -> AuthResponse:
        """Exchange a refresh token for a new pair. The enabled flag is not re-checked."""
        try:
            username = self.tokens.extract_subject(refresh_token)
        except TokenInvalid as e:
            raise InvalidRefreshToken() from e
        user = self.store.get_by_username(username)
        if user is None:
            raise InvalidRefreshToken()
        logger.info("Tokens refreshed", extra={"username": user.username})
        return self._auth_response(user.username, user.email, user.role)

    def current_user(self, access_token: str) -> User:
        """
        Resolve the user an access token was issued to.

        TokenInvalid propagates unchanged. Callers must not render password_hash.
        """
        username = self.tokens.extract_subject(access_token)
        user = self.store.get_by_username(username)
        if user is None:
            raise UserNotFound()
        return user

    def _auth_response(self, username: str, email: str, role: str) -> AuthResponse:
        return AuthResponse(
            access_token=self.tokens.issue_access_token(username, role),
            refresh_token=self.tokens.issue_refresh_token(username),
            username=username,
            email=email,
            role=role,
            expires_in=self.tokens.access_ttl_ms,
        )
