"""Issue and verify HMAC-signed JWT access and refresh tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from enum import Enum
from functools import lru_cache
from typing import Any

import jwt

from app.core.config import HMAC_SECRET_MIN_BYTES, get_settings

# Claims every token must carry; role is added to access tokens only.
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenInvalid(Exception):
    """Raised when a token is malformed, has a bad signature, or has expired."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TokenStatus(str, Enum):
    """Outcome of checking a token against an expected subject."""

    VALID = "valid"
    SUBJECT_MISMATCH = "subject_mismatch"
    INVALID = "invalid"


class TokenService:
    """
    Mint and verify signed, time-limited bearer tokens.

    Holds only the signing secret, the algorithm and the two TTLs; instances are
    immutable and safe to share across requests. Nothing is persisted: a token
    stays valid until it expires.
    TTLs are whole seconds because iat and exp are encoded in seconds.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        access_ttl_ms: int = 86_400_000,
        refresh_ttl_ms: int = 604_800_000,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if algorithm not in HMAC_SECRET_MIN_BYTES:
            raise ValueError(f"Unsupported JWT algorithm {algorithm!r}; use an HMAC algorithm")
        min_bytes = HMAC_SECRET_MIN_BYTES[algorithm]
        if len(secret.encode("utf-8")) < min_bytes:
            raise ValueError(f"JWT secret must be at least {min_bytes} bytes for {algorithm}")
        if access_ttl_ms <= 0 or refresh_ttl_ms <= 0:
            raise ValueError("Token TTLs must be positive")
        if access_ttl_ms % 1000 or refresh_ttl_ms % 1000:
            raise ValueError("Token TTLs must be whole seconds; exp is encoded in seconds")
        self._secret = secret
        self._algorithm = algorithm
        self._access_ttl_ms = access_ttl_ms
        self._refresh_ttl_ms = refresh_ttl_ms
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def access_ttl_ms(self) -> int:
        return self._access_ttl_ms

    @property
    def refresh_ttl_ms(self) -> int:
        return self._refresh_ttl_ms

    def issue_access_token(self, subject: str, role: str) -> str:
        """Create an access token carrying sub and role, valid for the access TTL."""
        return self._issue({"sub": subject, "role": role}, self._access_ttl_ms)

    def issue_refresh_token(self, subject: str) -> str:
        """Create a refresh token carrying only sub, valid for the refresh TTL."""
        return self._issue({"sub": subject}, self._refresh_ttl_ms)

    def extract_subject(self, token: str) -> str:
        return self._decode(token)["sub"]

    def extract_role(self, token: str) -> str:
        """Return the role claim. Refresh tokens have none and are rejected."""
        role = self._decode(token).get("role")
        if not isinstance(role, str):
            raise TokenInvalid("Token has no role claim.")
        return role

    def extract_expiry(self, token: str) -> datetime:
        return datetime.fromtimestamp(self._decode(token)["exp"], tz=UTC)

    def is_valid(self, token: str, expected_subject: str) -> bool:
        """
        True when the token verifies and its subject equals expected_subject.

        A subject mismatch returns False, but a malformed, forged or expired token
        raises TokenInvalid. Use check() for a single result covering all three cases.
        """
        return self.extract_subject(token) == expected_subject

    def check(self, token: str, expected_subject: str) -> TokenStatus:
        """Classify a token as valid, issued to another subject, or invalid."""
        try:
            subject = self.extract_subject(token)
        except TokenInvalid:
            return TokenStatus.INVALID
        if subject != expected_subject:
            return TokenStatus.SUBJECT_MISMATCH
        return TokenStatus.VALID

    def _issue(self, claims: dict[str, Any], ttl_ms: int) -> str:
        now = self._clock()
        payload = {
            **claims,
            "iat": now,
            "exp": now + timedelta(milliseconds=ttl_ms),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def _decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry and return the claims.

        PyJWT checks the signature before it validates any claim; exp is
        required and must lie in the future. Either failure raises TokenInvalid.
        """
        if not isinstance(token, str) or token.count(".") != 2:
            raise TokenInvalid("Token must have exactly three segments.")
        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenInvalid("Token has expired.") from e
        except jwt.PyJWTError as e:
            raise TokenInvalid(f"Invalid token: {e}") from e


@lru_cache
def get_token_service() -> TokenService:
    """Return the process-wide token service built from settings."""
    settings = get_settings()
    return TokenService(
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        access_ttl_ms=settings.JWT_ACCESS_EXPIRATION_MS,
        refresh_ttl_ms=settings.JWT_REFRESH_EXPIRATION_MS,
    )
