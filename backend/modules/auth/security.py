"""
Password hashing and session token encoding.

Passwords are stored as salted pbkdf2_sha256 hashes (passlib).
Session tokens are stateless HS256 JWTs (PyJWT) carrying the user ID;
they expire on their own and are never stored server-side.
"""

from datetime import datetime, timedelta, timezone
import uuid

import jwt
from passlib.context import CryptContext

from .exceptions import (
    AuthConfigurationError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
)
from .models import TokenPayload


class PasswordHasher:
    """Salted one-way password hashing."""

    def __init__(self, rounds: int = 29000):
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)

    def dummy_verify(self) -> None:
        """Spend the same time as a real verify, for unknown accounts."""
        self._context.dummy_verify()


class TokenCodec:
    """
    Issues and decodes signed session tokens.

    A token is valid iff its signature, audience and expiry check out;
    the same token always decodes to the same payload until it expires.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: str = "ecochallenge",
        ttl: timedelta = timedelta(hours=24),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int, now: datetime | None = None) -> str:
        """Sign a new token for ``user_id``."""
        if not self._secret:
            raise AuthConfigurationError()

        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
            "aud": self._audience,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str | None) -> TokenPayload:
        """
        Validate a token and return its claims.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If token is past its expiry
            InvalidTokenError: If token is malformed or wrongly signed
            AuthConfigurationError: If no secret is configured
        """
        if not token:
            raise MissingTokenError()
        if not self._secret:
            raise AuthConfigurationError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                options={"require": ["sub", "exp", "iat", "aud", "jti"]},
            )
            return TokenPayload(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")
