"""
Authentication service implementation.

Registers users, authenticates credentials, and issues and verifies
stateless session tokens. Blocking work (password hashing, store access)
runs in worker threads so the event loop keeps serving other requests
and socket deliveries.
"""

import asyncio
from datetime import timedelta
import logging
from typing import Optional

from shared.config import Settings
from shared.models import User

from .exceptions import DuplicateEmailError, InvalidCredentialsError, InvalidTokenError
from .interfaces import IAuthService, IUserRepository
from .models import AuthResult, UserRecord, normalize_email
from .security import PasswordHasher, TokenCodec

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Token model: signed JWTs with a fixed lifetime. Verification checks the
    signature and expiry, then loads the user so the admin flag is always
    current. There is no server-side revocation; logout is client-side.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        tokens: TokenCodec,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens

    @classmethod
    def from_settings(cls, users: IUserRepository, settings: Settings) -> "AuthService":
        """Build a service wired to the configured secret and hash cost."""
        return cls(
            users=users,
            hasher=PasswordHasher(rounds=settings.password_hash_rounds),
            tokens=TokenCodec(
                secret=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                audience=settings.jwt_audience,
                ttl=timedelta(minutes=settings.token_ttl_minutes),
            ),
        )

    async def register(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> AuthResult:
        """Create an account; uniqueness is enforced by the store on insert."""
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        try:
            record = await asyncio.to_thread(
                self._users.create, normalize_email(email), password_hash, username
            )
        except DuplicateEmailError:
            logger.info("Registration rejected: email already registered")
            raise

        logger.info(f"Registered user {record.id}")
        return self._issue(record)

    async def login(self, email: str, password: str) -> AuthResult:
        """Authenticate credentials; unknown email and wrong password look the same."""
        record = await asyncio.to_thread(self._users.get_by_email, normalize_email(email))

        if record is None:
            await asyncio.to_thread(self._hasher.dummy_verify)
            logger.info("Login failed")
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(self._hasher.verify, password, record.password_hash)
        if not valid:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        return self._issue(record)

    async def verify(self, token: Optional[str]) -> User:
        """Resolve a token to the current state of its user."""
        payload = self._tokens.decode(token)

        try:
            user_id = int(payload.sub)
        except ValueError:
            raise InvalidTokenError("Invalid token subject")

        record = await asyncio.to_thread(self._users.get_by_id, user_id)
        if record is None:
            logger.info(f"Token subject {user_id} no longer exists")
            raise InvalidTokenError("Token user not found")

        return record.to_user()

    async def ensure_admin(self, email: str, password: str) -> User:
        """
        Make sure an administrator account exists for ``email``.

        Creates the account if missing, otherwise only sets the admin flag;
        an existing password is left untouched.
        """
        email = normalize_email(email)
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        try:
            record = await asyncio.to_thread(
                self._users.create, email, password_hash, "admin", True
            )
        except DuplicateEmailError:
            existing = await asyncio.to_thread(self._users.get_by_email, email)
        else:
            logger.info(f"Created admin user {record.id}")
            return record.to_user()

        if existing.is_admin:
            return existing.to_user()

        promoted = await asyncio.to_thread(self._users.set_admin, existing.id, True)
        logger.info(f"Granted admin to user {promoted.id}")
        return promoted.to_user()

    def _issue(self, record: UserRecord) -> AuthResult:
        return AuthResult(
            user_id=record.id,
            auth_token=self._tokens.issue(record.id),
            user=record.to_user(),
        )
