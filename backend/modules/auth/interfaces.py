"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service itself depends on IUserRepository, the Credential Store contract.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import User
from .models import AuthResult, UserRecord


@runtime_checkable
class IUserRepository(Protocol):
    """
    Credential Store contract.

    The store is the authority on email uniqueness: ``create`` must reject
    a duplicate atomically instead of relying on an earlier read.
    """

    def create(
        self,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
        is_admin: bool = False,
    ) -> UserRecord:
        """
        Insert a new user.

        Raises:
            DuplicateEmailError: If the normalized email already exists
            CredentialStoreError: If the store fails
        """
        ...

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        """Look up a user by ID."""
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Look up a user by normalized email."""
        ...

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[UserRecord]:
        """Set the admin flag out-of-band. Returns None for unknown users."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and the notification socket.
    """

    async def register(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> AuthResult:
        """
        Create an account and issue its first session token.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate credentials and issue a fresh session token.

        Raises:
            InvalidCredentialsError: For an unknown email or wrong password
        """
        ...

    async def verify(self, token: Optional[str]) -> User:
        """
        Resolve a session token to its user.

        Side-effect-free; safe to call on every request.

        Raises:
            UnauthenticatedError: If the token is missing, invalid, expired,
                or bound to a user that no longer exists
        """
        ...
