"""
User account endpoints.

Provides registration, login and the current user's profile.
"""

from fastapi import APIRouter, Depends, status

from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthResult, LoginRequest, RegisterRequest
from shared.models import User
from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.post("/register", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Create an account and return its first session token.

    Fails with 400 DUPLICATE_EMAIL if the email is already registered.
    """
    return await auth.register(body.email, body.password, body.username)


@router.post("/login", response_model=AuthResult)
async def login(
    body: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Exchange credentials for a fresh session token.

    Fails with 401 INVALID_CREDENTIALS for an unknown email or a wrong
    password alike.
    """
    return await auth.login(body.email, body.password)


@router.get("/me", response_model=User)
async def get_current_user_profile(
    user: User = Depends(get_current_user),
) -> User:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return user
