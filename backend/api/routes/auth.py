"""
Session endpoints used by the client session store.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthResult, LoginRequest, VerifyResponse
from shared.models import User
from ..dependencies import get_auth_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.post("/login", response_model=AuthResult)
async def login(
    body: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """Same as POST /api/users/login."""
    return await auth.login(body.email, body.password)


@router.get("/verify", response_model=VerifyResponse)
async def verify(user: User = Depends(get_current_user)) -> VerifyResponse:
    """
    Check a bearer token and return the user it belongs to.

    Returns 401 for a missing, invalid or expired token.
    """
    return VerifyResponse(user=user)
