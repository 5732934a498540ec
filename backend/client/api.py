"""
HTTP client for the authentication endpoints.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from shared.models import User
from .exceptions import ApiUnavailableError, AuthRequestRejectedError

logger = logging.getLogger(__name__)


class SessionGrant(BaseModel):
    """A token issued by register or login."""

    user_id: int
    auth_token: str
    user: User


class AuthApiClient:
    """
    Thin async wrapper over the auth endpoints.

    Every failure surfaces as either AuthRequestRejectedError (the server
    said no) or ApiUnavailableError (no usable answer).
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "AuthApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def register(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> SessionGrant:
        data = await self._request(
            "POST",
            "/api/users/register",
            json={"email": email, "password": password, "username": username},
        )
        return self._parse(SessionGrant, data)

    async def login(self, email: str, password: str) -> SessionGrant:
        data = await self._request(
            "POST",
            "/api/auth/login",
            json={"email": email, "password": password},
        )
        return self._parse(SessionGrant, data)

    async def verify(self, token: str) -> User:
        data = await self._request(
            "GET",
            "/api/auth/verify",
            headers={"Authorization": f"Bearer {token}"},
        )
        return self._parse(User, data.get("user"))

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise ApiUnavailableError(f"Could not reach the server: {e.__class__.__name__}")

        if response.status_code >= 500:
            raise ApiUnavailableError(f"Server error ({response.status_code})")

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise AuthRequestRejectedError(
                message or f"Request failed ({response.status_code})",
                status_code=response.status_code,
                code=body.get("error") if isinstance(body, dict) else None,
            )

        if not isinstance(body, dict):
            raise ApiUnavailableError("Unexpected response from server")
        return body

    @staticmethod
    def _parse(model: type[BaseModel], data: Any):
        try:
            return model.model_validate(data)
        except PydanticValidationError:
            raise ApiUnavailableError("Unexpected response from server")
