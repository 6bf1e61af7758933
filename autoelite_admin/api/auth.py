"""
Authentication endpoints: login, current user, token verification.
"""
from typing import Any, Dict

from autoelite_admin.api.common import ResourceApi
from autoelite_admin.models.user import LoginRequest, LoginResponse, VerifyResponse


class AuthApi(ResourceApi):
    async def login(self, username: str, password: str) -> LoginResponse:
        body = LoginRequest(username=username, password=password)
        return await self._fetch(
            "/api/auth/login",
            "POST",
            json_body=body.model_dump(),
            response_model=LoginResponse,
        )

    async def get_current_user(self) -> Dict[str, Any]:
        return await self._fetch("/api/auth/me")

    async def verify_token(self) -> VerifyResponse:
        return await self._fetch("/api/auth/verify", "POST", response_model=VerifyResponse)
