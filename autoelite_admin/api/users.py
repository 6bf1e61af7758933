"""
Users API facade

CRUD over admin-site user accounts plus password changes.
"""
from typing import Any, Dict, List, Mapping

from pydantic import BaseModel

from autoelite_admin.api.common import ResourceApi, to_payload
from autoelite_admin.models.responses import MessageResponse, SuccessResponse
from autoelite_admin.models.user import ChangePasswordRequest


class UsersApi(ResourceApi):
    async def get_all(self) -> List[Dict[str, Any]]:
        return await self._fetch("/api/users")

    async def get_by_id(self, user_id: int) -> Dict[str, Any]:
        return await self._fetch(f"/api/users/{user_id}")

    async def create(self, user_data: BaseModel | Mapping[str, Any]) -> Dict[str, Any]:
        return await self._fetch("/api/users", "POST", json_body=to_payload(user_data))

    async def update(self, user_id: int, user_data: BaseModel | Mapping[str, Any]) -> Dict[str, Any]:
        return await self._fetch(f"/api/users/{user_id}", "PUT", json_body=to_payload(user_data))

    async def change_password(
        self, user_id: int, new_password: str, current_password: str | None = None
    ) -> MessageResponse:
        body = ChangePasswordRequest(new_password=new_password, current_password=current_password)
        return await self._fetch(
            f"/api/users/{user_id}/change-password",
            "POST",
            json_body=to_payload(body),
            response_model=MessageResponse,
        )

    async def delete(self, user_id: int) -> SuccessResponse:
        return await self._fetch(f"/api/users/{user_id}", "DELETE", response_model=SuccessResponse)
