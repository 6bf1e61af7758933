from typing import Any, Dict, List, Mapping

from pydantic import BaseModel

from autoelite_admin.api.common import ResourceApi, to_payload
from autoelite_admin.models.responses import SuccessResponse


class DealersApi(ResourceApi):
    async def get_all(self) -> List[Dict[str, Any]]:
        return await self._fetch("/api/dealers")

    async def get_by_id(self, dealer_id: int) -> Dict[str, Any]:
        return await self._fetch(f"/api/dealers/{dealer_id}")

    async def create(self, dealer_data: BaseModel | Mapping[str, Any]) -> Dict[str, Any]:
        return await self._fetch("/api/dealers", "POST", json_body=to_payload(dealer_data))

    async def update(
        self, dealer_id: int, dealer_data: BaseModel | Mapping[str, Any]
    ) -> Dict[str, Any]:
        return await self._fetch(
            f"/api/dealers/{dealer_id}", "PUT", json_body=to_payload(dealer_data)
        )

    async def delete(self, dealer_id: int) -> SuccessResponse:
        return await self._fetch(
            f"/api/dealers/{dealer_id}", "DELETE", response_model=SuccessResponse
        )
