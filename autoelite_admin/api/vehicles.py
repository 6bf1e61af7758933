"""
Vehicles API facade

Vehicle inventory CRUD. Listing can be scoped to a single dealer.
"""
from typing import Any, List, Mapping

from pydantic import BaseModel, TypeAdapter

from autoelite_admin.api.common import MalformedResponseError, ResourceApi, to_payload
from autoelite_admin.models.responses import SuccessResponse
from autoelite_admin.models.vehicle import Vehicle

_vehicle_list = TypeAdapter(List[Vehicle])


class VehiclesApi(ResourceApi):
    async def get_all(self, dealer_id: int | None = None) -> List[Vehicle]:
        """All vehicles, or only those of dealer_id when given"""
        params = {"dealer_id": dealer_id} if dealer_id else None
        data = await self._fetch("/api/vehicles", params=params)
        try:
            return _vehicle_list.validate_python(data)
        except ValueError as e:
            raise MalformedResponseError("Invalid response from server") from e

    async def get_by_id(self, vehicle_id: int) -> Vehicle:
        return await self._fetch(f"/api/vehicles/{vehicle_id}", response_model=Vehicle)

    async def create(self, vehicle_data: BaseModel | Mapping[str, Any]) -> Vehicle:
        return await self._fetch(
            "/api/vehicles", "POST", json_body=to_payload(vehicle_data), response_model=Vehicle
        )

    async def update(self, vehicle_id: int, vehicle_data: BaseModel | Mapping[str, Any]) -> Vehicle:
        return await self._fetch(
            f"/api/vehicles/{vehicle_id}",
            "PUT",
            json_body=to_payload(vehicle_data),
            response_model=Vehicle,
        )

    async def delete(self, vehicle_id: int) -> SuccessResponse:
        return await self._fetch(
            f"/api/vehicles/{vehicle_id}", "DELETE", response_model=SuccessResponse
        )
