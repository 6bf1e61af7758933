from autoelite_admin.api.auth import AuthApi
from autoelite_admin.api.common import (
    ApiError,
    MalformedResponseError,
    SessionExpiredError,
    fetch_with_auth,
    upload_with_auth,
)
from autoelite_admin.api.dealers import DealersApi
from autoelite_admin.api.images import ImagesApi
from autoelite_admin.api.users import UsersApi
from autoelite_admin.api.vehicles import VehiclesApi


class ApiFactory:
    """One constructor per resource, all taking (base_url, get_token, client=None)"""

    create_auth_api = AuthApi
    create_users_api = UsersApi
    create_dealers_api = DealersApi
    create_vehicles_api = VehiclesApi
    create_images_api = ImagesApi


api_factory = ApiFactory()

__all__ = [
    "ApiError",
    "SessionExpiredError",
    "MalformedResponseError",
    "fetch_with_auth",
    "upload_with_auth",
    "AuthApi",
    "UsersApi",
    "DealersApi",
    "VehiclesApi",
    "ImagesApi",
    "ApiFactory",
    "api_factory",
]
