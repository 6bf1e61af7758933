"""
AutoElite backend connection

Settings come from the environment, the same way the admin site reads its
REACT_APP_* build variables. get_apis() hands out one shared set of facades
bound to the session store, so every caller sends the same bearer token.
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path

import httpx

from autoelite_admin.api.auth import AuthApi
from autoelite_admin.api.dealers import DealersApi
from autoelite_admin.api.images import ImagesApi
from autoelite_admin.api.users import UsersApi
from autoelite_admin.api.vehicles import VehiclesApi
from autoelite_admin.middleware.auth import (
    AUTH_TOKEN_KEY,
    FileSessionStore,
    SessionStore,
    token_accessor,
)
from autoelite_admin.services.image_uploader import ImageUploader
from autoelite_admin.utils.cdn_url import DEFAULT_DELIVERY_URL

logger = logging.getLogger(__name__)

API_URL = os.getenv("AUTOELITE_API_URL", "https://api.autoelite.io")
CF_IMAGE_DELIVERY_URL = os.getenv("CF_IMAGE_DELIVERY_URL", DEFAULT_DELIVERY_URL)
CF_ACCOUNT_HASH = os.getenv("CF_ACCOUNT_HASH", "")
PROJECT_IDENTIFIER = os.getenv("AUTOELITE_PROJECT_IDENTIFIER", "autoelite")
APPLICATION_IDENTIFIER = os.getenv("AUTOELITE_APPLICATION_IDENTIFIER", "autoelite")
SESSION_FILE = os.getenv(
    "AUTOELITE_SESSION_FILE", str(Path.home() / ".autoelite" / "session.json")
)


@dataclass
class Apis:
    auth: AuthApi
    users: UsersApi
    dealers: DealersApi
    vehicles: VehiclesApi
    images: ImagesApi


def create_apis(
    base_url: str = API_URL,
    session_store: SessionStore | None = None,
    client: httpx.AsyncClient | None = None,
) -> Apis:
    """Build all five facades against one backend and one session store"""
    store = session_store if session_store is not None else FileSessionStore(SESSION_FILE)
    get_token = token_accessor(store, AUTH_TOKEN_KEY)
    return Apis(
        auth=AuthApi(base_url, get_token, client),
        users=UsersApi(base_url, get_token, client),
        dealers=DealersApi(base_url, get_token, client),
        vehicles=VehiclesApi(base_url, get_token, client),
        images=ImagesApi(base_url, get_token, client),
    )


# Global instance
_apis: Apis | None = None


def init_apis(
    base_url: str = API_URL,
    session_store: SessionStore | None = None,
    client: httpx.AsyncClient | None = None,
) -> Apis:
    global _apis
    _apis = create_apis(base_url, session_store, client)
    logger.info(f"API facades initialised for {base_url}")
    return _apis


def get_apis() -> Apis:
    """Get the shared facades with runtime check"""
    if _apis is None:
        raise RuntimeError("API facades not initialized")
    return _apis


def create_image_uploader(**options) -> ImageUploader:
    """Uploader bound to the shared images facade and the configured image delivery settings"""
    options.setdefault("delivery_base", CF_IMAGE_DELIVERY_URL)
    options.setdefault("account_hash", CF_ACCOUNT_HASH)
    options.setdefault("project_identifier", PROJECT_IDENTIFIER)
    options.setdefault("application_identifier", APPLICATION_IDENTIFIER)
    return ImageUploader(get_apis().images, **options)


async def login(username: str, password: str, session_store: SessionStore | None = None) -> dict:
    """Log in and keep the token where the facades will find it"""
    store = session_store if session_store is not None else FileSessionStore(SESSION_FILE)
    apis = create_apis(API_URL, store)
    result = await apis.auth.login(username, password)
    store.set_item(AUTH_TOKEN_KEY, result.token)
    return result.user or {}


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    async def _check_session():
        apis = init_apis()
        verification = await apis.auth.verify_token()
        print(f"Backend: {API_URL}")
        print(f"Token valid: {verification.valid}")

    asyncio.run(_check_session())
