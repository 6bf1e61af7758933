from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from autoelite_admin.api.connection import create_apis
from autoelite_admin.middleware.auth import AUTH_TOKEN_KEY, InMemorySessionStore
from fake_backend import BASE_URL, VALID_TOKEN, create_fake_backend


@pytest.fixture(scope="function")
def backend():
    """Fresh fake backend per test so recorded requests and data never leak"""
    return create_fake_backend()


@pytest_asyncio.fixture(scope="function")
async def http_client(backend):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=backend)) as client:
        yield client


@pytest.fixture(scope="function")
def session_store():
    return InMemorySessionStore({AUTH_TOKEN_KEY: VALID_TOKEN})


@pytest.fixture(scope="function")
def apis(http_client, session_store):
    return create_apis(BASE_URL, session_store, http_client)


@pytest.fixture(scope="function")
def images_api():
    """Images facade double: uploads succeed with sequential ids, deletes succeed"""
    api = AsyncMock()
    counter = {"n": 0}

    def _upload(image_file, metadata=None):
        counter["n"] += 1
        image_id = f"cf_{counter['n']}"
        return {
            "success": True,
            "image": {
                "id": image_id,
                "variants": [f"https://imagedelivery.net/hash1/{image_id}/public"],
            },
        }

    api.upload.side_effect = _upload
    api.delete.return_value = {"success": True, "message": "Image deleted"}
    return api


@pytest.fixture(scope="function")
def notified():
    """Collects every list handed to on_images_uploaded"""
    return []
