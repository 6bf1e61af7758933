import httpx
import pytest

from autoelite_admin.api import ApiError, SessionExpiredError, api_factory
from autoelite_admin.api.connection import create_apis, get_apis, init_apis
from autoelite_admin.middleware.auth import AUTH_TOKEN_KEY, InMemorySessionStore
from autoelite_admin.models.vehicle import Vehicle
from autoelite_admin.services.image_files import ImageFile
from fake_backend import BASE_URL, EXPIRED_TOKEN, VALID_TOKEN


# ====================
# AUTH
# ====================


async def test_login_returns_token_and_user(http_client):
    apis = create_apis(BASE_URL, InMemorySessionStore(), http_client)

    result = await apis.auth.login("admin", "secret")

    assert result.token == VALID_TOKEN
    assert result.user["username"] == "admin"


async def test_login_failure_surfaces_server_message(http_client):
    apis = create_apis(BASE_URL, InMemorySessionStore(), http_client)

    with pytest.raises(ApiError) as exc_info:
        await apis.auth.login("admin", "wrong")

    assert str(exc_info.value) == "Invalid credentials"


async def test_empty_password_is_sent_and_answered_by_the_server(http_client, backend):
    apis = create_apis(BASE_URL, InMemorySessionStore(), http_client)

    with pytest.raises(ApiError) as exc_info:
        await apis.auth.login("admin", "")

    assert exc_info.value.status == 400
    assert str(exc_info.value) == "Invalid credentials"
    assert backend.state.requests[-1]["path"] == "/api/auth/login"


async def test_current_user_and_verify(apis):
    assert (await apis.auth.get_current_user())["id"] == 1

    verification = await apis.auth.verify_token()
    assert verification.valid is True
    assert verification.user["username"] == "admin"


async def test_expired_session_is_reported(http_client):
    apis = create_apis(BASE_URL, InMemorySessionStore({AUTH_TOKEN_KEY: EXPIRED_TOKEN}), http_client)

    with pytest.raises(SessionExpiredError):
        await apis.users.get_all()


async def test_token_is_read_on_every_call(apis, session_store, backend):
    await apis.dealers.get_all()
    session_store.remove_item(AUTH_TOKEN_KEY)

    with pytest.raises(SessionExpiredError):
        await apis.dealers.get_all()
    assert "authorization" not in backend.state.requests[-1]["headers"]


# ====================
# USERS
# ====================


async def test_users_crud(apis, backend):
    created = await apis.users.create({"username": "sales", "role": "dealer"})
    assert created["id"] == 2

    updated = await apis.users.update(created["id"], {"role": "admin"})
    assert updated["role"] == "admin"
    assert (await apis.users.get_by_id(2))["role"] == "admin"
    assert len(await apis.users.get_all()) == 2

    deleted = await apis.users.delete(2)
    assert deleted.success is True
    assert 2 not in backend.state.users


async def test_change_password_sends_camel_case_body(apis, backend):
    result = await apis.users.change_password(1, "n3w-pass", current_password="old-pass")

    assert result.success is True
    assert result.message == "Password updated"
    assert backend.state.password_changes == [
        {"newPassword": "n3w-pass", "currentPassword": "old-pass"}
    ]


async def test_empty_new_password_reaches_the_server(apis, backend):
    await apis.users.change_password(1, "")

    assert backend.state.password_changes == [{"newPassword": ""}]


async def test_change_password_without_current_password(apis, backend):
    await apis.users.change_password(1, "n3w-pass")

    assert backend.state.password_changes == [{"newPassword": "n3w-pass"}]


async def test_missing_user_surfaces_not_found(apis):
    with pytest.raises(ApiError) as exc_info:
        await apis.users.get_by_id(99)

    assert str(exc_info.value) == "User not found"
    assert exc_info.value.status == 404


# ====================
# DEALERS
# ====================


async def test_dealers_crud(apis, backend):
    assert [d["name"] for d in await apis.dealers.get_all()] == ["Elite Motors", "Auto Hub"]

    created = await apis.dealers.create({"name": "City Cars"})
    assert (await apis.dealers.get_by_id(created["id"]))["name"] == "City Cars"

    await apis.dealers.update(created["id"], {"name": "City Cars Ltd"})
    assert backend.state.dealers[created["id"]]["name"] == "City Cars Ltd"

    assert (await apis.dealers.delete(created["id"])).success is True


# ====================
# VEHICLES
# ====================


async def test_vehicles_listing_scoped_to_dealer(apis, backend):
    everything = await apis.vehicles.get_all()
    dealer_two = await apis.vehicles.get_all(dealer_id=2)

    assert len(everything) == 2
    assert all(isinstance(v, Vehicle) for v in everything)
    assert [v.id for v in dealer_two] == [2]
    assert backend.state.requests[-1]["query"] == {"dealer_id": "2"}


async def test_vehicles_listing_without_dealer_sends_no_query(apis, backend):
    await apis.vehicles.get_all()

    assert backend.state.requests[-1]["query"] == {}


async def test_vehicles_crud(apis):
    created = await apis.vehicles.create({"dealer_id": 1, "make": "Honda", "model": "Civic"})
    assert created.make == "Honda"
    assert created.dealer_id == 1

    updated = await apis.vehicles.update(created.id, {"price": 21000, "featured": True})
    assert updated.price == 21000
    assert updated.featured is True

    fetched = await apis.vehicles.get_by_id(created.id)
    assert fetched.model == "Civic"

    assert (await apis.vehicles.delete(created.id)).success is True
    with pytest.raises(ApiError):
        await apis.vehicles.get_by_id(created.id)


async def test_vehicle_create_accepts_partial_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(201, json={"id": 42, "make": "Honda", "dealer_id": 1})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        vehicles = api_factory.create_vehicles_api(BASE_URL, lambda: VALID_TOKEN, client)
        created = await vehicles.create({"dealer_id": 1, "make": "Honda"})

    assert created.id == 42
    assert created.make == "Honda"
    assert created.title is None
    assert created.created_at is None
    assert created.images == []


# ====================
# IMAGES
# ====================


async def test_image_upload_is_multipart_with_metadata(apis, backend):
    image_file = ImageFile(filename="front.jpg", content_type="image/jpeg", content=b"jpeg-bytes")

    result = await apis.images.upload(image_file, {"project": "autoelite", "vehicleId": 7})

    assert result.success is True
    assert result.image.id == "cf_1"
    assert result.image.first_variant() == "https://imagedelivery.net/hash1/cf_1/public"

    upload = backend.state.uploads[0]
    assert upload["filename"] == "front.jpg"
    assert upload["content_type"] == "image/jpeg"
    assert upload["size"] == len(b"jpeg-bytes")
    assert upload["metadata"] == {"project": "autoelite", "vehicleId": 7}

    headers = backend.state.requests[-1]["headers"]
    assert headers["content-type"].startswith("multipart/form-data; boundary=")
    assert headers["authorization"] == f"Bearer {VALID_TOKEN}"


async def test_image_upload_without_metadata(apis, backend):
    await apis.images.upload(ImageFile(filename="a.png", content_type="image/png", content=b"png"))

    assert backend.state.uploads[0]["metadata"] is None


async def test_image_listing_and_delete(apis, backend):
    for name in ("a.jpg", "b.jpg", "c.jpg"):
        await apis.images.upload(ImageFile(filename=name, content_type="image/jpeg", content=b"x"))

    page = await apis.images.get_all(page=2, per_page=2)
    assert page.total == 3
    assert [image["id"] for image in page.images] == ["cf_3"]
    assert backend.state.requests[-1]["query"] == {"page": "2", "per_page": "2"}

    deleted = await apis.images.delete("cf_1")
    assert deleted.message == "Image deleted"

    with pytest.raises(ApiError) as exc_info:
        await apis.images.delete("cf_1")
    assert str(exc_info.value) == "Image not found"


# ====================
# WIRING
# ====================


def test_factory_builds_each_facade():
    get_token = lambda: "abc"  # noqa: E731

    users = api_factory.create_users_api("https://api.example.com/", get_token)

    assert users.base_url == "https://api.example.com"
    assert users.get_token() == "abc"
    assert api_factory.create_images_api("https://api.example.com", get_token).client is None


def test_get_apis_after_init(http_client, session_store):
    apis = init_apis(BASE_URL, session_store, http_client)

    assert get_apis() is apis
    assert apis.vehicles.get_token() == VALID_TOKEN
