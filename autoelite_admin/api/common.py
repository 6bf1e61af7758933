"""
Authenticated request helpers shared by every resource facade.

One request, one response: no retries and no timeout handling beyond httpx's
defaults. Non-success statuses are translated into ApiError subclasses with a
human-readable message, which is all the admin UI ever shows.
"""
import logging
from typing import Any, Dict, Mapping, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from autoelite_admin.middleware.auth import TokenAccessor, bearer_headers, no_token

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """Error raised for any failed backend call"""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class SessionExpiredError(ApiError):
    def __init__(self):
        super().__init__(SESSION_EXPIRED_MESSAGE, status=401)


class MalformedResponseError(ApiError):
    """The call succeeded but the payload is not what the endpoint promises"""


def _error_from_response(response: httpx.Response) -> ApiError:
    if response.status_code == 401:
        return SessionExpiredError()

    message = None
    try:
        error_data = response.json()
    except ValueError:
        error_data = None
    if isinstance(error_data, dict) and error_data.get("error"):
        message = str(error_data["error"])

    return ApiError(message or f"API error: {response.status_code}", status=response.status_code)


def _parse_success(response: httpx.Response, response_model: Type[ModelT] | None) -> Any:
    try:
        data = response.json()
    except ValueError:
        raise MalformedResponseError(
            "Invalid response from server: body is not JSON", status=response.status_code
        )

    if response_model is None:
        return data
    try:
        return response_model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Unexpected {response_model.__name__} payload: {e}")
        raise MalformedResponseError(
            "Invalid response from server", status=response.status_code
        ) from e


async def _send(
    client: httpx.AsyncClient | None, method: str, url: str, **kwargs
) -> httpx.Response:
    try:
        if client is not None:
            return await client.request(method, url, **kwargs)
        async with httpx.AsyncClient() as session:
            return await session.request(method, url, **kwargs)
    except httpx.TransportError as e:
        logger.error(f"{method} {url} failed: {type(e).__name__}: {e}")
        raise ApiError(f"Network error: {e}") from e


async def fetch_with_auth(
    base_url: str,
    endpoint: str,
    method: str = "GET",
    *,
    json_body: Any = None,
    params: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
    get_token: TokenAccessor = no_token,
    client: httpx.AsyncClient | None = None,
    response_model: Type[ModelT] | None = None,
) -> Any:
    """
    Send a JSON request with the bearer token attached.

    Args:
        base_url: Backend origin, e.g. "https://api.autoelite.io"
        endpoint: Path appended verbatim to base_url
        method: HTTP verb
        json_body: Payload serialized as the JSON request body
        params: Query string parameters
        headers: Extra headers; these win over the defaults on conflict
        get_token: Called once per request; falsy means no Authorization header
        client: Shared httpx client; a throwaway one is used when omitted
        response_model: Validate the JSON body into this model before returning

    Returns:
        Parsed JSON body, or a response_model instance

    Raises:
        SessionExpiredError: on HTTP 401
        ApiError: on any other non-success status or a transport failure
        MalformedResponseError: when a success body is not the expected shape
    """
    url = f"{base_url}{endpoint}"
    merged_headers = httpx.Headers({"Content-Type": "application/json", **bearer_headers(get_token())})
    merged_headers.update(headers or {})

    request_kwargs: Dict[str, Any] = {"headers": merged_headers}
    if json_body is not None:
        request_kwargs["json"] = json_body
    if params:
        request_kwargs["params"] = params

    response = await _send(client, method, url, **request_kwargs)
    if not response.is_success:
        raise _error_from_response(response)
    return _parse_success(response, response_model)


async def upload_with_auth(
    base_url: str,
    endpoint: str,
    *,
    files: Mapping[str, Any],
    data: Mapping[str, str] | None = None,
    get_token: TokenAccessor = no_token,
    client: httpx.AsyncClient | None = None,
    response_model: Type[ModelT] | None = None,
) -> Any:
    """
    POST a multipart form. No Content-Type here: httpx writes it together
    with the multipart boundary.
    """
    url = f"{base_url}{endpoint}"
    response = await _send(
        client,
        "POST",
        url,
        headers=bearer_headers(get_token()),
        files=files,
        data=dict(data or {}),
    )
    if not response.is_success:
        raise _error_from_response(response)
    return _parse_success(response, response_model)


def to_payload(data: BaseModel | Mapping[str, Any]) -> Dict[str, Any]:
    """Request body for create/update calls that take either a model or a dict"""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True, by_alias=True)
    return dict(data)


class ResourceApi:
    """Base for the per-resource facades: holds the origin, token accessor and client"""

    def __init__(
        self,
        base_url: str,
        get_token: TokenAccessor = no_token,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.get_token = get_token
        self.client = client

    async def _fetch(self, endpoint: str, method: str = "GET", **kwargs) -> Any:
        return await fetch_with_auth(
            self.base_url,
            endpoint,
            method,
            get_token=self.get_token,
            client=self.client,
            **kwargs,
        )
