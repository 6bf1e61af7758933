"""
Local preview URLs for images that only exist on this machine so far.

Mirrors URL.createObjectURL / URL.revokeObjectURL: every created URL holds a
reference to the file until it is revoked.
"""
import logging
import uuid
from typing import Dict, Protocol

from autoelite_admin.services.image_files import ImageFile

logger = logging.getLogger(__name__)

BLOB_URL_PREFIX = "blob:"


class PreviewUrls(Protocol):
    def create(self, image_file: ImageFile) -> str: ...

    def revoke(self, url: str) -> None: ...


class BlobUrlRegistry:
    def __init__(self, origin: str = "autoelite-admin"):
        self.origin = origin
        self._handles: Dict[str, ImageFile] = {}

    def create(self, image_file: ImageFile) -> str:
        url = f"{BLOB_URL_PREFIX}{self.origin}/{uuid.uuid4()}"
        self._handles[url] = image_file
        return url

    def revoke(self, url: str) -> None:
        if self._handles.pop(url, None) is None:
            logger.warning(f"Revoking unknown preview URL: {url}")

    def resolve(self, url: str) -> ImageFile | None:
        return self._handles.get(url)

    def __len__(self) -> int:
        return len(self._handles)


def is_preview_url(url: str | None) -> bool:
    return bool(url) and url.startswith(BLOB_URL_PREFIX)
