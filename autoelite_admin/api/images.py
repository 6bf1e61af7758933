"""
Images API facade

Uploads go through the backend, which forwards them to the image store and
returns the store's record. Listing is paginated.
"""
import json
import logging
from typing import Any, Dict

from autoelite_admin.api.common import ResourceApi, upload_with_auth
from autoelite_admin.models.responses import (
    ImageListResponse,
    ImageUploadResponse,
    MessageResponse,
)
from autoelite_admin.services.image_files import ImageFile

logger = logging.getLogger(__name__)


class ImagesApi(ResourceApi):
    async def upload(
        self, image_file: ImageFile, metadata: Dict[str, Any] | None = None
    ) -> ImageUploadResponse:
        """
        Upload one image as multipart form data.

        Fields:
            image: the file itself
            metadata: JSON string, only sent when metadata is given
        """
        form = {"metadata": json.dumps(metadata)} if metadata else None
        logger.info(f"Uploading {image_file.filename} ({image_file.size} bytes)")
        return await upload_with_auth(
            self.base_url,
            "/api/images/upload",
            files={"image": image_file.as_multipart()},
            data=form,
            get_token=self.get_token,
            client=self.client,
            response_model=ImageUploadResponse,
        )

    async def get_all(self, page: int = 1, per_page: int = 100) -> ImageListResponse:
        return await self._fetch(
            "/api/images",
            params={"page": page, "per_page": per_page},
            response_model=ImageListResponse,
        )

    async def delete(self, image_id: str) -> MessageResponse:
        return await self._fetch(
            f"/api/images/{image_id}", "DELETE", response_model=MessageResponse
        )
