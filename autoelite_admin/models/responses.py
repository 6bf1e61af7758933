"""
Response envelopes shared by several endpoints.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from autoelite_admin.models.image import UploadedImagePayload


class SuccessResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool


class MessageResponse(SuccessResponse):
    message: str | None = None


class ImageUploadResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = False
    image: UploadedImagePayload | None = None
    error: str | None = None


class ImageListResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    images: List[Dict[str, Any]] = Field(default_factory=list)
    total: int = 0
