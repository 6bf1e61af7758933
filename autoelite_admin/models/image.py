from enum import Enum
from typing import Annotated, Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator

from autoelite_admin.models.utils import CAMEL_CASE_CONFIG

# Ids minted by older clients for images that never reached the image store
LEGACY_LOCAL_ID_PREFIX = "local_"


class ImageState(str, Enum):
    PENDING = "pending"  # local only, not in the image store yet
    PERSISTED = "persisted"


class ImageRecord(BaseModel):
    """An image as the admin site tracks it: one entry per uploaded (or staged) file."""

    model_config = ConfigDict(extra="ignore")

    id: Annotated[str, Field(min_length=1)]
    url: str | None = None
    filename: str | None = None
    uploaded: str | None = None
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    state: ImageState = ImageState.PERSISTED

    @model_validator(mode="before")
    @classmethod
    def _legacy_local_ids_are_pending(cls, data: Any) -> Any:
        if isinstance(data, dict) and "state" not in data:
            image_id = str(data.get("id") or "")
            if image_id.startswith(LEGACY_LOCAL_ID_PREFIX):
                data = {**data, "state": ImageState.PENDING}
        # tags/metadata may come back as null from stored state
        if isinstance(data, dict):
            if data.get("tags") is None:
                data = {**data, "tags": []}
            if data.get("metadata") is None:
                data = {**data, "metadata": {}}
        return data

    @property
    def is_persisted(self) -> bool:
        return self.state is ImageState.PERSISTED


class ImageUploadMetadata(BaseModel):
    """Metadata sent alongside every upload; dumped with camelCase keys."""

    model_config = CAMEL_CASE_CONFIG

    # Identity markers required on every upload
    project: str
    source: str = "admin-site"
    application: str

    project_name: str | None = None
    dealer_id: int | None = None
    vehicle_id: int | None = None
    original_filename: str | None = None
    upload_date: str | None = None
    file_type: str | None = None
    file_size: Annotated[int, Field(ge=0)] | None = None
    description: str | None = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UploadedImagePayload(BaseModel):
    """The `image` object the upload endpoint returns."""

    model_config = ConfigDict(extra="ignore")

    id: str
    variants: List[str] | str | None = None
    filename: str | None = None
    uploaded: str | None = None

    def first_variant(self) -> str | None:
        if isinstance(self.variants, str):
            return self.variants or None
        if self.variants:
            return self.variants[0]
        return None
