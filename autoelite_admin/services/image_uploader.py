"""
Image uploader workflow used by the vehicle and dealer forms.

Holds the list of images attached to a form and drives every change to it:
batch uploads with capacity checks, delete-before-replace for single-image
slots, removal, and tag/description editing. Errors never escape the
operations; they land in `error` as one human-readable message, the way the
form displays them.

State: idle -> uploading -> idle. Files in a batch are uploaded one after
another, never concurrently.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Protocol, Sequence

from pydantic import ValidationError

from autoelite_admin.models.image import ImageRecord, ImageState, ImageUploadMetadata
from autoelite_admin.models.responses import ImageUploadResponse
from autoelite_admin.services.image_files import ImageFile, iso_timestamp, standardized_filename
from autoelite_admin.services.previews import BlobUrlRegistry, PreviewUrls, is_preview_url
from autoelite_admin.utils.cdn_url import (
    DEFAULT_DELIVERY_URL,
    DEFAULT_VARIANT,
    delivery_url,
    resolve_image_url,
)

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_TAGS = ("exterior", "interior", "engine", "damage", "feature", "document")

UPLOAD_FAILED_MESSAGE = "Failed to upload images. Please try again."
REMOVE_FAILED_MESSAGE = "Failed to remove image"
INVALID_UPLOAD_RESPONSE_MESSAGE = "Failed to upload image: Invalid response from server"
NO_SUPPORTED_FILES_MESSAGE = "No supported image files were provided."


class ImageApi(Protocol):
    """The two image endpoints the uploader needs"""

    async def upload(self, image_file: ImageFile, metadata: dict | None = None) -> Any: ...

    async def delete(self, image_id: str) -> Any: ...


class InvalidUploadResponseError(Exception):
    def __init__(self, message: str = INVALID_UPLOAD_RESPONSE_MESSAGE):
        super().__init__(message)


@dataclass
class EditContext:
    """A working copy of one image; nothing reaches the list until saved"""

    image: ImageRecord
    index: int


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _message(error: Exception, fallback: str) -> str:
    return str(error) or fallback


class ImageUploader:
    def __init__(
        self,
        images_api: ImageApi,
        *,
        on_images_uploaded: Callable[[List[ImageRecord]], None],
        existing_images: Iterable[ImageRecord] = (),
        vehicle_id: int | None = None,
        dealer_id: int | None = None,
        max_images: int = 10,
        project_name: str = "autoelite",
        allowed_tags: Sequence[str] = DEFAULT_ALLOWED_TAGS,
        delivery_base: str = DEFAULT_DELIVERY_URL,
        account_hash: str = "",
        project_identifier: str = "autoelite",
        application_identifier: str = "autoelite",
        previews: PreviewUrls | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.images_api = images_api
        self.on_images_uploaded = on_images_uploaded
        self.vehicle_id = vehicle_id
        self.dealer_id = dealer_id
        self.max_images = max_images
        self.project_name = project_name
        self.allowed_tags = list(allowed_tags)
        self.delivery_base = delivery_base
        self.account_hash = account_hash
        self.project_identifier = project_identifier
        self.application_identifier = application_identifier
        self.previews = previews if previews is not None else BlobUrlRegistry()
        self.clock = clock

        self.images: List[ImageRecord] = list(existing_images)
        self.is_uploading = False
        self.upload_progress = 0
        self.error: str | None = None
        self.editing: EditContext | None = None
        self.custom_tags: List[str] = []

    # ====================
    # CAPACITY
    # ====================

    @property
    def replaces_existing(self) -> bool:
        """Single-image slots replace their image instead of filling up"""
        return self.max_images == 1

    @property
    def remaining_slots(self) -> int:
        if self.replaces_existing:
            return 1
        return max(self.max_images - len(self.images), 0)

    @property
    def is_disabled(self) -> bool:
        return self.is_uploading or self.remaining_slots == 0

    def _check_capacity(self, incoming: int, free: int | None = None) -> bool:
        if incoming > (self.remaining_slots if free is None else free):
            self.error = f"You can only upload a maximum of {self.max_images} images."
            return False
        return True

    def _commit(self, images: List[ImageRecord]) -> None:
        self.images = images
        if self.editing is not None:
            self._follow_edited_image()
        self.on_images_uploaded(list(images))

    def _follow_edited_image(self) -> None:
        """Keep the open edit pointing at its image, or close it once that image is gone"""
        image_id = self.editing.image.id
        for index, image in enumerate(self.images):
            if image.id == image_id:
                self.editing.index = index
                return
        logger.info(f"Closing edit of image {image_id}: it is no longer in the list")
        self.editing = None

    def _release_previews(self, images: Iterable[ImageRecord]) -> None:
        for image in images:
            if is_preview_url(image.url):
                self.previews.revoke(image.url)

    # ====================
    # UPLOAD
    # ====================

    def _build_metadata(self, image_file: ImageFile, moment: datetime) -> ImageUploadMetadata:
        description_parts = [self.application_identifier, self.project_name]
        if self.dealer_id:
            description_parts.append(f"dealer {self.dealer_id}")
        if self.vehicle_id:
            description_parts.append(f"vehicle {self.vehicle_id}")

        return ImageUploadMetadata(
            project=self.project_identifier,
            application=self.application_identifier,
            project_name=self.project_name,
            dealer_id=self.dealer_id,
            vehicle_id=self.vehicle_id,
            original_filename=image_file.filename,
            upload_date=iso_timestamp(moment),
            file_type=image_file.content_type,
            file_size=image_file.size,
            description=" ".join(part for part in description_parts if part),
        )

    def _record_from_response(
        self, response: Any, filename: str, metadata: dict, moment: datetime
    ) -> ImageRecord:
        try:
            parsed = (
                response
                if isinstance(response, ImageUploadResponse)
                else ImageUploadResponse.model_validate(response)
            )
        except ValidationError as e:
            logger.error(f"Invalid response from image upload: {response!r}")
            raise InvalidUploadResponseError() from e

        if not (parsed.success and parsed.image):
            logger.error(f"Invalid response from image upload: {response!r}")
            raise InvalidUploadResponseError()

        payload = parsed.image
        url = payload.first_variant() or delivery_url(
            self.delivery_base, self.account_hash, payload.id, DEFAULT_VARIANT
        )
        return ImageRecord(
            id=payload.id,
            url=url,
            filename=payload.filename or filename,
            uploaded=payload.uploaded or iso_timestamp(moment),
            tags=[],
            metadata=metadata,
        )

    async def _delete_previous_images(self) -> None:
        logger.info("Deleting previous images before uploading new ones")
        for image in self.images:
            if not image.is_persisted:
                continue
            try:
                await self.images_api.delete(image.id)
                logger.info(f"Successfully deleted previous image with ID: {image.id}")
            except Exception as e:
                # Upload goes ahead even if the old image stays behind
                logger.warning(f"Failed to delete previous image with ID: {image.id}: {e}")

    async def upload_files(self, files: Sequence[ImageFile]) -> List[ImageRecord]:
        """
        Upload a batch of dropped or picked files.

        Returns the images uploaded by this call. Images that made it before a
        mid-batch failure are kept in the list; nothing is rolled back remotely.
        Ignored while another batch is still uploading.
        """
        if self.is_uploading:
            logger.warning(f"Ignoring {len(files)} files dropped while an upload is in progress")
            return []

        self.error = None

        accepted = [f for f in files if f.is_accepted()]
        for rejected in (f for f in files if not f.is_accepted()):
            logger.warning(f"Skipping unsupported file {rejected.filename} ({rejected.content_type})")
        if files and not accepted:
            self.error = NO_SUPPORTED_FILES_MESSAGE
            return []
        if not accepted:
            return []

        if not self._check_capacity(len(accepted)):
            return []

        self.is_uploading = True
        new_images: List[ImageRecord] = []
        replacing = self.replaces_existing and bool(self.images)

        try:
            if replacing:
                await self._delete_previous_images()

            for i, image_file in enumerate(accepted):
                self.upload_progress = 100 * i // len(accepted)

                moment = self.clock()
                filename = standardized_filename(
                    self.project_name,
                    image_file.filename,
                    i,
                    moment,
                    dealer_id=self.dealer_id,
                    vehicle_id=self.vehicle_id,
                )
                metadata = self._build_metadata(image_file, moment).to_payload()

                response = await self.images_api.upload(image_file, metadata)
                logger.info(f"Image upload response for {filename}: {response!r}")

                new_images.append(self._record_from_response(response, filename, metadata, moment))

        except Exception as e:
            logger.error(f"Error uploading images: {e}", exc_info=True)
            self.error = _message(e, UPLOAD_FAILED_MESSAGE)

        finally:
            self.is_uploading = False
            self.upload_progress = 0

        if new_images:
            if self.replaces_existing:
                self._release_previews(self.images)
                self._commit(new_images)
            else:
                self._commit(self.images + new_images)
        return new_images

    def stage_preview(self, image_file: ImageFile) -> ImageRecord | None:
        """Add a local-only image with a preview URL; it is never sent to the store"""
        self.error = None
        # Previews never replace anything, even in a single-image slot
        if not self._check_capacity(1, free=self.max_images - len(self.images)):
            return None

        url = self.previews.create(image_file)
        record = ImageRecord(
            id=url.rsplit("/", 1)[-1],
            url=url,
            filename=image_file.filename,
            uploaded=iso_timestamp(self.clock()),
            state=ImageState.PENDING,
        )
        self._commit(self.images + [record])
        return record

    # ====================
    # REMOVE
    # ====================

    async def remove_image(self, index: int) -> bool:
        """
        Remove the image at index. Persisted images are deleted remotely first;
        if that fails the list is left untouched and the error is set.
        """
        self.error = None
        image = self.images[index]

        try:
            if image.is_persisted:
                await self.images_api.delete(image.id)
        except Exception as e:
            logger.error(f"Error removing image {image.id}: {e}", exc_info=True)
            self.error = _message(e, REMOVE_FAILED_MESSAGE)
            return False

        self._release_previews([image])
        self._commit(self.images[:index] + self.images[index + 1:])
        return True

    # ====================
    # METADATA EDITING
    # ====================

    def edit_image(self, index: int) -> EditContext:
        self.editing = EditContext(image=self.images[index].model_copy(deep=True), index=index)
        return self.editing

    def add_tag(self, tag: str) -> None:
        if self.editing is None:
            return
        image = self.editing.image
        if not tag or tag in image.tags:
            return
        self.editing.image = image.model_copy(update={"tags": [*image.tags, tag]})

    def add_custom_tag(self, tag: str) -> None:
        if tag and tag not in self.custom_tags:
            self.custom_tags.append(tag)
        self.add_tag(tag)

    def remove_tag(self, tag: str) -> None:
        if self.editing is None:
            return
        image = self.editing.image
        self.editing.image = image.model_copy(
            update={"tags": [t for t in image.tags if t != tag]}
        )

    def update_description(self, description: str) -> None:
        if self.editing is None:
            return
        image = self.editing.image
        self.editing.image = image.model_copy(
            update={"metadata": {**image.metadata, "description": description}}
        )

    def save_image_metadata(self) -> None:
        if self.editing is None:
            return
        images = list(self.images)
        images[self.editing.index] = self.editing.image
        self.editing = None
        self._commit(images)

    def cancel_edit(self) -> None:
        self.editing = None

    # ====================
    # DISPLAY
    # ====================

    def image_url(self, stored_value: str | None, variant: str = DEFAULT_VARIANT) -> str:
        return resolve_image_url(stored_value, self.delivery_base, self.account_hash, variant)
