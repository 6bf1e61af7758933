"""
File intake for the image uploader.

ImageFile is the Python stand-in for a browser File: a name, a MIME type and
the raw bytes. Filename synthesis lives here too so every upload ends up named
  {project}_{dealer<id>_}{vehicle<id>_}{YYYYMMDD_HHMMSS}_{index}.{ext}
"""
import mimetypes
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel

ACCEPTED_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp"}
ACCEPTED_EXTENSIONS = {"jpeg", "jpg", "png", "webp"}
DEFAULT_EXTENSION = "jpg"


def file_extension(filename: str) -> str:
    """Lower-cased suffix without the dot; jpg when the name has none"""
    if "." not in filename:
        return DEFAULT_EXTENSION
    return filename.rsplit(".", 1)[-1].lower() or DEFAULT_EXTENSION


class ImageFile(BaseModel):
    filename: str
    content_type: str = "application/octet-stream"
    content: bytes

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> "ImageFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            filename=path.name,
            content_type=content_type or "application/octet-stream",
            content=path.read_bytes(),
        )

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return file_extension(self.filename)

    def is_accepted(self) -> bool:
        """Same filter as the drop zone: a known image MIME type or extension"""
        return self.content_type in ACCEPTED_CONTENT_TYPES or self.extension in ACCEPTED_EXTENSIONS

    def as_multipart(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


def iso_timestamp(moment: datetime) -> str:
    """2024-03-15T14:25:30.000Z, the form browsers send"""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compact_timestamp(moment: datetime) -> str:
    """20240315_142530 - ISO time to the second, UTC, without separators"""
    return moment.astimezone(timezone.utc).strftime("%Y%m%d_%H%M%S")


def standardized_filename(
    project_name: str,
    original_filename: str,
    index: int,
    moment: datetime,
    dealer_id: int | None = None,
    vehicle_id: int | None = None,
) -> str:
    extension = file_extension(original_filename)
    dealer_prefix = f"dealer{dealer_id}_" if dealer_id else ""
    vehicle_prefix = f"vehicle{vehicle_id}_" if vehicle_id else ""
    return (
        f"{project_name}_{dealer_prefix}{vehicle_prefix}"
        f"{compact_timestamp(moment)}_{index}.{extension}"
    )
