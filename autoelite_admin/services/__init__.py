from autoelite_admin.services.image_files import ImageFile
from autoelite_admin.services.image_uploader import EditContext, ImageUploader
from autoelite_admin.services.previews import BlobUrlRegistry

__all__ = ["ImageFile", "ImageUploader", "EditContext", "BlobUrlRegistry"]
