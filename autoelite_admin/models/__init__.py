# Re-export all models for convenience
from autoelite_admin.models.image import (
    ImageRecord,
    ImageState,
    ImageUploadMetadata,
    UploadedImagePayload,
)
from autoelite_admin.models.responses import (
    ImageListResponse,
    ImageUploadResponse,
    MessageResponse,
    SuccessResponse,
)
from autoelite_admin.models.user import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    VerifyResponse,
)
from autoelite_admin.models.vehicle import Vehicle, VehicleImage

__all__ = [
    # Image models
    "ImageRecord",
    "ImageState",
    "ImageUploadMetadata",
    "UploadedImagePayload",
    # Vehicle models
    "Vehicle",
    "VehicleImage",
    # Auth / user models
    "LoginRequest",
    "LoginResponse",
    "VerifyResponse",
    "ChangePasswordRequest",
    # Envelopes
    "SuccessResponse",
    "MessageResponse",
    "ImageListResponse",
    "ImageUploadResponse",
]
