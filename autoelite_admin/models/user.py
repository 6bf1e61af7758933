from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

from autoelite_admin.models.utils import CAMEL_CASE_CONFIG


class LoginRequest(BaseModel):
    username: str
    password: str


class ChangePasswordRequest(BaseModel):
    model_config = CAMEL_CASE_CONFIG
    new_password: str
    # Admins resetting someone else's password don't send it
    current_password: str | None = None


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str
    user: Dict[str, Any] | None = None


class VerifyResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    valid: bool
    user: Dict[str, Any] | None = None
