from pydantic import BaseModel

from teamtrain.schemas.base import CamelModel
from teamtrain.models.user import RoleEnum


# Fields default to "" so missing values reach the service and fail as missing_fields.
class LoginRequest(CamelModel):
    email: str = ""
    password: str = ""


class RegisterRequest(CamelModel):
    name: str = ""
    email: str = ""
    password: str = ""
    invite_code: str = ""


class UserPublic(BaseModel):
    id: str
    name: str
    email: str
    role: RoleEnum

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserPublic


class SuccessResponse(BaseModel):
    success: bool = True
