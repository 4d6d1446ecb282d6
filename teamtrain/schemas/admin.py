from datetime import datetime
from typing import Optional

from teamtrain.schemas.base import CamelModel
from teamtrain.models.user import RoleEnum


class UserAdminRead(CamelModel):
    id: str
    name: str
    email: str
    role: RoleEnum
    created_at: Optional[datetime] = None


class RoleUpdateRequest(CamelModel):
    role: str = ""  # "admin" | "user", validated by the service


class InviteRead(CamelModel):
    id: str
    code: str
    created_by: str
    used_by: Optional[str] = None
    used_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
