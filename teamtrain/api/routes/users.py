from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from teamtrain.core.dependencies import get_user_repository
from teamtrain.core.errors import InvalidRole, NotFoundError
from teamtrain.core.rbac import require_admin
from teamtrain.models.user import User, RoleEnum
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.schemas.admin import UserAdminRead, RoleUpdateRequest
from teamtrain.schemas.auth import SuccessResponse
from teamtrain.services.auth_service import auth_service

router = APIRouter(tags=["users"])


@router.get("", response_model=List[UserAdminRead])
async def list_users(
    search: Optional[str] = Query(None, description="Search by name or email"),
    role: Optional[str] = Query(None, description="Filter by role: admin|user"),
    current_user: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    role_filter = None
    if role:
        try:
            role_filter = RoleEnum(role)
        except ValueError:
            raise InvalidRole(f"Invalid role: {role}")
    return await users.list_users(search=search, role=role_filter)


@router.get("/{user_id}", response_model=UserAdminRead)
async def get_user(
    user_id: str,
    current_user: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    user = await users.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.put("/{user_id}/role", response_model=UserAdminRead)
async def update_user_role(
    user_id: str,
    role_data: RoleUpdateRequest,
    current_user: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    return await auth_service.set_role(users, user_id, role_data.role, current_user)


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user(
    user_id: str,
    current_user: User = Depends(require_admin),
    users: UserRepository = Depends(get_user_repository),
):
    await auth_service.delete_user(users, user_id, current_user)
    return SuccessResponse()
