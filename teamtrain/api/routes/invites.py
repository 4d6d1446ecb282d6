from typing import List

from fastapi import APIRouter, Depends, status

from teamtrain.core.dependencies import get_invite_repository
from teamtrain.core.rbac import require_admin
from teamtrain.models.user import User
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.schemas.admin import InviteRead
from teamtrain.schemas.auth import SuccessResponse
from teamtrain.services.auth_service import auth_service

router = APIRouter(tags=["invites"])


@router.get("", response_model=List[InviteRead])
async def list_invites(
    current_user: User = Depends(require_admin),
    invites: InviteRepository = Depends(get_invite_repository),
):
    return await invites.list_invites()


@router.post("", response_model=InviteRead, status_code=status.HTTP_201_CREATED)
async def create_invite(
    current_user: User = Depends(require_admin),
    invites: InviteRepository = Depends(get_invite_repository),
):
    return await auth_service.create_invite(invites, current_user)


@router.delete("/{invite_id}", response_model=SuccessResponse)
async def delete_invite(
    invite_id: str,
    current_user: User = Depends(require_admin),
    invites: InviteRepository = Depends(get_invite_repository),
):
    await invites.delete_invite(invite_id)
    return SuccessResponse()
