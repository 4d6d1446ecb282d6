from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from teamtrain.core.config import settings
from teamtrain.core.dependencies import (
    get_invite_repository,
    get_session_id,
    get_session_repository,
    get_user_repository,
)
from teamtrain.core.rbac import get_current_user
from teamtrain.models.session import AuthSession
from teamtrain.models.user import User
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.repositories.session_repository import SessionRepository
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, SuccessResponse, UserPublic
from teamtrain.services.auth_service import auth_service

router = APIRouter(tags=["auth"])


def set_session_cookie(response: Response, auth_session: AuthSession) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=auth_session.id,
        max_age=int(auth_service.SESSION_TTL.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Check credentials and open a session."""
    user, auth_session = await auth_service.authenticate(users, sessions, credentials)
    set_session_cookie(response, auth_session)
    return AuthResponse(user=UserPublic.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    response: Response,
    users: UserRepository = Depends(get_user_repository),
    invites: InviteRepository = Depends(get_invite_repository),
    sessions: SessionRepository = Depends(get_session_repository),
):
    """Redeem an invite code, create the account and log it in."""
    user, auth_session = await auth_service.register(users, invites, sessions, user_data)
    set_session_cookie(response, auth_session)
    return AuthResponse(user=UserPublic.model_validate(user))


@router.post("/logout", response_model=SuccessResponse)
async def logout(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionRepository = Depends(get_session_repository),
):
    await auth_service.logout(sessions, session_id)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return SuccessResponse()


@router.get("/me", response_model=UserPublic)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
