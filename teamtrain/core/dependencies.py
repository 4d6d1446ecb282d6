from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.core.db import get_db
from teamtrain.core.config import settings
from teamtrain.models.user import User
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.repositories.session_repository import SessionRepository
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.services.auth_service import auth_service


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_invite_repository(db: AsyncSession = Depends(get_db)) -> InviteRepository:
    return InviteRepository(db)


def get_session_repository(db: AsyncSession = Depends(get_db)) -> SessionRepository:
    return SessionRepository(db)


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_optional_user(
        session_id: Optional[str] = Depends(get_session_id),
        users: UserRepository = Depends(get_user_repository),
        sessions: SessionRepository = Depends(get_session_repository),
) -> Optional[User]:
    """The logged-in user, or None. Guards in rbac decide what None means."""
    return await auth_service.resolve_session(users, sessions, session_id)
