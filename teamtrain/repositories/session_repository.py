import secrets
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.core.base import utcnow
from teamtrain.models.session import AuthSession


class SessionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_session(self, user_id: str, expires_at: datetime) -> AuthSession:
        auth_session = AuthSession(
            id=secrets.token_urlsafe(32),
            user_id=user_id,
            created_at=utcnow(),
            expires_at=expires_at,
        )
        self.db.add(auth_session)
        await self.db.commit()
        return auth_session

    async def get_by_id(self, session_id: str) -> Optional[AuthSession]:
        result = await self.db.execute(select(AuthSession).where(AuthSession.id == session_id))
        return result.scalar_one_or_none()

    async def delete_session(self, session_id: str) -> None:
        await self.db.execute(delete(AuthSession).where(AuthSession.id == session_id))
        await self.db.commit()

    async def purge_expired(self) -> int:
        result = await self.db.execute(delete(AuthSession).where(AuthSession.expires_at <= utcnow()))
        await self.db.commit()
        return result.rowcount
