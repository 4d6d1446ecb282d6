from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.models.invite import Invite


class InviteRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_code(self, code: str) -> Optional[Invite]:
        result = await self.db.execute(select(Invite).where(Invite.code == code))
        return result.scalar_one_or_none()

    async def get_unused_by_code(self, code: str) -> Optional[Invite]:
        result = await self.db.execute(
            select(Invite).where(Invite.code == code, Invite.used_by.is_(None))
        )
        return result.scalar_one_or_none()

    async def count_unused(self) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(Invite).where(Invite.used_by.is_(None))
        )
        return result.scalar_one()

    async def list_invites(self) -> List[Invite]:
        result = await self.db.execute(select(Invite).order_by(Invite.created_at.desc()))
        return list(result.scalars().all())

    async def create_invite(self, invite: Invite) -> Invite:
        self.db.add(invite)
        await self.db.commit()
        await self.db.refresh(invite)
        return invite

    async def mark_used(self, invite: Invite, user_id: str, used_at: datetime) -> bool:
        """Consume the invite unless someone else already did. Returns False if it was taken."""
        result = await self.db.execute(
            update(Invite)
            .where(Invite.id == invite.id, Invite.used_by.is_(None))
            .values(used_by=user_id, used_at=used_at)
        )
        await self.db.commit()
        return result.rowcount == 1

    async def delete_invite(self, invite_id: str) -> None:
        await self.db.execute(delete(Invite).where(Invite.id == invite_id))
        await self.db.commit()
