from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.models.session import AuthSession
from teamtrain.models.user import User, RoleEnum


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup."""
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalars().first()

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def list_users(self, search: Optional[str] = None, role: Optional[RoleEnum] = None) -> List[User]:
        query = select(User)
        if search:
            query = query.where(
                or_(User.email.ilike(f"%{search}%"), User.name.ilike(f"%{search}%"))
            )
        if role:
            query = query.where(User.role == role)
        result = await self.db.execute(query.order_by(User.created_at))
        return list(result.scalars().all())

    async def create_user(self, user: User) -> User:
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def update_role(self, user: User, role: RoleEnum) -> User:
        user.role = role
        await self.db.commit()
        return user

    async def delete_user(self, user: User) -> None:
        """Delete the user together with all of their sessions."""
        await self.db.execute(delete(AuthSession).where(AuthSession.user_id == user.id))
        await self.db.delete(user)
        await self.db.commit()
