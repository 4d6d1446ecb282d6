import logging
import secrets
import string
from datetime import timedelta
from typing import Optional, Tuple

import bcrypt

from teamtrain.core.base import utcnow
from teamtrain.core.config import settings
from teamtrain.core.errors import (
    AppError,
    EmailTaken,
    InvalidCredentials,
    InvalidInvite,
    InvalidRole,
    MissingFields,
    NotFoundError,
    SelfDeletion,
    SelfDemotion,
)
from teamtrain.models.invite import Invite
from teamtrain.models.session import AuthSession
from teamtrain.models.user import User, RoleEnum
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.repositories.session_repository import SessionRepository
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.schemas.auth import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVITE_ALPHABET = string.ascii_uppercase + string.digits
INVITE_CODE_ATTEMPTS = 5


class AuthService:
    def __init__(self):
        self.SESSION_TTL = timedelta(days=settings.SESSION_TTL_DAYS)
        self.BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.BCRYPT_ROUNDS)
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not hashed_password:
            return False
        try:
            return bcrypt.checkpw(
                plain_password.encode('utf-8'),
                hashed_password.encode('utf-8')
            )
        except ValueError:
            # not a bcrypt hash
            return False

    def generate_invite_code(self) -> str:
        return "".join(secrets.choice(INVITE_ALPHABET) for _ in range(settings.INVITE_CODE_LENGTH))

    async def start_session(self, sessions: SessionRepository, user: User) -> AuthSession:
        return await sessions.create_session(user.id, utcnow() + self.SESSION_TTL)

    async def authenticate(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        login_data: LoginRequest,
    ) -> Tuple[User, AuthSession]:
        email = login_data.email.strip()
        if not email or not login_data.password:
            raise MissingFields("Email and password are required")

        user = await users.get_by_email(email)
        # same error for unknown email and wrong password
        if not user or not self.verify_password(login_data.password, user.password):
            raise InvalidCredentials()

        auth_session = await self.start_session(sessions, user)
        logger.info("User %s logged in", user.id)
        return user, auth_session

    async def register(
        self,
        users: UserRepository,
        invites: InviteRepository,
        sessions: SessionRepository,
        user_data: RegisterRequest,
    ) -> Tuple[User, AuthSession]:
        name = user_data.name.strip()
        email = user_data.email.strip().lower()
        invite_code = user_data.invite_code.strip()
        if not (name and email and user_data.password and invite_code):
            raise MissingFields()

        invite = await invites.get_unused_by_code(invite_code)
        if not invite:
            raise InvalidInvite()

        if await users.get_by_email(email):
            raise EmailTaken()

        # read-then-write: concurrent first registrations may both become admin
        is_first_user = await users.count() == 0
        new_user = await users.create_user(User(
            name=name,
            email=email,
            password=self.hash_password(user_data.password),
            role=RoleEnum.admin if is_first_user else RoleEnum.user,
            created_at=utcnow(),
        ))

        if not await invites.mark_used(invite, new_user.id, utcnow()):
            logger.warning("Invite %s was redeemed concurrently; user %s kept", invite.id, new_user.id)

        logger.info("Registered user %s with role %s", new_user.id, new_user.role.value)
        auth_session = await self.start_session(sessions, new_user)
        return new_user, auth_session

    async def resolve_session(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        session_id: Optional[str],
    ) -> Optional[User]:
        """User behind a session cookie, or None when the session is missing, expired or orphaned."""
        if not session_id:
            return None
        auth_session = await sessions.get_by_id(session_id)
        if auth_session is None:
            return None
        if auth_session.is_expired():
            await sessions.delete_session(session_id)
            return None
        return await users.get_by_id(auth_session.user_id)

    async def logout(self, sessions: SessionRepository, session_id: Optional[str]) -> None:
        if session_id:
            await sessions.delete_session(session_id)

    async def set_role(
        self,
        users: UserRepository,
        target_user_id: str,
        new_role: str,
        acting_user: User,
    ) -> User:
        try:
            role = RoleEnum(new_role)
        except ValueError:
            raise InvalidRole(f"Invalid role: {new_role}. Allowed: admin, user")

        if target_user_id == acting_user.id and role != RoleEnum.admin:
            raise SelfDemotion()

        user = await users.get_by_id(target_user_id)
        if not user:
            raise NotFoundError("User not found")

        if user.role != role:
            user = await users.update_role(user, role)
            logger.info("User %s changed role of %s to %s", acting_user.id, user.id, role.value)
        return user

    async def delete_user(self, users: UserRepository, target_user_id: str, acting_user: User) -> User:
        if target_user_id == acting_user.id:
            raise SelfDeletion()

        user = await users.get_by_id(target_user_id)
        if not user:
            raise NotFoundError("User not found")

        await users.delete_user(user)
        logger.info("User %s deleted user %s", acting_user.id, user.id)
        return user

    async def create_invite(self, invites: InviteRepository, acting_user: User) -> Invite:
        for _ in range(INVITE_CODE_ATTEMPTS):
            code = self.generate_invite_code()
            if await invites.get_by_code(code) is None:
                break
        else:
            raise AppError("Could not generate a unique invite code")

        invite = await invites.create_invite(Invite(code=code, created_by=acting_user.id, created_at=utcnow()))
        logger.info("User %s created invite %s", acting_user.id, invite.id)
        return invite


auth_service = AuthService()
