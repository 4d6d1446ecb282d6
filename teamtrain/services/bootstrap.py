import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from teamtrain.core.base import utcnow
from teamtrain.core.config import settings
from teamtrain.models.invite import Invite, SYSTEM_CREATOR
from teamtrain.repositories.invite_repository import InviteRepository
from teamtrain.repositories.user_repository import UserRepository
from teamtrain.services.auth_service import auth_service

logger = logging.getLogger(__name__)


async def ensure_bootstrap_invite(db: AsyncSession) -> Optional[Invite]:
    """
    Make sure a fresh deployment can register its first account.

    Creates one system invite when there are no users and no unused invites;
    otherwise does nothing. Returns the created invite, if any.
    """
    users = UserRepository(db)
    invites = InviteRepository(db)

    if await users.count() > 0 or await invites.count_unused() > 0:
        return None

    code = settings.BOOTSTRAP_INVITE_CODE
    if await invites.get_by_code(code) is not None:
        # the fixed code was consumed earlier and is never reused
        code = auth_service.generate_invite_code()
        logger.warning("Bootstrap code %s already used, generated %s instead",
                       settings.BOOTSTRAP_INVITE_CODE, code)

    invite = await invites.create_invite(
        Invite(code=code, created_by=SYSTEM_CREATOR, created_at=utcnow())
    )
    logger.info("Initial invite code created: %s", invite.code)
    return invite
