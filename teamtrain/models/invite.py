from sqlalchemy import Column, String, DateTime
from teamtrain.core.base import Base, new_id, utcnow

SYSTEM_CREATOR = "system"


class Invite(Base):
    __tablename__ = "invites"

    id = Column(String(32), primary_key=True, default=new_id)
    code = Column(String(64), unique=True, nullable=False, index=True)
    created_by = Column(String(32), nullable=False)   # user id or "system"
    used_by = Column(String(32), nullable=True)
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
