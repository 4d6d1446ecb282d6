from sqlalchemy import Column, String, DateTime, ForeignKey
from teamtrain.core.base import Base, utcnow


class AuthSession(Base):
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)
    expires_at = Column(DateTime, nullable=False, index=True)

    def is_expired(self, now=None) -> bool:
        return self.expires_at <= (now or utcnow())
