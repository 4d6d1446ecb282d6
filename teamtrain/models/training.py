from sqlalchemy import Column, String, Text, DateTime, JSON
from teamtrain.core.base import Base, new_id, utcnow


class Training(Base):
    __tablename__ = "trainings"

    id = Column(String(32), primary_key=True, default=new_id)
    date = Column(String(32), nullable=False)
    time = Column(String(32), nullable=False)
    location = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    # ordered exercise ids, not enforced as foreign keys
    exercise_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow)
