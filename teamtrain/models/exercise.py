from sqlalchemy import Column, String, Text, DateTime, JSON
from teamtrain.core.base import Base, new_id, utcnow


class Exercise(Base):
    __tablename__ = "exercises"

    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    images = Column(JSON, nullable=False, default=list)
    video = Column(String, nullable=True)
    youtube_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
