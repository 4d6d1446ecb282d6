from datetime import datetime
from typing import List, Optional

from teamtrain.schemas.base import CamelModel, PartialUpdate


class TrainingCreate(CamelModel):
    date: str
    time: str
    location: str = ""
    description: str = ""
    exercise_ids: List[str] = []


class TrainingUpdate(PartialUpdate):
    """Fields a PUT may change; anything else in the body is ignored."""

    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    exercise_ids: Optional[List[str]] = None


class TrainingRead(CamelModel):
    id: str
    date: str
    time: str
    location: str = ""
    description: str = ""
    exercise_ids: List[str] = []
    created_at: Optional[datetime] = None
