from datetime import datetime
from typing import List, Optional

from pydantic import model_validator

from teamtrain.schemas.base import CamelModel, PartialUpdate
from teamtrain.utils.youtube import extract_youtube_id


class ExerciseCreate(CamelModel):
    name: str
    description: str = ""
    images: List[str] = []
    video: Optional[str] = None
    youtube_url: Optional[str] = None


class ExerciseUpdate(PartialUpdate):
    """Fields a PUT may change; anything else in the body is ignored."""

    nullable_fields = frozenset({"video", "youtube_url"})

    name: Optional[str] = None
    description: Optional[str] = None
    images: Optional[List[str]] = None
    video: Optional[str] = None
    youtube_url: Optional[str] = None


class ExerciseRead(CamelModel):
    id: str
    name: str
    description: str = ""
    images: List[str] = []
    video: Optional[str] = None
    youtube_url: Optional[str] = None
    youtube_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def fill_youtube_id(self):
        if self.youtube_id is None:
            self.youtube_id = extract_youtube_id(self.youtube_url)
        return self
