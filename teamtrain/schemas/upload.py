from pydantic import BaseModel
from typing import Literal


class UploadResponse(BaseModel):
    filename: str
    path: str
    type: Literal["image", "video"]
