from teamtrain.core.config import settings
from teamtrain.core.base import Base
from teamtrain.core.db import engine, get_db

__all__ = ["settings", "engine", "Base", "get_db"]
