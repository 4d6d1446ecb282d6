from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://teamtrain:teamtrain@db:5432/teamtrain"
    # drops every table on startup, development only
    RESET_DATABASE: bool = False
    SQL_ECHO: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    SESSION_COOKIE_NAME: str = "teamtrain_session"
    SESSION_TTL_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12

    BOOTSTRAP_INVITE_CODE: str = "ESKADMIN1"
    INVITE_CODE_LENGTH: int = 8

    UPLOAD_DIR: str = "data/uploads"
    MAX_UPLOAD_SIZE: int = 100 * 1024 * 1024  # 100 MB

    API_PREFIX: str = "/api"
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @property
    def async_database_url(self) -> str:
        url = self.DATABASE_URL
        for prefix in ("postgresql://", "postgres://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url

    @property
    def cookie_secure(self) -> bool:
        return self.ENVIRONMENT == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"


settings = Settings()
