import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from teamtrain.api.router import api_router
from teamtrain.core.config import settings
from teamtrain.core.database import init_database
from teamtrain.core.db import AsyncSessionLocal, engine
from teamtrain.core.errors import register_exception_handlers
from teamtrain.core.logging_config import setup_logging
from teamtrain.repositories.session_repository import SessionRepository
from teamtrain.routers.pages import router as pages_router
from teamtrain.services.bootstrap import ensure_bootstrap_invite
from teamtrain.services.upload_service import PUBLIC_PREFIX, ensure_upload_dirs, upload_root

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    ensure_upload_dirs()
    try:
        await init_database()
    except Exception:
        logger.exception("Database unreachable, refusing to start")
        raise

    async with AsyncSessionLocal() as session:
        purged = await SessionRepository(session).purge_expired()
        if purged:
            logger.info("Purged %d expired sessions", purged)
        await ensure_bootstrap_invite(session)

    logger.info("Application started")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title="TeamTrain - team training scheduler", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages_router)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=upload_root(), check_dir=False), name="uploads")

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
