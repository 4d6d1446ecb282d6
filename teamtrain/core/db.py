from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from teamtrain.core.config import settings

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.SQL_ECHO,
    future=True,
    pool_pre_ping=True
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False
)


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
