from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from fastapi import Request
from typing import AsyncGenerator, Optional
import logging

from lexcase.models import Base

logger = logging.getLogger(__name__)


class Database:
    """Store handle owning the async engine and session factory.

    Created by the application factory, connected at startup and disposed
    at shutdown. Request handlers reach it through ``get_db``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def connect(self) -> None:
        if self.engine is not None:
            return

        connect_args = {}
        if self.url.startswith("postgresql+asyncpg"):
            connect_args = {"server_settings": {"application_name": "lexcase"}}

        self.engine = create_async_engine(
            self.url,
            echo=self.echo,
            future=True,
            poolclass=NullPool,
            connect_args=connect_args,
        )
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("[database] Engine created")

    async def create_all(self) -> None:
        """Create all tables"""
        self.connect()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("[database] Engine disposed")

    def session(self) -> AsyncSession:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session"""
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
