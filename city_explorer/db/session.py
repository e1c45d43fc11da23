# city_explorer/db/session.py
# -----------------------------------------------------------------------------
# SQLAlchemy Async 엔진/세션/베이스
# - Database: 서버 기동 시 open(), 종료 시 close() (app.state.db 에 보관)
# - FastAPI Depends(get_session)로 요청 스코프 세션 주입
# - SQLite 기본, PostgreSQL로 교체 시 URL만 변경 (postgresql+asyncpg://...)
# -----------------------------------------------------------------------------
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from loguru import logger
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _enable_sqlite_fk(dbapi_conn, _record) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """프로세스 단위 저장소 핸들 (엔진 + 세션 팩토리)"""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    async def open(self) -> None:
        if self._engine is not None:
            return
        # 모델 등록 후 create_all 해야 테이블이 생성됨
        from city_explorer.db import models  # noqa: F401

        self._engine = create_async_engine(self.url, echo=self.echo)
        if self._engine.dialect.name == "sqlite":
            # SQLite 는 연결마다 FK 제약을 켜야 함
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_fk)
        self._sessionmaker = async_sessionmaker(self._engine, expire_on_commit=False)
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"[DB] opened {self._engine.url.render_as_string()}")

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("[DB] closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._sessionmaker is None:
            raise RuntimeError("Database가 열려 있지 않습니다. open()을 먼저 호출하세요.")
        async with self._sessionmaker() as session:
            yield session


def get_database(request: Request) -> Database:
    return request.app.state.db


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """요청 스코프 세션 제공"""
    async with get_database(request).session() as session:
        yield session
