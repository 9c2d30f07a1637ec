"""
데이터베이스 세션 관리 (SQLAlchemy Async)
참가자 테이블의 유일한 쓰기 경로는 RegistrationService 입니다.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool


class Base(DeclarativeBase):
    """SQLAlchemy 베이스 클래스"""
    pass


class Database:
    """
    Async 엔진 + 세션 팩토리 래퍼

    [생명주기]
    - 애플리케이션 시작 시 1회 생성 (ServiceContainer)
    - 종료 시 close()로 커넥션 풀 정리
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **self._pool_options(url))
        # 세션 팩토리
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @staticmethod
    def _pool_options(url: str) -> dict:
        # SQLite(aiosqlite)는 이벤트 루프별로 새 연결 사용
        if url.startswith("sqlite"):
            return {"poolclass": NullPool}
        return {"pool_size": 10, "max_overflow": 20, "pool_pre_ping": True}

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """서비스에서 사용할 DB 컨텍스트 매니저 (성공 시 commit, 실패 시 rollback)"""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> bool:
        """DB 연결 테스트"""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def create_tables(self) -> None:
        """테이블 생성 (개발/테스트용, 운영은 scripts/create_tables.py)"""
        # 모델 등록
        from app.infrastructure.persistence.models import participants  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """DB 연결 종료"""
        await self.engine.dispose()
