# onboard/core/database.py

"""
애플리케이션의 데이터베이스 연결 및 세션 관리를 담당하는 모듈입니다.

- SQLModel의 비동기 엔진을 설정합니다.
- 요청 단위 비동기 세션 의존성을 제공합니다.
- 개발용으로 시작 시 스키마/테이블을 생성하는 함수를 포함합니다.
"""

import logging
from typing import Any, AsyncGenerator, Dict
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy import text

from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.config import settings

# SQLModel.metadata가 모든 테이블을 인식하도록 도메인 모델을 임포트합니다.
from onboard.domains.usr import models as usr_models              # noqa: F401
from onboard.domains.company import models as company_models      # noqa: F401
from onboard.domains.approval import models as approval_models    # noqa: F401

logger = logging.getLogger(__name__)

# 테이블이 속한 PostgreSQL 스키마 목록
DB_SCHEMAS = ["usr", "onb"]


def _engine_kwargs(url: str) -> Dict[str, Any]:
    """
    드라이버에 맞는 엔진 옵션을 반환합니다.
    SQLite(로컬/테스트)는 스키마가 없고 커넥션 풀 옵션을 받지 않습니다.
    """
    kwargs: Dict[str, Any] = {"echo": settings.DEBUG_MODE, "future": True}
    if url.startswith("sqlite"):
        kwargs["execution_options"] = {"schema_translate_map": {name: None for name in DB_SCHEMAS}}
    else:
        kwargs.update(
            pool_recycle=3600,  # 1시간마다 연결 재활용
            pool_size=10,
            max_overflow=20,
        )
    return kwargs


_database_url = settings.DATABASE_URL.get_secret_value()

engine: AsyncEngine = create_async_engine(_database_url, **_engine_kwargs(_database_url))

# 비동기 세션을 생성하는 '세션 공장'
AsyncSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

metadata = SQLModel.metadata


async def create_db_and_tables(bind: AsyncEngine = engine) -> None:
    """
    데이터베이스 스키마 및 테이블을 생성합니다 (기존 테이블은 유지).
    DB_AUTO_CREATE가 켜진 개발 환경에서만 사용합니다.
    """
    logger.info("Creating database schemas and tables")
    async with bind.begin() as conn:
        if bind.dialect.name == "postgresql":
            for schema_name in DB_SCHEMAS:
                await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema_name}"))
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables are ready")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI 의존성 주입을 위한 비동기 데이터베이스 세션 제너레이터입니다.
    요청마다 새로운 세션을 생성하고, 요청 처리 후 세션을 자동으로 닫습니다.
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """
    스크립트(CLI) 등 요청 밖에서 사용할 독립 세션 컨텍스트입니다.
    정상 종료 시 커밋하고, 예외 발생 시 롤백 후 다시 발생시킵니다.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
