# onboard/core/dependencies.py

"""
FastAPI 라우터에서 사용하는 공통 의존성을 한 곳에 모은 모듈입니다.

- 데이터베이스 세션 (get_db_session).
- 현재 인증된 사용자 / 관리자 (security.py에서 재노출).
"""

from typing import AsyncGenerator
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.database import get_session as get_main_app_session

# flake8: noqa
from onboard.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    oauth2_scheme,
    get_current_user_from_token,
    get_current_active_user,
    get_current_admin_user,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    요청 단위 비동기 데이터베이스 세션입니다.
    onboard.core.database.get_session을 래핑하여 사용합니다.
    """
    async for session in get_main_app_session():
        yield session
