import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import literal
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from onboard import API_PREFIX
from onboard.core.config import settings
from onboard.core.database import engine, get_session, create_db_and_tables
from onboard.core.exceptions import OnboardingError
from onboard.core.logging import configure_logging

from onboard.domains.usr.routers import router as usr_router
from onboard.domains.approval.routers import router as approval_router
from onboard.domains.company.routers import router as company_router

logger = logging.getLogger(__name__)


# -- 애플리케이션 수명 주기 이벤트 핸들러 --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    시작 시 로깅을 설정하고 (설정에 따라) 테이블을 생성하며,
    종료 시 데이터베이스 연결 풀을 정리합니다.
    """
    configure_logging()
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.APP_ENV)

    if settings.DB_AUTO_CREATE:
        await create_db_and_tables()

    yield

    logger.info("Shutting down %s", settings.APP_NAME)
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# -- 도메인 예외 -> HTTP 응답 변환 --
# 각 예외 클래스의 status_code / code를 그대로 사용합니다.
@app.exception_handler(OnboardingError)
async def onboarding_error_handler(request: Request, exc: OnboardingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# -- CORS 미들웨어 설정 --
# 프로덕션에서는 CORS_ALLOW_ORIGINS를 실제 프론트엔드 도메인으로 제한해야 합니다.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- 도메인 라우터 포함 --
# approvals 라우터는 /companies/{company_id} 경로보다 먼저 등록되어야 합니다.
app.include_router(usr_router, prefix=f"{API_PREFIX}/usr", tags=["User & Authentication (사용자 및 인증)"])
app.include_router(approval_router, prefix=f"{API_PREFIX}/companies/approvals", tags=["Approvals (승인 관리)"])
app.include_router(company_router, prefix=f"{API_PREFIX}/companies", tags=["Company Onboarding (회사 온보딩)"])


@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    """
    API의 루트 엔드포인트입니다. 문서 링크를 안내합니다.
    """
    return {"message": "Welcome to the Company Onboarding API. Visit /docs for interactive API documentation."}


@app.get("/health-check", summary="Health Check", response_description="Status of the application and database connection.")
async def health_check(session: AsyncSession = Depends(get_session)):
    """
    데이터베이스 연결을 테스트하여 서비스의 정상 작동 여부를 확인합니다.
    """
    try:
        result = await session.exec(select(literal(1)))
        if result.first():
            return {"status": "ok", "database_connection": "successful"}
    except Exception as e:
        logger.error("Database health check failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database connection error during health check: {e}"
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Database health check failed: No result from test query"
    )


# 개발 환경에서 직접 실행할 때 사용합니다. 배포 시에는 uvicorn 명령으로 실행하세요.
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("onboard.main:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
