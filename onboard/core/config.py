# onboard/core/config.py

from typing import List
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "Company Onboarding API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Company onboarding workflow with staged approvals"
    APP_ENV: str = Field("development", description="Application environment (e.g., development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Enable debug mode for SQL echo and verbose logging")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="Async database connection URL (e.g. postgresql+asyncpg://...)")
    # 개발 환경에서는 시작 시 테이블을 자동 생성할 수 있습니다. 운영에서는 마이그레이션을 사용하세요.
    DB_AUTO_CREATE: bool = Field(False, description="Create schemas and tables on startup")

    # --- JWT (JSON Web Token) 설정 ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing (e.g., HS256)")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Access token expiration time in minutes")

    # --- 로깅 설정 ---
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_JSON: bool = Field(False, description="Emit logs as one JSON object per line")

    # --- 승인 워크플로우 설정 ---
    DEFAULT_REJECTION_REASON: str = Field("No reason provided", description="Remarks stored when a rejection has no reason")

    # --- CORS 설정 ---
    CORS_ALLOW_ORIGINS: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")


settings = Settings()
