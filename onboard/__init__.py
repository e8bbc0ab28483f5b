# onboard/__init__.py

"""
회사 온보딩(Company Onboarding) FastAPI 애플리케이션의 메인 패키지입니다.

회사 프로필, 연락처, 운영 정보를 단계별로 수집하고,
모든 변경 사항을 승인(Approval) 레코드로 먼저 등록한 뒤
승인 결정이 내려진 후에만 실제 회사 레코드에 반영합니다.

- `core`: 설정, 데이터베이스, 보안, 로깅, 공통 예외 등 핵심 구성 요소.
- `domains`: 사용자(usr), 회사(company), 승인(approval), 온보딩 워크플로우(onboarding) 도메인.
"""

APP_NAME = "Company Onboarding API"
APP_VERSION = "0.1.0"
API_PREFIX = "/api/v1"  # API 라우트의 공통 접두사 (main.py에서 적용)

__version__ = APP_VERSION
__title__ = APP_NAME
__description__ = "Company onboarding workflow with staged approvals."
__all__ = []
