# tests/__init__.py

"""
회사 온보딩 API의 테스트 스위트 패키지입니다.

- `conftest.py`: 테스트용 DB 세션, 사용자, 인증 클라이언트 픽스처.
- `domains/`: 도메인(usr, company, approval, onboarding)별 테스트 모듈.
"""

__title__ = "Company Onboarding API Tests"
__version__ = "0.1.0"
__all__ = []
