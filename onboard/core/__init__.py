# onboard/core/__init__.py

"""
애플리케이션 전반에서 사용하는 핵심 구성 요소 패키지입니다.

- `config.py`: 환경 변수 기반 설정 (Pydantic Settings).
- `database.py`: 비동기 엔진 및 세션 관리 (SQLModel + AsyncSQLAlchemy).
- `crud_base.py`: 공통 CRUD 기본 클래스.
- `security.py`: 비밀번호 해싱, JWT, 현재 사용자/관리자 의존성.
- `dependencies.py`: 라우터에서 사용하는 공통 의존성.
- `exceptions.py`: 도메인 예외 계층과 HTTP 상태 코드 매핑.
- `logging.py`: 로깅 초기화.
"""

__title__ = "Onboard Core"
__version__ = "0.1.0"
__all__ = []
