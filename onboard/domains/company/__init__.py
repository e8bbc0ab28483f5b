# onboard/domains/company/__init__.py

"""
'company' 도메인 패키지입니다.

온보딩 대상 회사의 정식(canonical) 레코드를 관리합니다.
회사 레코드는 승인(approval)이 완료된 변경 사항만 반영되며,
이 패키지의 라우터는 온보딩 단계별 제출 API와 회사 조회 API를 제공합니다.

주요 서브모듈:
- `models.py`: onb.companies 테이블과 진행 단계(ProgressState) Enum.
- `snapshots.py`: 불변 스냅샷 값 타입과 JSON 직렬화.
- `schemas.py`: 단계별 요청 DTO와 응답 스키마.
- `crud.py`: 회사 레코드 CRUD.
- `routers.py`: 온보딩 제출 및 조회 엔드포인트.
"""

__title__ = "Onboard Company Domain"
__version__ = "0.1.0"
__all__ = ["models", "snapshots", "schemas", "crud", "routers"]
