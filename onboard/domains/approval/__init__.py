# onboard/domains/approval/__init__.py

"""
'approval' 도메인 패키지입니다.

모든 회사 변경 사항은 먼저 승인(Approval) 레코드로 등록(PENDING)되고,
관리자의 승인/반려 결정에 따라 APPROVED 또는 REJECTED로 한 번만 전이합니다.

주요 서브모듈:
- `models.py`: onb.approvals 테이블과 상태/작업 유형 Enum.
- `schemas.py`: 승인 레코드 응답 스키마.
- `crud.py`: 승인 레코드 CRUD.
- `processors.py`: 데이터 유형별 승인 프로세서와 레지스트리.
- `services.py`: 승인/반려/미리보기 서비스.
- `routers.py`: 승인 관련 API 엔드포인트.
"""

__title__ = "Onboard Approval Domain"
__version__ = "0.1.0"
__all__ = ["models", "schemas", "crud", "processors", "services", "routers"]
