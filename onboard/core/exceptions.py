# onboard/core/exceptions.py

"""
온보딩/승인 워크플로우의 도메인 예외 계층입니다.

모든 예외는 OnboardingError를 상속하며, 기계가 읽을 수 있는 `code`와
API 경계에서 사용할 HTTP `status_code`를 가집니다.
main.py에 등록된 예외 핸들러가 이를 JSON 응답으로 변환합니다.

    OnboardingError
    +-- ValidationFailed        (400) 비즈니스 규칙 위반, 모든 위반 사항을 errors로 전달
    +-- NotFound                (404) 회사/승인 레코드 없음
    +-- UnsupportedOperation    (400) 등록된 전략/프로세서 없음
    +-- ApprovalAlreadyDecided  (409) 이미 승인/반려된 건에 대한 재결정
    +-- StaleApproval           (409) 회사 진행 단계를 되돌리는 오래된 승인
    +-- SerializationFault      (500) 스냅샷 인코딩/디코딩 실패
"""

from typing import Any, Dict, List, Optional

from fastapi import status


class OnboardingError(Exception):
    """도메인 예외의 기본 클래스"""

    code: str = "ONBOARDING_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, "code": self.code}


class ValidationFailed(OnboardingError):
    code = "VALIDATION_FAILED"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Validation failed: " + "; ".join(self.errors))

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class NotFound(OnboardingError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class UnsupportedOperation(OnboardingError):
    code = "UNSUPPORTED_OPERATION"
    status_code = status.HTTP_400_BAD_REQUEST


class ApprovalAlreadyDecided(OnboardingError):
    code = "APPROVAL_ALREADY_DECIDED"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, approval_id: int, approval_status: str):
        self.approval_id = approval_id
        self.approval_status = approval_status
        super().__init__(f"Approval {approval_id} is already {approval_status}")


class StaleApproval(OnboardingError):
    code = "STALE_APPROVAL"
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, approval_id: int, company_id: int, current_state: str, target_state: str):
        self.approval_id = approval_id
        self.company_id = company_id
        self.current_state = current_state
        self.target_state = target_state
        super().__init__(
            f"Approval {approval_id} would move company {company_id} back from {current_state} to {target_state}"
        )


class SerializationFault(OnboardingError):
    code = "SERIALIZATION_FAULT"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)
