# onboard/domains/approval/schemas.py

from typing import Optional
from datetime import datetime
from sqlmodel import SQLModel

from .models import ApprovalStatus, OperationType


class ApprovalRead(SQLModel):
    """승인 레코드 조회 스키마. 스냅샷은 저장된 JSON 문자열 그대로 반환합니다."""
    id: int
    data_type: str
    data_id: Optional[int] = None
    operation_type: OperationType
    submitted_by: str
    submitted_at: datetime
    approval_status: ApprovalStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    new_data: str
    old_data: Optional[str] = None
    change_summary: Optional[str] = None
    remarks: Optional[str] = None
