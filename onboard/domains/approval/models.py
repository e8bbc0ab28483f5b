# onboard/domains/approval/models.py

"""
'approval' 도메인 (PostgreSQL 'onb' 스키마)의 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import datetime, UTC
from enum import Enum

from sqlmodel import Field, SQLModel, Column
from sqlalchemy.types import TIMESTAMP, Text


class ApprovalDataType(str, Enum):
    """승인 대상 데이터 유형. 유형마다 정확히 하나의 승인 프로세서가 등록됩니다."""
    COMPANY = "COMPANY"


class OperationType(str, Enum):
    NEW = "NEW"          # 신규 생성 (data_id는 승인 시점에 채워짐)
    UPDATE = "UPDATE"    # 기존 레코드 덮어쓰기 (data_id, old_data 필수)


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Approval(SQLModel, table=True):
    """
    onb.approvals 테이블 모델입니다.
    제출된 변경 하나당 한 행이 추가되며, 결정 시에만 상태 컬럼이 갱신됩니다.
    APPROVED/REJECTED는 종결 상태로, 이후 다시 결정할 수 없습니다.
    """
    __tablename__ = "approvals"
    __table_args__ = {'schema': 'onb'}

    id: Optional[int] = Field(default=None, primary_key=True, description="승인 고유 ID")
    data_type: str = Field(default=ApprovalDataType.COMPANY.value, index=True, max_length=50, description="승인 대상 데이터 유형")
    data_id: Optional[int] = Field(default=None, index=True, description="대상 레코드 ID (NEW는 승인 후 채워짐)")
    operation_type: OperationType = Field(description="작업 유형 (NEW/UPDATE)")

    submitted_by: str = Field(max_length=50, description="제출자 사용자명")
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), nullable=False),
        description="제출 일시"
    )

    approval_status: ApprovalStatus = Field(default=ApprovalStatus.PENDING, index=True, description="승인 상태")
    approved_by: Optional[str] = Field(default=None, max_length=50, description="결정자 사용자명")
    approved_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(TIMESTAMP(timezone=True), nullable=True),
        description="결정 일시"
    )

    new_data: str = Field(sa_column=Column(Text, nullable=False), description="변경 후 전체 스냅샷 (JSON)")
    old_data: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True), description="변경 전 전체 스냅샷 (JSON)")
    change_summary: Optional[str] = Field(default=None, max_length=1000, description="변경된 필드 목록")
    remarks: Optional[str] = Field(default=None, max_length=1000, description="반려 사유")

    @property
    def is_decided(self) -> bool:
        return self.approval_status != ApprovalStatus.PENDING
