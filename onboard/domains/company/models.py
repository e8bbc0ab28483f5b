# onboard/domains/company/models.py

"""
'company' 도메인 (PostgreSQL 'onb' 스키마)의 ORM 모델을 정의하는 모듈입니다.
"""

from typing import Optional
from datetime import date, datetime, UTC
from enum import Enum

from sqlmodel import Field, SQLModel, Column
from sqlalchemy.sql import func
from sqlalchemy.types import TIMESTAMP, Text


class ProgressState(str, Enum):
    """
    온보딩 진행 단계. PROFILE -> CONTACT -> OPERATIONS -> COMPLETED 순서로만 전진합니다.
    """
    PROFILE = "PROFILE"
    CONTACT = "CONTACT"
    OPERATIONS = "OPERATIONS"
    COMPLETED = "COMPLETED"

    @property
    def rank(self) -> int:
        """진행 순서상의 위치 (PROFILE=0)"""
        return list(ProgressState).index(self)


class CompanyBase(SQLModel):
    """
    onb.companies 테이블의 속성을 정의하는 SQLModel Base 클래스입니다.
    """
    # --- 등록 정보 (PROFILE 단계) ---
    name: Optional[str] = Field(default=None, index=True, max_length=200, description="회사명")
    registration_number: Optional[str] = Field(default=None, max_length=50, description="사업자/법인 등록번호")
    entity_type: Optional[str] = Field(default=None, max_length=50, description="법인 형태 (예: LLC)")
    industry_sector: Optional[str] = Field(default=None, max_length=100, description="산업 분야")
    date_of_incorporation: Optional[date] = Field(default=None, description="설립일")
    registered_address: Optional[str] = Field(default=None, max_length=255, description="등기 주소")
    operating_address: Optional[str] = Field(default=None, max_length=255, description="사업장 주소")
    country: Optional[str] = Field(default=None, max_length=100, description="국가")
    company_size: Optional[str] = Field(default=None, max_length=50, description="회사 규모")
    description: Optional[str] = Field(default=None, sa_type=Text, description="회사 소개")

    # --- 연락처 정보 (CONTACT 단계) ---
    main_contact_name: Optional[str] = Field(default=None, max_length=100, description="주 담당자 이름")
    main_contact_email: Optional[str] = Field(default=None, max_length=100, description="주 담당자 이메일")
    main_contact_phone: Optional[str] = Field(default=None, max_length=30, description="주 담당자 전화")
    contact_person_role: Optional[str] = Field(default=None, max_length=100, description="담당자 직책")
    secondary_contact_name: Optional[str] = Field(default=None, max_length=100, description="보조 담당자 이름")
    technical_contact_email: Optional[str] = Field(default=None, max_length=100, description="기술 담당 이메일")
    billing_contact_email: Optional[str] = Field(default=None, max_length=100, description="정산 담당 이메일")
    authorized_persons: Optional[str] = Field(default=None, max_length=500, description="권한 위임자 목록")
    emergency_contact_number: Optional[str] = Field(default=None, max_length=30, description="비상 연락처")
    preferred_language: Optional[str] = Field(default=None, max_length=50, description="선호 언어")

    # --- 운영 정보 (OPERATIONS 단계) ---
    tax_id_number: Optional[str] = Field(default=None, max_length=50, description="납세자 번호")
    bank_name: Optional[str] = Field(default=None, max_length=100, description="은행명")
    bank_account_number: Optional[str] = Field(default=None, max_length=50, description="계좌번호")
    preferred_payment_method: Optional[str] = Field(default=None, max_length=50, description="선호 결제 수단")
    role_on_platform: Optional[str] = Field(default=None, max_length=50, description="플랫폼 내 역할")
    requested_features: Optional[str] = Field(default=None, max_length=500, description="요청 기능")
    operating_hours: Optional[str] = Field(default=None, max_length=100, description="운영 시간")
    has_compliance_certification: Optional[bool] = Field(default=None, description="컴플라이언스 인증 보유 여부")
    agreed_to_terms_of_service: Optional[bool] = Field(default=None, description="이용약관 동의 여부")
    agreed_onboarding_date: Optional[date] = Field(default=None, description="온보딩 합의일")

    progress_state: ProgressState = Field(default=ProgressState.PROFILE, description="온보딩 진행 단계")


class Company(CompanyBase, table=True):
    """
    onb.companies 테이블에 매핑되는 SQLModel ORM 클래스입니다.
    승인된 변경 사항만 이 테이블에 기록되며, 이 서비스는 행을 삭제하지 않습니다.
    """
    __tablename__ = "companies"
    __table_args__ = {'schema': 'onb'}

    id: Optional[int] = Field(default=None, primary_key=True, description="회사 고유 ID")

    created_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now()),
        description="레코드 생성 일시"
    )
    updated_at: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_column=Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()),
        description="레코드 마지막 업데이트 일시"
    )
