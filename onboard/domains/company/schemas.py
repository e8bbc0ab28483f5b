# onboard/domains/company/schemas.py

"""
'company' 도메인의 요청/응답 스키마를 정의하는 모듈입니다.

단계별 요청 DTO의 필드는 모두 선택 사항입니다. 필수 여부는 온보딩 전략의
검증 단계에서 한꺼번에 확인하여, 호출자가 모든 위반 사항을 한 번에 받도록 합니다.
"""

from typing import Optional
from datetime import date, datetime
from sqlmodel import SQLModel, Field

from .models import CompanyBase


# =============================================================================
# 1. 온보딩 단계별 요청 스키마
# =============================================================================
class CompanyProfileRequest(SQLModel):
    """회사 프로필 생성 요청 (PROFILE 단계)"""
    name: Optional[str] = Field(None, max_length=200, description="회사명")
    registration_number: Optional[str] = Field(None, max_length=50, description="등록번호")
    entity_type: Optional[str] = Field(None, max_length=50, description="법인 형태")
    industry_sector: Optional[str] = Field(None, max_length=100, description="산업 분야")
    date_of_incorporation: Optional[date] = Field(None, description="설립일")
    registered_address: Optional[str] = Field(None, max_length=255, description="등기 주소")
    operating_address: Optional[str] = Field(None, max_length=255, description="사업장 주소")
    country: Optional[str] = Field(None, max_length=100, description="국가")
    company_size: Optional[str] = Field(None, max_length=50, description="회사 규모")
    description: Optional[str] = Field(None, description="회사 소개")


class ContactInfoRequest(SQLModel):
    """연락처 정보 수정 요청 (CONTACT 단계)"""
    main_contact_name: Optional[str] = Field(None, max_length=100)
    main_contact_email: Optional[str] = Field(None, max_length=100)
    main_contact_phone: Optional[str] = Field(None, max_length=30)
    contact_person_role: Optional[str] = Field(None, max_length=100)
    secondary_contact_name: Optional[str] = Field(None, max_length=100)
    technical_contact_email: Optional[str] = Field(None, max_length=100)
    billing_contact_email: Optional[str] = Field(None, max_length=100)
    authorized_persons: Optional[str] = Field(None, max_length=500)
    emergency_contact_number: Optional[str] = Field(None, max_length=30)
    preferred_language: Optional[str] = Field(None, max_length=50)


class OperationalInfoRequest(SQLModel):
    """운영 정보 수정 요청 (OPERATIONS 단계)"""
    tax_id_number: Optional[str] = Field(None, max_length=50)
    bank_name: Optional[str] = Field(None, max_length=100)
    bank_account_number: Optional[str] = Field(None, max_length=50)
    preferred_payment_method: Optional[str] = Field(None, max_length=50)
    role_on_platform: Optional[str] = Field(None, max_length=50)
    requested_features: Optional[str] = Field(None, max_length=500)
    operating_hours: Optional[str] = Field(None, max_length=100)
    has_compliance_certification: Optional[bool] = None
    agreed_to_terms_of_service: Optional[bool] = None
    agreed_onboarding_date: Optional[date] = None


# =============================================================================
# 2. 응답 스키마
# =============================================================================
class CompanyRead(CompanyBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SubmissionResponse(SQLModel):
    """온보딩 단계 제출 결과: 생성된 승인 레코드 ID"""
    approval_id: int
