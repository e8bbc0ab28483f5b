# onboard/domains/company/snapshots.py

"""
회사 레코드의 불변 스냅샷 값 타입과 JSON 직렬화를 담당하는 모듈입니다.

승인 레코드의 new_data / old_data 컬럼에는 CompanySnapshot의 JSON 문자열이
그대로 저장됩니다. 차이(diff)가 아닌 전체 필드 값의 복사본입니다.
"""

import logging
from typing import List, Optional
from datetime import date

from pydantic import BaseModel, ConfigDict, ValidationError

from onboard.core.exceptions import SerializationFault
from .models import Company, ProgressState

logger = logging.getLogger(__name__)


class CompanySnapshot(BaseModel):
    """
    특정 시점의 회사 필드 값 전체를 담는 불변 값 타입입니다.
    새 값은 model_copy(update=...)로 파생하며, 기존 값을 변경하지 않습니다.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: Optional[int] = None

    name: Optional[str] = None
    registration_number: Optional[str] = None
    entity_type: Optional[str] = None
    industry_sector: Optional[str] = None
    date_of_incorporation: Optional[date] = None
    registered_address: Optional[str] = None
    operating_address: Optional[str] = None
    country: Optional[str] = None
    company_size: Optional[str] = None
    description: Optional[str] = None

    main_contact_name: Optional[str] = None
    main_contact_email: Optional[str] = None
    main_contact_phone: Optional[str] = None
    contact_person_role: Optional[str] = None
    secondary_contact_name: Optional[str] = None
    technical_contact_email: Optional[str] = None
    billing_contact_email: Optional[str] = None
    authorized_persons: Optional[str] = None
    emergency_contact_number: Optional[str] = None
    preferred_language: Optional[str] = None

    tax_id_number: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    preferred_payment_method: Optional[str] = None
    role_on_platform: Optional[str] = None
    requested_features: Optional[str] = None
    operating_hours: Optional[str] = None
    has_compliance_certification: Optional[bool] = None
    agreed_to_terms_of_service: Optional[bool] = None
    agreed_onboarding_date: Optional[date] = None

    progress_state: ProgressState = ProgressState.PROFILE

    def field_values(self) -> dict:
        """id를 제외한 회사 필드 값 (Company 행에 그대로 덮어쓸 값)"""
        return self.model_dump(exclude={"id"})


def snapshot_of(company: Company) -> CompanySnapshot:
    """ORM 회사 레코드로부터 스냅샷을 만듭니다."""
    return CompanySnapshot.model_validate(company)


def encode_snapshot(snapshot: CompanySnapshot) -> str:
    try:
        return snapshot.model_dump_json()
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize company snapshot (id=%s)", snapshot.id, exc_info=True)
        raise SerializationFault("Failed to serialize company snapshot", cause=e) from e


def decode_snapshot(data: Optional[str]) -> CompanySnapshot:
    if not data:
        raise SerializationFault("Company snapshot is empty")
    try:
        return CompanySnapshot.model_validate_json(data)
    except ValidationError as e:
        logger.error("Failed to parse company snapshot JSON: %s", data, exc_info=True)
        raise SerializationFault("Failed to parse company snapshot", cause=e) from e


def changed_fields(old: Optional[CompanySnapshot], new: CompanySnapshot) -> List[str]:
    """
    두 스냅샷 사이에서 값이 달라진 필드 이름 목록을 선언 순서대로 반환합니다.
    old가 없으면(신규 생성) 값이 채워진 필드를 모두 반환합니다.
    """
    new_values = new.field_values()
    if old is None:
        return [name for name, value in new_values.items() if value is not None]
    old_values = old.field_values()
    return [name for name, value in new_values.items() if old_values.get(name) != value]
