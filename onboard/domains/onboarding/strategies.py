# onboard/domains/onboarding/strategies.py

"""
온보딩 단계별 전략(검증 + 변환)과 전략 레지스트리를 정의하는 모듈입니다.

전략은 순수 함수처럼 동작합니다. (요청, 현재 회사 스냅샷)을 받아
검증 결과 또는 목표 상태의 새 스냅샷을 돌려줄 뿐, 어떤 저장소에도 접근하지 않습니다.
검증은 첫 오류에서 멈추지 않고 모든 위반 사항을 누적합니다.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Generic, Iterable, Optional, TypeVar

from onboard.core.exceptions import UnsupportedOperation
from onboard.domains.company.models import ProgressState
from onboard.domains.company.schemas import (
    CompanyProfileRequest,
    ContactInfoRequest,
    OperationalInfoRequest,
)
from onboard.domains.company.snapshots import CompanySnapshot
from .validation import ValidationResult, is_blank

logger = logging.getLogger(__name__)

RequestType = TypeVar("RequestType")


class OnboardingEvent(str, Enum):
    CREATE_COMPANY = "CREATE_COMPANY"
    UPDATE_CONTACT_INFO = "UPDATE_CONTACT_INFO"
    UPDATE_OPERATIONAL_INFO = "UPDATE_OPERATIONAL_INFO"
    COMPLETE_ONBOARDING = "COMPLETE_ONBOARDING"


class OnboardingStrategy(ABC, Generic[RequestType]):
    """하나의 온보딩 이벤트에 대한 검증/변환 규칙"""

    event: OnboardingEvent

    @abstractmethod
    def validate(self, request: RequestType, company: Optional[CompanySnapshot]) -> ValidationResult:
        ...

    @abstractmethod
    def on_success(self, request: RequestType, company: Optional[CompanySnapshot]) -> CompanySnapshot:
        ...


def _check_email_format(result: ValidationResult, value: Optional[str], label: str, *, required: bool = False) -> None:
    # 형식 검사는 "@" 포함 여부만 확인합니다 (RFC 검증 아님).
    # 필수 이메일은 값이 주어지기만 하면 공백이어도 검사하고, 선택 이메일은 비어 있지 않을 때만 검사합니다.
    present = value is not None if required else not is_blank(value)
    if present and "@" not in value:
        result.add_error(f"Invalid {label} email format")


class CreateCompanyStrategy(OnboardingStrategy[CompanyProfileRequest]):
    event = OnboardingEvent.CREATE_COMPANY

    def validate(self, request: CompanyProfileRequest, company: Optional[CompanySnapshot]) -> ValidationResult:
        result = ValidationResult()

        if company is not None:
            result.add_error("Company already exists, cannot create new profile")

        result.require(request.name, "Company name is required")
        result.require(request.registration_number, "Registration number is required")
        result.require(request.entity_type, "Entity type is required")
        result.require(request.country, "Country is required")
        return result

    def on_success(self, request: CompanyProfileRequest, company: Optional[CompanySnapshot]) -> CompanySnapshot:
        return CompanySnapshot(**request.model_dump(), progress_state=ProgressState.PROFILE)


class UpdateContactInfoStrategy(OnboardingStrategy[ContactInfoRequest]):
    event = OnboardingEvent.UPDATE_CONTACT_INFO
    allowed_states = (ProgressState.PROFILE, ProgressState.CONTACT)

    def validate(self, request: ContactInfoRequest, company: Optional[CompanySnapshot]) -> ValidationResult:
        if company is None:
            return ValidationResult.failure("Company does not exist")

        result = ValidationResult()
        if company.progress_state not in self.allowed_states:
            result.add_error(f"Cannot update contact info in current state: {company.progress_state.value}")

        result.require(request.main_contact_name, "Main contact name is required")
        result.require(request.main_contact_email, "Main contact email is required")
        result.require(request.main_contact_phone, "Main contact phone is required")
        result.require(request.contact_person_role, "Contact person role is required")

        _check_email_format(result, request.main_contact_email, "main contact", required=True)
        _check_email_format(result, request.technical_contact_email, "technical contact")
        _check_email_format(result, request.billing_contact_email, "billing contact")
        return result

    def on_success(self, request: ContactInfoRequest, company: Optional[CompanySnapshot]) -> CompanySnapshot:
        patch: Dict[str, Any] = request.model_dump()
        patch["progress_state"] = ProgressState.CONTACT
        return company.model_copy(update=patch)


class UpdateOperationalInfoStrategy(OnboardingStrategy[OperationalInfoRequest]):
    event = OnboardingEvent.UPDATE_OPERATIONAL_INFO
    allowed_states = (ProgressState.CONTACT, ProgressState.OPERATIONS)

    def validate(self, request: OperationalInfoRequest, company: Optional[CompanySnapshot]) -> ValidationResult:
        if company is None:
            return ValidationResult.failure("Company does not exist")

        result = ValidationResult()
        if company.progress_state not in self.allowed_states:
            result.add_error(f"Cannot update operational info in current state: {company.progress_state.value}")

        result.require(request.tax_id_number, "Tax ID number is required")
        result.require(request.bank_name, "Bank name is required")
        result.require(request.bank_account_number, "Bank account number is required")
        result.require(request.preferred_payment_method, "Preferred payment method is required")
        result.require(request.role_on_platform, "Role on platform is required")
        result.require(request.operating_hours, "Operating hours are required")

        if request.has_compliance_certification is None:
            result.add_error("Compliance certification status is required")
        if request.agreed_to_terms_of_service is None:
            result.add_error("Terms of service agreement is required")
        if request.agreed_to_terms_of_service is True and request.agreed_onboarding_date is None:
            result.add_error("Agreed onboarding date is required when terms of service are accepted")
        return result

    def on_success(self, request: OperationalInfoRequest, company: Optional[CompanySnapshot]) -> CompanySnapshot:
        patch: Dict[str, Any] = request.model_dump()
        patch["progress_state"] = ProgressState.OPERATIONS
        return company.model_copy(update=patch)


class CompleteOnboardingStrategy(OnboardingStrategy[None]):
    """운영 정보까지 입력된 회사를 COMPLETED 단계로 전환합니다. 요청 본문은 없습니다."""

    event = OnboardingEvent.COMPLETE_ONBOARDING

    def validate(self, request: None, company: Optional[CompanySnapshot]) -> ValidationResult:
        if company is None:
            return ValidationResult.failure("Company does not exist")

        result = ValidationResult()
        if company.progress_state != ProgressState.OPERATIONS:
            result.add_error(f"Cannot complete onboarding in current state: {company.progress_state.value}")
        if company.agreed_to_terms_of_service is not True:
            result.add_error("Terms of service must be accepted before completing onboarding")
        return result

    def on_success(self, request: None, company: Optional[CompanySnapshot]) -> CompanySnapshot:
        return company.model_copy(update={"progress_state": ProgressState.COMPLETED})


class OnboardingStrategyRegistry:
    """
    온보딩 이벤트 -> 전략 매핑입니다.
    생성 시 모든 OnboardingEvent에 정확히 하나의 전략이 있는지 검사합니다.
    """

    def __init__(self, strategies: Iterable[OnboardingStrategy]):
        self._strategies: Dict[OnboardingEvent, OnboardingStrategy] = {}
        for strategy in strategies:
            if strategy.event in self._strategies:
                raise ValueError(f"Duplicate onboarding strategy for {strategy.event.value}")
            self._strategies[strategy.event] = strategy

        missing = [e.value for e in OnboardingEvent if e not in self._strategies]
        if missing:
            raise ValueError(f"No onboarding strategy registered for: {', '.join(missing)}")

    def find_strategy(self, event: OnboardingEvent) -> OnboardingStrategy:
        try:
            return self._strategies[OnboardingEvent(event)]
        except (KeyError, ValueError):
            logger.warning("No strategy found for event: %s", event)
            raise UnsupportedOperation(f"No strategy found for event: {event}")


strategy_registry = OnboardingStrategyRegistry([
    CreateCompanyStrategy(),
    UpdateContactInfoStrategy(),
    UpdateOperationalInfoStrategy(),
    CompleteOnboardingStrategy(),
])
