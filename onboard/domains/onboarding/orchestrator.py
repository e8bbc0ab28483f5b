# onboard/domains/onboarding/orchestrator.py

"""
온보딩 이벤트 처리: 검증 -> 변환 -> 승인 레코드(PENDING) 등록.

요청 하나당 정확히 하나의 승인 레코드가 기록되고, 회사 레코드는 기록되지 않습니다.
검증에 실패하면 아무것도 기록하지 않고 ValidationFailed를 발생시킵니다.
"""

import logging
from datetime import datetime, UTC
from typing import Any, Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.exceptions import ValidationFailed
from onboard.domains.approval import crud as approval_crud
from onboard.domains.approval.models import Approval, ApprovalDataType, ApprovalStatus, OperationType
from onboard.domains.company.snapshots import CompanySnapshot, changed_fields, encode_snapshot
from .strategies import OnboardingEvent, OnboardingStrategyRegistry, strategy_registry

logger = logging.getLogger(__name__)


def operation_type_for(event: OnboardingEvent) -> OperationType:
    return OperationType.NEW if event == OnboardingEvent.CREATE_COMPANY else OperationType.UPDATE


def build_approval(
    event: OnboardingEvent,
    new_company: CompanySnapshot,
    old_company: Optional[CompanySnapshot],
    *,
    submitted_by: str,
) -> Approval:
    operation_type = operation_type_for(event)
    approval = Approval(
        data_type=ApprovalDataType.COMPANY.value,
        operation_type=operation_type,
        submitted_by=submitted_by,
        submitted_at=datetime.now(UTC),
        approval_status=ApprovalStatus.PENDING,
        new_data=encode_snapshot(new_company),
        change_summary=", ".join(changed_fields(old_company, new_company)) or None,
    )
    if operation_type == OperationType.UPDATE:
        approval.data_id = old_company.id
        approval.old_data = encode_snapshot(old_company)
    return approval


async def submit_event(
    db: AsyncSession,
    event: OnboardingEvent,
    request: Any,
    company: Optional[CompanySnapshot],
    *,
    submitted_by: str,
    registry: OnboardingStrategyRegistry = strategy_registry,
) -> Approval:
    """
    이벤트에 맞는 전략으로 요청을 검증/변환하고 승인 레코드를 등록합니다.
    company는 CREATE_COMPANY일 때 None, 그 외에는 현재 회사 스냅샷입니다.
    """
    strategy = registry.find_strategy(event)

    result = strategy.validate(request, company)
    if not result.valid:
        logger.info("Onboarding event %s rejected: %s", event.value, result.error_message, extra={"event": event.value})
        raise ValidationFailed(result.errors)

    target = strategy.on_success(request, company)
    approval = build_approval(event, target, company, submitted_by=submitted_by)
    approval = await approval_crud.approval.create(db, obj_in=approval)

    logger.info(
        "Onboarding event %s staged as approval %s", event.value, approval.id,
        extra={"event": event.value, "approval_id": approval.id, "username": submitted_by},
    )
    return approval
