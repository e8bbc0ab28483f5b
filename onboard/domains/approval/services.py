# onboard/domains/approval/services.py

"""
승인 결정(승인/반려)과 스냅샷 미리보기를 담당하는 서비스 모듈입니다.

- 이미 결정된(APPROVED/REJECTED) 승인 건은 다시 결정할 수 없습니다.
- 대상 레코드 쓰기와 승인 상태 쓰기는 한 번의 커밋으로 처리되며,
  도중에 실패하면 모두 롤백됩니다.
"""

import logging
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.config import settings
from onboard.core.exceptions import ApprovalAlreadyDecided
from onboard.domains.company.snapshots import CompanySnapshot, decode_snapshot
from . import crud as approval_crud
from .models import Approval
from .processors import ApprovalProcessor, ApprovalProcessorRegistry, processor_registry

logger = logging.getLogger(__name__)


async def _load_pending(
    db: AsyncSession, approval_id: int, registry: ApprovalProcessorRegistry
) -> tuple[Approval, ApprovalProcessor]:
    approval = await approval_crud.approval.get_or_404(db, approval_id)
    processor = registry.find_processor(approval.data_type)
    if approval.is_decided:
        raise ApprovalAlreadyDecided(approval.id, approval.approval_status.value)
    return approval, processor


async def approve_approval(
    db: AsyncSession,
    approval_id: int,
    *,
    approved_by: str,
    registry: ApprovalProcessorRegistry = processor_registry,
) -> Approval:
    approval, processor = await _load_pending(db, approval_id, registry)
    try:
        approval = await processor.approve(db, approval, approved_by=approved_by)
        await db.commit()
    except Exception:
        logger.error("Error processing approval %s", approval_id, exc_info=True)
        await db.rollback()
        raise
    await db.refresh(approval)
    return approval


async def reject_approval(
    db: AsyncSession,
    approval_id: int,
    *,
    approved_by: str,
    reason: Optional[str] = None,
    registry: ApprovalProcessorRegistry = processor_registry,
) -> Approval:
    approval, processor = await _load_pending(db, approval_id, registry)
    reason = reason if reason and reason.strip() else settings.DEFAULT_REJECTION_REASON
    try:
        approval = await processor.reject(db, approval, approved_by=approved_by, reason=reason)
        await db.commit()
    except Exception:
        logger.error("Error rejecting approval %s", approval_id, exc_info=True)
        await db.rollback()
        raise
    await db.refresh(approval)
    return approval


async def restore_from_approval(db: AsyncSession, approval_id: int) -> CompanySnapshot:
    """승인 레코드의 new_data 스냅샷을 복원하여 반환합니다. 어떤 저장소도 변경하지 않습니다."""
    approval = await approval_crud.approval.get_or_404(db, approval_id)
    return decode_snapshot(approval.new_data)
