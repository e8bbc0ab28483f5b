# onboard/domains/approval/crud.py

"""
'approval' 도메인의 CRUD 로직을 담당하는 모듈입니다.
"""

import logging
from typing import List, Optional
from datetime import datetime, UTC

from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.crud_base import CRUDBase
from onboard.core.exceptions import NotFound
from . import models as approval_models

logger = logging.getLogger(__name__)


class CRUDApproval(CRUDBase[approval_models.Approval, approval_models.Approval, approval_models.Approval]):
    def __init__(self):
        super().__init__(model=approval_models.Approval)

    async def get_or_404(self, db: AsyncSession, id: int) -> approval_models.Approval:
        approval = await self.get(db, id)
        if approval is None:
            raise NotFound("Approval", id)
        return approval

    async def get_by_type(
        self,
        db: AsyncSession,
        *,
        data_type: str,
        approval_status: Optional[approval_models.ApprovalStatus] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[approval_models.Approval]:
        """데이터 유형(및 선택적으로 상태)으로 승인 레코드를 조회합니다."""
        return await self.get_multi(
            db, skip=skip, limit=limit, data_type=data_type, approval_status=approval_status
        )

    async def mark_approved(
        self, db: AsyncSession, *, db_obj: approval_models.Approval, approved_by: str, commit: bool = True
    ) -> approval_models.Approval:
        logger.info("Marking approval %s as APPROVED", db_obj.id, extra={"approval_id": db_obj.id, "username": approved_by})
        return await self.update(
            db,
            db_obj=db_obj,
            obj_in={
                "approval_status": approval_models.ApprovalStatus.APPROVED,
                "approved_by": approved_by,
                "approved_at": datetime.now(UTC),
            },
            commit=commit,
        )

    async def mark_rejected(
        self, db: AsyncSession, *, db_obj: approval_models.Approval, approved_by: str, reason: str, commit: bool = True
    ) -> approval_models.Approval:
        logger.info(
            "Marking approval %s as REJECTED with reason: %s", db_obj.id, reason,
            extra={"approval_id": db_obj.id, "username": approved_by},
        )
        return await self.update(
            db,
            db_obj=db_obj,
            obj_in={
                "approval_status": approval_models.ApprovalStatus.REJECTED,
                "approved_by": approved_by,
                "approved_at": datetime.now(UTC),
                "remarks": reason,
            },
            commit=commit,
        )

    async def update_data_id(
        self, db: AsyncSession, *, db_obj: approval_models.Approval, data_id: int, commit: bool = True
    ) -> approval_models.Approval:
        """신규 생성 승인 시, 새로 만들어진 레코드 ID를 승인 레코드에 기록합니다."""
        logger.info("Updating approval %s with data ID: %s", db_obj.id, data_id)
        return await self.update(db, db_obj=db_obj, obj_in={"data_id": data_id}, commit=commit)


approval = CRUDApproval()
