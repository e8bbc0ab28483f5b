# onboard/domains/approval/processors.py

"""
데이터 유형별 승인 프로세서와 프로세서 레지스트리를 정의하는 모듈입니다.

프로세서는 승인 시 스테이징된 스냅샷을 대상 테이블에 반영하고 승인 상태를 갱신하며,
반려 시에는 상태와 사유만 기록합니다. 프로세서는 커밋하지 않습니다.
대상 레코드 쓰기와 승인 상태 쓰기를 하나의 트랜잭션으로 묶는 것은 services.py의 책임입니다.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.exceptions import NotFound, StaleApproval, UnsupportedOperation
from onboard.domains.company import crud as company_crud
from onboard.domains.company.models import ProgressState
from onboard.domains.company.snapshots import decode_snapshot
from . import crud as approval_crud
from .models import Approval, ApprovalDataType, OperationType

logger = logging.getLogger(__name__)


class ApprovalProcessor(ABC):
    """하나의 승인 데이터 유형을 처리하는 프로세서의 인터페이스"""

    data_type: ApprovalDataType

    @abstractmethod
    async def approve(self, db: AsyncSession, approval: Approval, *, approved_by: str) -> Approval:
        ...

    async def reject(self, db: AsyncSession, approval: Approval, *, approved_by: str, reason: str) -> Approval:
        logger.info("Rejecting %s approval %s for reason: %s", self.data_type.value, approval.id, reason)
        return await approval_crud.approval.mark_rejected(
            db, db_obj=approval, approved_by=approved_by, reason=reason, commit=False
        )


class CompanyApprovalProcessor(ApprovalProcessor):
    """
    COMPANY 승인 프로세서.
    NEW는 새 회사 행을 만들고 data_id를 채우며, UPDATE는 기존 행을 전체 덮어씁니다.
    UPDATE 스냅샷의 진행 단계가 회사의 현재 단계보다 이전이면 StaleApproval(409)을 발생시킵니다.
    """

    data_type = ApprovalDataType.COMPANY

    async def approve(self, db: AsyncSession, approval: Approval, *, approved_by: str) -> Approval:
        logger.info("Processing COMPANY approval %s (%s)", approval.id, approval.operation_type.value)
        snapshot = decode_snapshot(approval.new_data)

        if approval.operation_type == OperationType.NEW:
            company = await company_crud.company.create_from_snapshot(db, snapshot=snapshot, commit=False)
            await approval_crud.approval.update_data_id(db, db_obj=approval, data_id=company.id, commit=False)
            logger.info("Created new company with ID: %s", company.id, extra={"company_id": company.id})
        elif approval.operation_type == OperationType.UPDATE:
            company = await company_crud.company.get(db, approval.data_id)
            if company is None:
                raise NotFound("Company", approval.data_id)
            # 진행 단계는 앞으로만 이동합니다. 더 늦은 단계가 먼저 승인된 경우 거부합니다.
            current_state = ProgressState(company.progress_state)
            if snapshot.progress_state.rank < current_state.rank:
                raise StaleApproval(approval.id, company.id, current_state.value, snapshot.progress_state.value)
            snapshot = snapshot.model_copy(update={"id": approval.data_id})
            await company_crud.company.overwrite_from_snapshot(db, db_obj=company, snapshot=snapshot, commit=False)
            logger.info("Updated company with ID: %s", company.id, extra={"company_id": company.id})
        else:
            raise UnsupportedOperation(f"Unsupported operation type: {approval.operation_type}")

        return await approval_crud.approval.mark_approved(db, db_obj=approval, approved_by=approved_by, commit=False)


class ApprovalProcessorRegistry:
    """
    승인 데이터 유형 -> 프로세서 매핑입니다.
    생성 시 모든 ApprovalDataType에 정확히 하나의 프로세서가 있는지 검사하고,
    누락/중복이 있으면 즉시 실패합니다.
    """

    def __init__(self, processors: Iterable[ApprovalProcessor]):
        self._processors: Dict[ApprovalDataType, ApprovalProcessor] = {}
        for processor in processors:
            if processor.data_type in self._processors:
                raise ValueError(
                    f"Duplicate approval processor for {processor.data_type.value}: "
                    f"{type(self._processors[processor.data_type]).__name__}, {type(processor).__name__}"
                )
            self._processors[processor.data_type] = processor

        missing = [t.value for t in ApprovalDataType if t not in self._processors]
        if missing:
            raise ValueError(f"No approval processor registered for: {', '.join(missing)}")

    def find_processor(self, data_type: str) -> ApprovalProcessor:
        try:
            processor = self._processors[ApprovalDataType(data_type)]
        except ValueError:
            logger.warning("No processor found for approval type: %s", data_type)
            raise UnsupportedOperation(f"No processor found for approval type: {data_type}")
        logger.debug("Found processor %s for type %s", type(processor).__name__, data_type)
        return processor

    def supported_types(self) -> List[str]:
        return [t.value for t in self._processors]


processor_registry = ApprovalProcessorRegistry([CompanyApprovalProcessor()])
