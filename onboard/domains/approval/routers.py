# onboard/domains/approval/routers.py

"""
승인 레코드 조회, 스냅샷 미리보기, 승인/반려 결정 API 엔드포인트를 정의하는 모듈입니다.
승인/반려는 관리자 권한이 필요합니다.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core import dependencies as deps
from onboard.domains.usr import models as usr_models
from onboard.domains.company.snapshots import CompanySnapshot
from . import crud, schemas, services
from .models import ApprovalDataType, ApprovalStatus


router = APIRouter(
    tags=["Approvals (승인 관리)"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=List[schemas.ApprovalRead], summary="유형별 승인 목록 조회")
async def read_approvals(
    data_type: str = Query(ApprovalDataType.COMPANY.value, alias="type", description="승인 대상 데이터 유형"),
    approval_status: Optional[ApprovalStatus] = Query(None, alias="status", description="승인 상태 필터"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    return await crud.approval.get_by_type(
        db, data_type=data_type, approval_status=approval_status, skip=skip, limit=limit
    )


@router.get("/{approval_id}", response_model=schemas.ApprovalRead, summary="승인 레코드 조회")
async def read_approval(
    approval_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    return await crud.approval.get_or_404(db, approval_id)


@router.post("/{approval_id}/restore", response_model=CompanySnapshot, summary="스테이징된 스냅샷 미리보기")
async def restore_from_approval(
    approval_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    """
    승인 레코드의 new_data를 회사 스냅샷으로 복원하여 반환합니다. 어떤 데이터도 변경하지 않습니다.
    """
    return await services.restore_from_approval(db, approval_id)


@router.post("/{approval_id}/approve", response_model=schemas.ApprovalRead, summary="승인")
async def approve(
    approval_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
):
    return await services.approve_approval(db, approval_id, approved_by=current_admin_user.username)


@router.post("/{approval_id}/reject", response_model=schemas.ApprovalRead, summary="반려")
async def reject(
    approval_id: int,
    reason: Optional[str] = Query(None, max_length=1000, description="반려 사유"),
    db: AsyncSession = Depends(deps.get_db_session),
    current_admin_user: usr_models.User = Depends(deps.get_current_admin_user),
):
    """
    승인 요청을 반려합니다. 사유가 없으면 기본 사유가 기록됩니다. 회사 레코드는 변경되지 않습니다.
    """
    return await services.reject_approval(db, approval_id, approved_by=current_admin_user.username, reason=reason)
