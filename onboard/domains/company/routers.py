# onboard/domains/company/routers.py

"""
회사 온보딩 단계별 제출 및 회사 조회 API 엔드포인트를 정의하는 모듈입니다.

제출 엔드포인트는 회사 레코드를 직접 변경하지 않습니다.
검증을 통과한 변경은 PENDING 승인 레코드로 등록되고, 생성된 승인 ID를 반환합니다.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core import dependencies as deps
from onboard.domains.usr import models as usr_models
from onboard.domains.onboarding.orchestrator import submit_event
from onboard.domains.onboarding.strategies import OnboardingEvent
from . import crud, schemas
from .models import ProgressState
from .snapshots import snapshot_of


router = APIRouter(
    tags=["Company Onboarding (회사 온보딩)"],
    responses={404: {"description": "Not found"}},
)


# =============================================================================
# 1. 온보딩 단계 제출
# =============================================================================

@router.post(
    "/profile",
    response_model=schemas.SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회사 프로필 제출 (신규)",
)
async def create_company_profile(
    request: schemas.CompanyProfileRequest,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    """
    새 회사 프로필을 제출합니다. 승인되면 PROFILE 단계의 회사 레코드가 생성됩니다.
    """
    approval = await submit_event(
        db, OnboardingEvent.CREATE_COMPANY, request, None, submitted_by=current_user.username
    )
    return {"approval_id": approval.id}


@router.put("/{company_id}/contact", response_model=schemas.SubmissionResponse, summary="연락처 정보 제출")
async def update_contact_info(
    company_id: int,
    request: schemas.ContactInfoRequest,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    company = await crud.company.get_or_404(db, company_id)
    approval = await submit_event(
        db, OnboardingEvent.UPDATE_CONTACT_INFO, request, snapshot_of(company), submitted_by=current_user.username
    )
    return {"approval_id": approval.id}


@router.put("/{company_id}/operations", response_model=schemas.SubmissionResponse, summary="운영 정보 제출")
async def update_operational_info(
    company_id: int,
    request: schemas.OperationalInfoRequest,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    company = await crud.company.get_or_404(db, company_id)
    approval = await submit_event(
        db, OnboardingEvent.UPDATE_OPERATIONAL_INFO, request, snapshot_of(company), submitted_by=current_user.username
    )
    return {"approval_id": approval.id}


@router.post("/{company_id}/complete", response_model=schemas.SubmissionResponse, summary="온보딩 완료 요청")
async def complete_onboarding(
    company_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    """
    운영 정보 단계까지 승인된 회사를 COMPLETED 단계로 전환하는 승인 요청을 등록합니다.
    """
    company = await crud.company.get_or_404(db, company_id)
    approval = await submit_event(
        db, OnboardingEvent.COMPLETE_ONBOARDING, None, snapshot_of(company), submitted_by=current_user.username
    )
    return {"approval_id": approval.id}


# =============================================================================
# 2. 회사 조회
# =============================================================================

@router.get("", response_model=List[schemas.CompanyRead], summary="회사 목록 조회")
async def read_companies(
    progress_state: Optional[ProgressState] = Query(None, description="진행 단계 필터"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    return await crud.company.list_companies(db, progress_state=progress_state, skip=skip, limit=limit)


@router.get("/{company_id}", response_model=schemas.CompanyRead, summary="회사 조회")
async def read_company(
    company_id: int,
    db: AsyncSession = Depends(deps.get_db_session),
    current_user: usr_models.User = Depends(deps.get_current_active_user),
):
    return await crud.company.get_or_404(db, company_id)
