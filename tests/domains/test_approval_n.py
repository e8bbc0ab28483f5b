# tests/domains/test_approval_n.py

"""
승인 레코드 조회/미리보기/승인/반려 API와 승인 서비스에 대한 테스트입니다.
"""

import json

import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.exceptions import NotFound, UnsupportedOperation
from onboard.domains.approval import models as approval_models
from onboard.domains.approval import services as approval_services
from onboard.domains.approval.processors import (
    ApprovalProcessorRegistry,
    CompanyApprovalProcessor,
    processor_registry,
)
from onboard.domains.company import models as company_models
from onboard.domains.company.schemas import CompanyProfileRequest
from onboard.domains.company.snapshots import CompanySnapshot, encode_snapshot
from onboard.domains.onboarding.strategies import CreateCompanyStrategy

API_PREFIX = "/api/v1/companies"
APPROVALS_PREFIX = "/api/v1/companies/approvals"

PROFILE_PAYLOAD = {"name": "Acme", "registration_number": "RN1", "entity_type": "LLC", "country": "SG"}


async def _submit_profile(client: AsyncClient, payload: dict = PROFILE_PAYLOAD) -> int:
    response = await client.post(f"{API_PREFIX}/profile", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["approval_id"]


async def _all_companies(db_session: AsyncSession):
    return (await db_session.exec(select(company_models.Company))).all()


# =============================================================================
# 1. 반려
# =============================================================================

@pytest.mark.asyncio
async def test_reject_without_reason_uses_default(
    authorized_client: AsyncClient, admin_client: AsyncClient, db_session: AsyncSession
):
    approval_id = await _submit_profile(authorized_client)

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/reject")
    assert response.status_code == 200
    data = response.json()
    assert data["approval_status"] == "REJECTED"
    assert data["remarks"] == "No reason provided"
    assert data["approved_by"] == "sysadm"
    assert data["data_id"] is None

    assert await _all_companies(db_session) == []


@pytest.mark.asyncio
async def test_reject_with_reason(authorized_client: AsyncClient, admin_client: AsyncClient):
    approval_id = await _submit_profile(authorized_client)

    response = await admin_client.post(
        f"{APPROVALS_PREFIX}/{approval_id}/reject", params={"reason": "Registration number mismatch"}
    )
    assert response.status_code == 200
    assert response.json()["remarks"] == "Registration number mismatch"


@pytest.mark.asyncio
async def test_reject_update_leaves_company_untouched(
    authorized_client: AsyncClient, admin_client: AsyncClient, db_session: AsyncSession
):
    approval_id = await _submit_profile(authorized_client)
    company_id = (await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")).json()["data_id"]

    contact = {
        "main_contact_name": "Jane Doe",
        "main_contact_email": "jane@acme.com",
        "main_contact_phone": "+65 1234 5678",
        "contact_person_role": "CFO",
    }
    response = await authorized_client.put(f"{API_PREFIX}/{company_id}/contact", json=contact)
    update_id = response.json()["approval_id"]

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{update_id}/reject", params={"reason": "Wrong phone"})
    assert response.status_code == 200

    company = await db_session.get(company_models.Company, company_id)
    assert company.progress_state == company_models.ProgressState.PROFILE
    assert company.main_contact_email is None


# =============================================================================
# 2. 재결정 방지 / 권한
# =============================================================================

@pytest.mark.asyncio
async def test_decided_approval_cannot_be_decided_again(
    authorized_client: AsyncClient, admin_client: AsyncClient, db_session: AsyncSession
):
    approval_id = await _submit_profile(authorized_client)
    await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")
    assert response.status_code == 409
    assert response.json() == {
        "detail": f"Approval {approval_id} is already APPROVED",
        "code": "APPROVAL_ALREADY_DECIDED",
    }

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/reject")
    assert response.status_code == 409

    # 두 번째 승인이 회사를 중복 생성하지 않아야 합니다.
    assert len(await _all_companies(db_session)) == 1


@pytest.mark.asyncio
async def test_rejected_approval_cannot_be_approved(authorized_client: AsyncClient, admin_client: AsyncClient):
    approval_id = await _submit_profile(authorized_client)
    await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/reject")

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")
    assert response.status_code == 409
    assert response.json()["detail"] == f"Approval {approval_id} is already REJECTED"


@pytest.mark.asyncio
async def test_general_user_cannot_decide(authorized_client: AsyncClient):
    approval_id = await _submit_profile(authorized_client)

    response = await authorized_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")
    assert response.status_code == 403
    assert response.json()["detail"] == "Not enough permissions. Admin role required."

    response = await authorized_client.post(f"{APPROVALS_PREFIX}/{approval_id}/reject")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_decide_missing_approval(admin_client: AsyncClient):
    response = await admin_client.post(f"{APPROVALS_PREFIX}/4242/approve")
    assert response.status_code == 404
    assert response.json() == {"detail": "Approval not found: 4242", "code": "NOT_FOUND"}


# =============================================================================
# 3. 미리보기 (restore)
# =============================================================================

@pytest.mark.asyncio
async def test_restore_returns_staged_snapshot(authorized_client: AsyncClient):
    approval_id = await _submit_profile(authorized_client)

    response = await authorized_client.post(f"{APPROVALS_PREFIX}/{approval_id}/restore")
    assert response.status_code == 200

    expected = CreateCompanyStrategy().on_success(CompanyProfileRequest(**PROFILE_PAYLOAD), None)
    assert CompanySnapshot.model_validate(response.json()) == expected


@pytest.mark.asyncio
async def test_restore_missing_approval(authorized_client: AsyncClient):
    response = await authorized_client.post(f"{APPROVALS_PREFIX}/777/restore")
    assert response.status_code == 404


# =============================================================================
# 4. 목록 조회
# =============================================================================

@pytest.mark.asyncio
async def test_list_approvals_by_type_and_status(authorized_client: AsyncClient, admin_client: AsyncClient):
    first = await _submit_profile(authorized_client)
    second = await _submit_profile(authorized_client, {**PROFILE_PAYLOAD, "name": "Globex"})
    await admin_client.post(f"{APPROVALS_PREFIX}/{first}/approve")

    response = await authorized_client.get(APPROVALS_PREFIX)
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [first, second]

    response = await authorized_client.get(APPROVALS_PREFIX, params={"type": "COMPANY", "status": "PENDING"})
    assert [a["id"] for a in response.json()] == [second]

    response = await authorized_client.get(APPROVALS_PREFIX, params={"status": "APPROVED"})
    assert [a["id"] for a in response.json()] == [first]

    response = await authorized_client.get(APPROVALS_PREFIX, params={"type": "VENDOR"})
    assert response.json() == []


# =============================================================================
# 5. 승인 서비스 / 프로세서 레지스트리
# =============================================================================

def _staged_approval(**overrides) -> approval_models.Approval:
    data = {
        "data_type": "COMPANY",
        "operation_type": approval_models.OperationType.UPDATE,
        "submitted_by": "testuser",
        "new_data": encode_snapshot(CompanySnapshot(name="Ghost", progress_state=company_models.ProgressState.CONTACT)),
    }
    data.update(overrides)
    return approval_models.Approval(**data)


@pytest.mark.asyncio
async def test_approve_update_for_deleted_company_rolls_back(db_session: AsyncSession):
    approval = _staged_approval(data_id=999)
    db_session.add(approval)
    await db_session.commit()
    approval_id = approval.id

    with pytest.raises(NotFound):
        await approval_services.approve_approval(db_session, approval_id, approved_by="sysadm")

    reloaded = await db_session.get(approval_models.Approval, approval_id)
    assert reloaded.approval_status == approval_models.ApprovalStatus.PENDING
    assert reloaded.approved_by is None


@pytest.mark.asyncio
async def test_approve_unknown_data_type(admin_client: AsyncClient, db_session: AsyncSession):
    approval = _staged_approval(data_type="VENDOR")
    db_session.add(approval)
    await db_session.commit()

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{approval.id}/approve")
    assert response.status_code == 400
    assert response.json() == {
        "detail": "No processor found for approval type: VENDOR",
        "code": "UNSUPPORTED_OPERATION",
    }


@pytest.mark.asyncio
async def test_approve_update_overwrites_whole_company(db_session: AsyncSession):
    company = company_models.Company(name="Acme", country="SG", industry_sector="Retail")
    db_session.add(company)
    await db_session.commit()
    await db_session.refresh(company)

    # 스냅샷 id가 달라도 승인 레코드의 data_id 행이 갱신됩니다.
    snapshot = CompanySnapshot(id=555, name="Acme Holdings", country="SG", progress_state=company_models.ProgressState.CONTACT)
    approval = _staged_approval(data_id=company.id, new_data=encode_snapshot(snapshot))
    db_session.add(approval)
    await db_session.commit()

    result = await approval_services.approve_approval(db_session, approval.id, approved_by="sysadm")
    assert result.approval_status == approval_models.ApprovalStatus.APPROVED

    updated = await db_session.get(company_models.Company, company.id)
    assert updated.id == company.id
    assert updated.name == "Acme Holdings"
    assert updated.industry_sector is None
    assert updated.progress_state == company_models.ProgressState.CONTACT
    assert await db_session.get(company_models.Company, 555) is None


def test_processor_registry_lookup():
    assert isinstance(processor_registry.find_processor("COMPANY"), CompanyApprovalProcessor)
    assert processor_registry.supported_types() == ["COMPANY"]

    with pytest.raises(UnsupportedOperation):
        processor_registry.find_processor("VENDOR")


def test_processor_registry_fails_fast():
    with pytest.raises(ValueError, match="No approval processor registered for: COMPANY"):
        ApprovalProcessorRegistry([])

    with pytest.raises(ValueError, match="Duplicate approval processor"):
        ApprovalProcessorRegistry([CompanyApprovalProcessor(), CompanyApprovalProcessor()])


def test_new_data_is_full_snapshot():
    snapshot = CompanySnapshot(name="Acme", progress_state=company_models.ProgressState.PROFILE)
    decoded = json.loads(encode_snapshot(snapshot))
    assert set(decoded) == set(CompanySnapshot.model_fields)


# =============================================================================
# 6. 진행 단계 역행 방지
# =============================================================================

CONTACT_PAYLOAD = {
    "main_contact_name": "Jane Doe",
    "main_contact_email": "jane@acme.com",
    "main_contact_phone": "+65 1234 5678",
    "contact_person_role": "CFO",
}

OPERATIONS_PAYLOAD = {
    "tax_id_number": "T-100",
    "bank_name": "DBS",
    "bank_account_number": "001-234",
    "preferred_payment_method": "WIRE",
    "role_on_platform": "SUPPLIER",
    "operating_hours": "09-18",
    "has_compliance_certification": True,
    "agreed_to_terms_of_service": True,
    "agreed_onboarding_date": "2024-01-15",
}


@pytest.mark.asyncio
async def test_stale_contact_update_cannot_move_company_backwards(
    authorized_client: AsyncClient, admin_client: AsyncClient
):
    """
    CONTACT 단계에서 운영 정보와 연락처 재제출이 함께 대기 중일 때,
    운영 정보가 먼저 승인되면 이전 연락처 승인은 409로 거부되고 회사는 OPERATIONS에 머뭅니다.
    """
    approval_id = await _submit_profile(authorized_client)
    company_id = (await admin_client.post(f"{APPROVALS_PREFIX}/{approval_id}/approve")).json()["data_id"]

    response = await authorized_client.put(f"{API_PREFIX}/{company_id}/contact", json=CONTACT_PAYLOAD)
    response = await admin_client.post(f"{APPROVALS_PREFIX}/{response.json()['approval_id']}/approve")
    assert response.status_code == 200

    response = await authorized_client.put(f"{API_PREFIX}/{company_id}/operations", json=OPERATIONS_PAYLOAD)
    operations_id = response.json()["approval_id"]
    response = await authorized_client.put(
        f"{API_PREFIX}/{company_id}/contact", json={**CONTACT_PAYLOAD, "main_contact_name": "John Roe"}
    )
    stale_contact_id = response.json()["approval_id"]

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{operations_id}/approve")
    assert response.status_code == 200

    response = await admin_client.post(f"{APPROVALS_PREFIX}/{stale_contact_id}/approve")
    assert response.status_code == 409
    assert response.json() == {
        "detail": f"Approval {stale_contact_id} would move company {company_id} back from OPERATIONS to CONTACT",
        "code": "STALE_APPROVAL",
    }

    company = (await authorized_client.get(f"{API_PREFIX}/{company_id}")).json()
    assert company["progress_state"] == "OPERATIONS"
    assert company["tax_id_number"] == "T-100"
    assert company["main_contact_name"] == "Jane Doe"

    stale = (await authorized_client.get(f"{APPROVALS_PREFIX}/{stale_contact_id}")).json()
    assert stale["approval_status"] == "PENDING"

    # 거부된 승인 건은 반려로 정리할 수 있습니다.
    response = await admin_client.post(f"{APPROVALS_PREFIX}/{stale_contact_id}/reject", params={"reason": "Superseded"})
    assert response.status_code == 200
    assert response.json()["approval_status"] == "REJECTED"


@pytest.mark.asyncio
async def test_same_stage_update_is_still_approved(db_session: AsyncSession):
    company = company_models.Company(name="Acme", progress_state=company_models.ProgressState.CONTACT)
    db_session.add(company)
    await db_session.commit()
    await db_session.refresh(company)

    snapshot = CompanySnapshot(name="Acme", main_contact_name="John Roe", progress_state=company_models.ProgressState.CONTACT)
    approval = _staged_approval(data_id=company.id, new_data=encode_snapshot(snapshot))
    db_session.add(approval)
    await db_session.commit()

    result = await approval_services.approve_approval(db_session, approval.id, approved_by="sysadm")
    assert result.approval_status == approval_models.ApprovalStatus.APPROVED
    assert company.main_contact_name == "John Roe"


def test_progress_state_rank_follows_flow():
    ranks = [state.rank for state in company_models.ProgressState]
    assert ranks == [0, 1, 2, 3]
    assert company_models.ProgressState.OPERATIONS.rank > company_models.ProgressState.CONTACT.rank
