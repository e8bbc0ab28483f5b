# onboard/domains/company/crud.py

"""
'company' 도메인의 CRUD 로직을 담당하는 모듈입니다.
회사 행은 승인 프로세서를 통해서만 생성/갱신됩니다.
"""

from typing import List, Optional
from datetime import datetime, UTC

from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.crud_base import CRUDBase
from onboard.core.exceptions import NotFound
from . import models as company_models
from .snapshots import CompanySnapshot


class CRUDCompany(CRUDBase[company_models.Company, CompanySnapshot, CompanySnapshot]):
    def __init__(self):
        super().__init__(model=company_models.Company)

    async def get_or_404(self, db: AsyncSession, id: int) -> company_models.Company:
        company = await self.get(db, id)
        if company is None:
            raise NotFound("Company", id)
        return company

    async def list_companies(
        self,
        db: AsyncSession,
        *,
        progress_state: Optional[company_models.ProgressState] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[company_models.Company]:
        return await self.get_multi(db, skip=skip, limit=limit, progress_state=progress_state)

    async def create_from_snapshot(
        self, db: AsyncSession, *, snapshot: CompanySnapshot, commit: bool = True
    ) -> company_models.Company:
        """스냅샷으로 새 회사 행을 만듭니다. 스냅샷의 id는 무시되고 DB가 새 id를 부여합니다."""
        return await self.create(db, obj_in=snapshot.field_values(), commit=commit)

    async def overwrite_from_snapshot(
        self, db: AsyncSession, *, db_obj: company_models.Company, snapshot: CompanySnapshot, commit: bool = True
    ) -> company_models.Company:
        """
        기존 회사 행의 모든 필드를 스냅샷 값으로 덮어씁니다.
        필드 단위 병합이나 낙관적 동시성 검사는 하지 않습니다.
        """
        obj_in = snapshot.field_values()
        obj_in["updated_at"] = datetime.now(UTC)
        return await self.update(db, db_obj=db_obj, obj_in=obj_in, commit=commit)


company = CRUDCompany()
