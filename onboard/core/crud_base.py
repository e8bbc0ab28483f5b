# onboard/core/crud_base.py

"""
공통 CRUD(Create, Read, Update) 작업을 위한 기본 클래스 모듈입니다.

쓰기 메서드는 기본적으로 커밋까지 수행하지만, `commit=False`를 넘기면
flush만 하고 커밋은 호출자에게 맡깁니다. 승인 처리처럼 여러 테이블의 쓰기를
하나의 트랜잭션으로 묶어야 할 때 사용합니다.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from pydantic import BaseModel

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    모든 CRUD 작업에 대한 기본 클래스를 정의합니다.
    """
    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """ID를 기준으로 단일 레코드를 조회합니다."""
        return await db.get(self.model, id)

    async def get_multi(
        self, db: AsyncSession, *, skip: int = 0, limit: int = 100, **filters: Any
    ) -> List[ModelType]:
        """
        여러 레코드를 id 순으로 조회합니다.
        값이 None이 아닌 키워드 인자는 동등 조건 필터로 사용됩니다.
        """
        query = select(self.model)

        for field, value in filters.items():
            if value is not None and hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)

        query = query.order_by(self.model.id).offset(skip).limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_attribute(
        self, db: AsyncSession, *, attribute: str, value: Any
    ) -> Optional[ModelType]:
        statement = select(self.model).where(getattr(self.model, attribute) == value)
        response = await db.execute(statement)
        return response.scalar_one_or_none()

    async def create(
        self, db: AsyncSession, *, obj_in: Union[ModelType, CreateSchemaType, Dict[str, Any]], commit: bool = True
    ) -> ModelType:
        """
        새로운 레코드를 생성합니다. id는 데이터베이스가 부여합니다.
        이미 만들어진 모델 인스턴스는 그대로 저장합니다.
        """
        if isinstance(obj_in, self.model):
            db_obj = obj_in
        else:
            db_obj = self.model.model_validate(obj_in)
        db.add(db_obj)
        await self._persist(db, db_obj, commit)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
        commit: bool = True,
    ) -> ModelType:
        """
        기존 레코드를 업데이트합니다.
        dict는 그대로, Pydantic 모델은 설정된(exclude_unset) 필드만 반영합니다.
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for key, value in update_data.items():
            if key != "id" and hasattr(db_obj, key):
                setattr(db_obj, key, value)

        db.add(db_obj)
        await self._persist(db, db_obj, commit)
        return db_obj

    @staticmethod
    async def _persist(db: AsyncSession, db_obj: ModelType, commit: bool) -> None:
        if commit:
            await db.commit()
            await db.refresh(db_obj)
        else:
            await db.flush()
