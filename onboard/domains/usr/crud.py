# onboard/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from onboard.core.crud_base import CRUDBase
from onboard.core.security import get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas


class CRUDUser(CRUDBase[usr_models.User, usr_schemas.UserCreate, usr_schemas.UserCreate]):
    def __init__(self):
        super().__init__(model=usr_models.User)

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[usr_models.User]:
        return await self.get_by_attribute(db, attribute="username", value=username)

    async def get_by_email(self, db: AsyncSession, *, email: str) -> Optional[usr_models.User]:
        return await self.get_by_attribute(db, attribute="email", value=email)

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.UserCreate, commit: bool = True) -> usr_models.User:
        """
        사용자명/이메일 중복을 확인하고, 비밀번호를 해싱하여 사용자를 생성합니다.
        """
        if await self.get_by_username(db, username=obj_in.username):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this username already exists")
        if obj_in.email and await self.get_by_email(db, email=obj_in.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User with this email already exists")

        user_data = obj_in.model_dump(exclude={"password"})
        user_data["password_hash"] = get_password_hash(obj_in.password)
        return await super().create(db, obj_in=user_data, commit=commit)

    async def authenticate(self, db: AsyncSession, *, username: str, password: str) -> Optional[usr_models.User]:
        """사용자명과 비밀번호가 일치하면 사용자를, 아니면 None을 반환합니다."""
        user = await self.get_by_username(db, username=username)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user


user = CRUDUser()
