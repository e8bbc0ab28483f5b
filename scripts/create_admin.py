# flake8: noqa
# scripts/create_admin.py

import asyncio
from typing import Optional

import typer
from sqlmodel.ext.asyncio.session import AsyncSession

from onboard.core.database import get_async_session_context, create_db_and_tables
from onboard.core.logging import configure_logging
from onboard.domains.usr import crud as usr_crud
from onboard.domains.usr import schemas as usr_schemas
from onboard.domains.usr.models import UserRole

cli = typer.Typer()


async def create_admin_user(db: AsyncSession, user_in: usr_schemas.UserCreate) -> bool:
    """
    승인 권한(ADMIN)을 가진 사용자를 생성합니다. 이미 존재하면 False를 반환합니다.
    """
    if user_in.email and await usr_crud.user.get_by_email(db, email=user_in.email):
        typer.echo(f"오류: 이미 존재하는 이메일입니다: {user_in.email}")
        return False

    if await usr_crud.user.get_by_username(db, username=user_in.username):
        typer.echo(f"오류: 이미 존재하는 사용자명입니다: {user_in.username}")
        return False

    await usr_crud.user.create(db, obj_in=user_in, commit=False)
    typer.echo(f"관리자 계정이 생성되었습니다: {user_in.username}")
    return True


@cli.command()
def main(
    username: str = typer.Option(
        ..., '--username', '-u',
        prompt="관리자 사용자명(ID)을 입력하세요",
        help="로그인 시 사용할 사용자명(ID)입니다."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="관리자 비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="관리자 계정의 비밀번호입니다. (최소 8자 이상)"
    ),
    email: Optional[str] = typer.Option(None, '--email', '-e', help="관리자 이메일 주소입니다."),
    full_name: str = typer.Option("Admin", '--name', '-n', help="관리자의 이름입니다."),
    create_tables: bool = typer.Option(False, '--create-tables', help="계정 생성 전에 스키마/테이블을 생성합니다."),
):
    """
    온보딩 승인을 처리할 관리자(ADMIN) 계정을 생성합니다.
    """
    if len(password) < 8:
        typer.echo("오류: 비밀번호는 최소 8자 이상이어야 합니다.")
        raise typer.Abort()

    configure_logging()
    user_in = usr_schemas.UserCreate(
        username=username,
        email=email,
        password=password,
        full_name=full_name,
        role=UserRole.ADMIN,
    )

    async def run_creation() -> bool:
        if create_tables:
            await create_db_and_tables()
        async with get_async_session_context() as db:
            return await create_admin_user(db=db, user_in=user_in)

    if not asyncio.run(run_creation()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()
