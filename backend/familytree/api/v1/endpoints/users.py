"""Account settings endpoints for the signed-in owner."""

from fastapi import Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api import deps
from familytree.api.context import ApiContext
from familytree.api.deps import Inject
from familytree.api.router import TrailingSlashRouter
from familytree.api.session_cookie import clear_session_cookie
from familytree.domains.users.protocols import UserServiceProtocol

router = TrailingSlashRouter()


@router.get("/me", response_model=schemas.Account)
async def read_account(
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.require_owner),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.Account:
    """Get the signed-in owner's account."""
    return await user_service.get_account(db, ctx=ctx)


@router.patch("/me", response_model=schemas.Account)
async def update_account(
    account_in: schemas.AccountUpdate,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.require_owner),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.Account:
    """Rename the account. The tree-owner profile follows."""
    return await user_service.update_account(db, account_in=account_in, ctx=ctx)


@router.patch("/me/password")
async def change_password(
    password_in: schemas.PasswordChange,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.require_owner),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> dict[str, bool]:
    """Change the password after checking the current one."""
    await user_service.change_password(db, password_in=password_in, ctx=ctx)
    return {"success": True}


@router.delete("/me", response_model=schemas.AccountDeleteResult)
async def delete_account(
    delete_in: schemas.AccountDelete,
    response: Response,
    db: AsyncSession = Depends(deps.get_db),
    ctx: ApiContext = Depends(deps.require_owner),
    user_service: UserServiceProtocol = Inject(UserServiceProtocol),
) -> schemas.AccountDeleteResult:
    """Delete the account and every tree it owns, then end the session."""
    result = await user_service.delete_account(db, delete_in=delete_in, ctx=ctx)
    clear_session_cookie(response)
    return result
