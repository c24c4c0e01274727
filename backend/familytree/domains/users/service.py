"""User service: registration, sign-in and account management."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.logging import logger
from familytree.core.security import hash_password, verify_password
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.family_trees.protocols import FamilyTreeRepositoryProtocol
from familytree.domains.users.exceptions import (
    EmailAlreadyInUseError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from familytree.domains.users.protocols import (
    TreeOwnerRepositoryProtocol,
    UserRepositoryProtocol,
    UserServiceProtocol,
)
from familytree.models.user import User


class UserService(UserServiceProtocol):
    """Domain service for user accounts."""

    def __init__(
        self,
        user_repo: UserRepositoryProtocol,
        tree_owner_repo: TreeOwnerRepositoryProtocol,
        family_tree_repo: FamilyTreeRepositoryProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._user_repo = user_repo
        self._tree_owner_repo = tree_owner_repo
        self._family_tree_repo = family_tree_repo

    async def _current_user(self, db: AsyncSession, ctx: ApiContext) -> User:
        user = await self._user_repo.get(db, ctx.user_id)
        if user is None:
            raise UserNotFoundError(ctx.user_id)
        return user

    @staticmethod
    def _to_account(user: User) -> schemas.Account:
        return schemas.Account(
            id=user.id,
            name=user.full_name,
            email=user.email,
            has_password=bool(user.password_hash),
        )

    async def register(self, db: AsyncSession, *, user_in: schemas.UserCreate) -> schemas.User:
        """Create a user together with their tree owner profile."""
        email = user_in.email.lower()
        if await self._user_repo.get_by_email(db, email):
            raise EmailAlreadyInUseError(email)

        try:
            async with UnitOfWork(db):
                user = await self._user_repo.create(
                    db,
                    obj_in={
                        "full_name": user_in.full_name,
                        "email": email,
                        "password_hash": hash_password(user_in.password),
                    },
                )
                await self._tree_owner_repo.create(
                    db,
                    obj_in={"user_id": user.id, "full_name": user.full_name, "email": email},
                )
        except IntegrityError as e:
            # Lost a race against a concurrent registration with the same email.
            raise EmailAlreadyInUseError(email) from e

        logger.info(f"Registered user {user.id}")
        return schemas.User.model_validate(user)

    async def authenticate(
        self, db: AsyncSession, *, credentials: schemas.LoginRequest
    ) -> schemas.User:
        """Verify email and password."""
        user = await self._user_repo.get_by_email(db, credentials.email)
        if user is None or not verify_password(user.password_hash, credentials.password):
            raise InvalidCredentialsError()
        return schemas.User.model_validate(user)

    async def get_account(self, db: AsyncSession, *, ctx: ApiContext) -> schemas.Account:
        """Account view of the signed-in owner."""
        return self._to_account(await self._current_user(db, ctx))

    async def update_account(
        self, db: AsyncSession, *, account_in: schemas.AccountUpdate, ctx: ApiContext
    ) -> schemas.Account:
        """Rename the user and their owner profile together."""
        user = await self._current_user(db, ctx)
        async with UnitOfWork(db):
            user = await self._user_repo.update(
                db, db_obj=user, obj_in={"full_name": account_in.name}
            )
            owner = await self._tree_owner_repo.get_by_user_id(db, user.id)
            if owner is not None:
                await self._tree_owner_repo.update(
                    db, db_obj=owner, obj_in={"full_name": account_in.name}
                )
        ctx.logger.info("Updated account name")
        return self._to_account(user)

    async def change_password(
        self, db: AsyncSession, *, password_in: schemas.PasswordChange, ctx: ApiContext
    ) -> None:
        """Replace the password after checking the current one."""
        user = await self._current_user(db, ctx)
        if not verify_password(user.password_hash, password_in.current_password):
            raise IncorrectPasswordError()
        async with UnitOfWork(db):
            await self._user_repo.update(
                db,
                db_obj=user,
                obj_in={"password_hash": hash_password(password_in.new_password)},
            )
        ctx.logger.info("Changed password")

    async def delete_account(
        self, db: AsyncSession, *, delete_in: schemas.AccountDelete, ctx: ApiContext
    ) -> schemas.AccountDeleteResult:
        """Delete the user and every tree they own."""
        user = await self._current_user(db, ctx)
        if not verify_password(user.password_hash, delete_in.password):
            raise IncorrectPasswordError("Password is incorrect")

        trees_count = await self._family_tree_repo.count_for_owner(db, user.id)
        async with UnitOfWork(db):
            await self._user_repo.remove(db, db_obj=user)
        ctx.logger.info(f"Deleted account and {trees_count} family tree(s)")
        return schemas.AccountDeleteResult(deleted_trees_count=trees_count)
