"""Family member service: adding, editing and removing people in a tree."""

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from familytree import schemas
from familytree.api.context import ApiContext
from familytree.core.config import settings
from familytree.core.datetime_utils import today
from familytree.core.messages import message
from familytree.core.shared_models import ChangeAction, EntityType, MemberRelationship
from familytree.db.unit_of_work import UnitOfWork
from familytree.domains.access.exceptions import ActionForbiddenError
from familytree.domains.change_logs.protocols import ChangeLoggerProtocol
from familytree.domains.change_logs.snapshots import (
    family_member_snapshot,
    spouse_relationship_snapshot,
)
from familytree.domains.life_events.protocols import SpouseRelationshipRepositoryProtocol
from familytree.domains.members.exceptions import (
    FamilyMemberNotFoundError,
    InvalidMemberDataError,
    ProfilePictureNotFoundError,
    RootMemberDeletionError,
)
from familytree.domains.members.protocols import (
    FamilyMemberRepositoryProtocol,
    FamilyMemberServiceProtocol,
)
from familytree.models.family_member import FamilyMember
from familytree.models.family_tree import FamilyTree

ROOT_GENERATION = "1"
DEFAULT_GENERATION = "2"


def next_generation(generation: Optional[str]) -> str:
    """Generation of a child of a member in ``generation``."""
    if generation is None:
        return DEFAULT_GENERATION
    if not generation.isdigit():
        raise InvalidMemberDataError(f"Cannot derive a generation from '{generation}'")
    return str(int(generation) + 1)


class FamilyMemberService(FamilyMemberServiceProtocol):
    """Domain service for family members."""

    def __init__(
        self,
        member_repo: FamilyMemberRepositoryProtocol,
        spouse_repo: SpouseRelationshipRepositoryProtocol,
        change_logger: ChangeLoggerProtocol,
    ) -> None:
        """Initialize with injected dependencies."""
        self._member_repo = member_repo
        self._spouse_repo = spouse_repo
        self._change_logger = change_logger

    # -- reads ---------------------------------------------------------------

    async def list_for_tree(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.FamilyMemberSummary]:
        """Members of a tree ordered by name."""
        members = await self._member_repo.list_for_tree(db, tree.id)
        return [schemas.FamilyMemberSummary.model_validate(m) for m in members]

    async def list_details_for_tree(
        self, db: AsyncSession, *, tree: FamilyTree
    ) -> List[schemas.FamilyMember]:
        """Members of a tree with occupations and places of origin."""
        members = await self._member_repo.list_for_tree(db, tree.id)
        return [schemas.FamilyMember.model_validate(m) for m in members]

    async def get(self, db: AsyncSession, *, member: FamilyMember) -> schemas.FamilyMember:
        """Full member record."""
        return schemas.FamilyMember.model_validate(member)

    # -- writes --------------------------------------------------------------

    async def create(
        self,
        db: AsyncSession,
        *,
        tree: FamilyTree,
        member_in: schemas.FamilyMemberCreate,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Add a member, deriving generation and links from the related member.

        A ``parent`` relationship makes the related member the new member's
        parent, one generation up. A ``spouse`` relationship puts both in the
        same generation and records the marriage.
        """
        self._check_birthday(member_in.birthday)
        related = None
        if member_in.related_member_id is not None:
            related = await self._member_repo.get_in_tree(db, tree.id, member_in.related_member_id)
            if related is None:
                raise FamilyMemberNotFoundError(member_in.related_member_id)
        if member_in.relationship_date and member_in.relationship_date > today():
            raise InvalidMemberDataError("Relationship date cannot be in the future")

        is_first = await self._member_repo.count_for_tree(db, tree.id) == 0
        obj_in = {
            "family_tree_id": tree.id,
            "full_name": member_in.full_name.strip(),
            "gender": member_in.gender.value if member_in.gender else None,
            "birthday": member_in.birthday,
            "address": member_in.address,
            "is_root_person": is_first,
            "generation": ROOT_GENERATION if is_first else DEFAULT_GENERATION,
        }
        if member_in.relationship == MemberRelationship.PARENT:
            obj_in["generation"] = next_generation(related.generation)
            obj_in["parent_id"] = related.id
            obj_in["relationship_established_date"] = member_in.relationship_date
        elif member_in.relationship == MemberRelationship.SPOUSE:
            obj_in["generation"] = related.generation or DEFAULT_GENERATION

        spouse_relationship = None
        async with UnitOfWork(db):
            member = await self._member_repo.create(
                db,
                obj_in=obj_in,
                occupations=[o.model_dump() for o in member_in.occupations],
                places_of_origin=[p.model_dump() for p in member_in.places_of_origin],
            )
            if member_in.relationship == MemberRelationship.SPOUSE:
                first, second = sorted([member, related], key=lambda m: m.id)
                spouse_relationship = await self._spouse_repo.create(
                    db,
                    obj_in={
                        "family_member1_id": first.id,
                        "family_member2_id": second.id,
                        "family_member1": first,
                        "family_member2": second,
                        "marriage_date": member_in.relationship_date,
                    },
                )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_MEMBER,
            entity_id=member.id,
            action=ChangeAction.CREATE,
            family_tree_id=tree.id,
            new_values=family_member_snapshot(member),
        )
        if spouse_relationship is not None:
            await self._change_logger.record(
                db,
                ctx,
                entity_type=EntityType.SPOUSE_RELATIONSHIP,
                entity_id=spouse_relationship.id,
                action=ChangeAction.CREATE,
                family_tree_id=tree.id,
                new_values=spouse_relationship_snapshot(spouse_relationship),
            )
        ctx.logger.info(f"Added member {member.id} to family tree {tree.id}")
        return schemas.FamilyMember.model_validate(member)

    async def update(
        self,
        db: AsyncSession,
        *,
        member: FamilyMember,
        member_in: schemas.FamilyMemberUpdate,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Edit a member profile.

        Guests may edit their own profile fields but not the member's place in
        the tree.
        """
        if ctx.is_guest and member_in.structural_changes():
            raise ActionForbiddenError(message("forbidden"))

        changes = member_in.model_dump(
            exclude_unset=True, exclude={"occupations", "places_of_origin"}
        )
        if "gender" in changes and changes["gender"] is not None:
            changes["gender"] = changes["gender"].value
        if "is_root_person" in changes and changes["is_root_person"] is None:
            del changes["is_root_person"]
        if "birthday" in changes:
            self._check_birthday(changes["birthday"])
        if changes.get("parent_id") is not None:
            await self._check_parent(db, member, changes["parent_id"])

        old_values = family_member_snapshot(member)
        async with UnitOfWork(db):
            member = await self._member_repo.update(
                db,
                db_obj=member,
                obj_in=changes,
                occupations=(
                    [o.model_dump() for o in member_in.occupations]
                    if member_in.occupations is not None
                    else None
                ),
                places_of_origin=(
                    [p.model_dump() for p in member_in.places_of_origin]
                    if member_in.places_of_origin is not None
                    else None
                ),
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_MEMBER,
            entity_id=member.id,
            action=ChangeAction.UPDATE,
            family_tree_id=member.family_tree_id,
            old_values=old_values,
            new_values=family_member_snapshot(member),
        )
        return schemas.FamilyMember.model_validate(member)

    async def delete(
        self, db: AsyncSession, *, member: FamilyMember, ctx: ApiContext
    ) -> schemas.FamilyMember:
        """Delete a member other than the root person."""
        if member.is_root_person:
            raise RootMemberDeletionError(member.id)

        result = schemas.FamilyMember.model_validate(member)
        old_values = family_member_snapshot(member)
        async with UnitOfWork(db):
            await self._member_repo.remove(db, db_obj=member)

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_MEMBER,
            entity_id=result.id,
            action=ChangeAction.DELETE,
            family_tree_id=result.family_tree_id,
            old_values=old_values,
        )
        ctx.logger.info(f"Deleted member {result.id}")
        return result

    # -- profile picture -----------------------------------------------------

    async def get_profile_picture(
        self, db: AsyncSession, *, member: FamilyMember
    ) -> tuple[bytes, str]:
        """Picture bytes and content type."""
        picture = await self._member_repo.get_profile_picture(db, member.id)
        if picture is None:
            raise ProfilePictureNotFoundError(member.id)
        return picture

    async def set_profile_picture(
        self,
        db: AsyncSession,
        *,
        member: FamilyMember,
        data: bytes,
        content_type: str,
        ctx: ApiContext,
    ) -> schemas.FamilyMember:
        """Replace a member's picture."""
        if not data:
            raise InvalidMemberDataError("Profile picture is empty")
        if len(data) > settings.MAX_PROFILE_PICTURE_BYTES:
            raise InvalidMemberDataError("Profile picture is too large")
        if not content_type.startswith("image/"):
            raise InvalidMemberDataError("Profile picture must be an image")

        had_picture = member.profile_picture_content_type is not None
        async with UnitOfWork(db):
            member = await self._member_repo.set_profile_picture(
                db, db_obj=member, data=data, content_type=content_type
            )

        await self._change_logger.record(
            db,
            ctx,
            entity_type=EntityType.FAMILY_MEMBER,
            entity_id=member.id,
            action=ChangeAction.UPDATE,
            family_tree_id=member.family_tree_id,
            old_values={"has_profile_picture": had_picture},
            new_values={"has_profile_picture": True},
        )
        return schemas.FamilyMember.model_validate(member)

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _check_birthday(birthday: Optional[date]) -> None:
        if birthday is not None and birthday > today():
            raise InvalidMemberDataError("Birthday cannot be in the future")

    async def _check_parent(self, db: AsyncSession, member: FamilyMember, parent_id: int) -> None:
        """The parent must be another member of the same tree and not a descendant."""
        if parent_id == member.id:
            raise InvalidMemberDataError("A member cannot be their own parent")
        ancestor = await self._member_repo.get_in_tree(db, member.family_tree_id, parent_id)
        if ancestor is None:
            raise FamilyMemberNotFoundError(parent_id)
        seen = {member.id}
        while ancestor is not None and ancestor.parent_id is not None:
            if ancestor.parent_id in seen:
                raise InvalidMemberDataError("Parent link would create a cycle")
            seen.add(ancestor.id)
            ancestor = await self._member_repo.get(db, ancestor.parent_id)
