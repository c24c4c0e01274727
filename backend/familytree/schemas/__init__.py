"""Schemas for the application."""

from .achievement import (
    Achievement,
    AchievementCreate,
    AchievementType,
    AchievementTypeCreate,
    AchievementUpdate,
)
from .change_log import ChangeLog
from .family_member import (
    FamilyMember,
    FamilyMemberCreate,
    FamilyMemberSummary,
    FamilyMemberUpdate,
    MemberRef,
    Occupation,
    OccupationIn,
    PlaceOfOrigin,
    PlaceOfOriginIn,
)
from .family_tree import FamilyTree, FamilyTreeCreate, FamilyTreeUpdate
from .guest_invite import GuestInvite, GuestInviteCreate, GuestInviteIssued
from .health import CheckStatus, DependencyCheck, LivenessResponse, ReadinessResponse
from .life_event import (
    BirthRecord,
    BirthRecordUpdate,
    DivorceCreate,
    MarriageCreate,
    SpouseRelationship,
)
from .passing_record import (
    BuriedPlace,
    BuriedPlaceIn,
    PassingRecord,
    PassingRecordCheck,
    PassingRecordCreate,
    PassingRecordRef,
    PassingRecordUpdate,
)
from .session import GuestInfo, GuestRedeemRequest, GuestRedeemResult, Session
from .user import (
    Account,
    AccountDelete,
    AccountDeleteResult,
    AccountUpdate,
    LoginRequest,
    PasswordChange,
    RegistrationResult,
    User,
    UserCreate,
)
