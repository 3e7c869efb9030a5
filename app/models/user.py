from datetime import datetime
from sqlalchemy import JSON
from sqlmodel import SQLModel, Field
from .enums import UserType, VerificationStatus, AccessLevel
from .activity import UserActivityPublic
from .favorite import FavoritePublic
from .opportunity import AssignedOpportunityPublic


class UserProfileBase(SQLModel):
    full_name: str = Field(index=True, max_length=120)
    email: str = Field(unique=True, index=True, max_length=255)
    location: str = Field(default="", max_length=255)
    bio: str = Field(default="", max_length=2000)
    skills: list[str] = Field(default_factory=list, sa_type=JSON)
    interests: list[str] = Field(default_factory=list, sa_type=JSON)
    avatar_url: str | None = Field(default=None)


class UserProfile(UserProfileBase, table=True):
    __tablename__ = "user_profiles"

    id_user: int | None = Field(default=None, primary_key=True)
    user_type: UserType = Field(index=True)
    verification_status: VerificationStatus = Field(
        default=VerificationStatus.NOT_VERIFIED
    )
    access_level: AccessLevel = Field(default=AccessLevel.READ_ONLY)
    points: int = Field(default=0, ge=0)
    # None for volunteers registered by a partner: they have no login
    hashed_password: str | None = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)


class UserProfileCreate(UserProfileBase):
    user_type: UserType
    password: str


class UserProfilePublic(UserProfileBase):
    id_user: int
    user_type: UserType
    verification_status: VerificationStatus
    access_level: AccessLevel
    points: int
    created_at: datetime


class UserProfileUpdate(SQLModel):
    full_name: str | None = Field(default=None, max_length=120)
    location: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=2000)
    skills: list[str] | None = None
    interests: list[str] | None = None
    avatar_url: str | None = None


class VerificationUpdate(SQLModel):
    verification_status: VerificationStatus


class ProfileOverview(SQLModel):
    """Everything the profile page shows for the signed-in user."""

    profile: UserProfilePublic
    is_read_only: bool
    verification_label: str
    activities: list[UserActivityPublic] = []
    assigned_opportunities: list[AssignedOpportunityPublic] = []
    favorites: list[FavoritePublic] = []
