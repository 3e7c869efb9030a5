"""Volunteer <-> business partner relation model."""

from datetime import datetime
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from .enums import RelationStatus, InvitationType
from .user import UserProfile, UserProfilePublic


class VolunteerPartnerRelationBase(SQLModel):
    id_volunteer: int = Field(foreign_key="user_profiles.id_user", index=True)
    id_partner: int = Field(foreign_key="user_profiles.id_user", index=True)
    status: RelationStatus = Field(index=True)
    invitation_type: InvitationType
    joined_at: datetime | None = None
    released_at: datetime | None = None
    notes: str | None = Field(default=None, max_length=2000)


class VolunteerPartnerRelation(VolunteerPartnerRelationBase, table=True):
    __tablename__ = "volunteer_business_partner_relations"
    __table_args__ = (
        UniqueConstraint("id_volunteer", "id_partner", name="uq_volunteer_partner"),
    )

    id_relation: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.now)
    volunteer: UserProfile = Relationship(
        sa_relationship_kwargs={
            "foreign_keys": "[VolunteerPartnerRelation.id_volunteer]"
        },
    )
    partner: UserProfile = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[VolunteerPartnerRelation.id_partner]"},
    )


class RelationPublic(VolunteerPartnerRelationBase):
    id_relation: int
    created_at: datetime


class RelationWithVolunteer(RelationPublic):
    """Relation as listed on the partner side."""

    volunteer: UserProfilePublic


class RelationWithPartner(RelationPublic):
    """Relation as listed on the volunteer side."""

    partner: UserProfilePublic


class RelationNotesUpdate(SQLModel):
    notes: str | None = Field(default=None, max_length=2000)


class VolunteerOnBehalfCreate(SQLModel):
    """Identity fields a partner fills in to register a volunteer without a login.

    Skills and interests are comma separated, as typed in a single text input.
    """

    full_name: str
    email: str
    location: str
    skills: str = ""
    interests: str = ""
    bio: str = ""


class TeamSummary(SQLModel):
    total_members: int
    active_members: int
    invited_members: int
    pending_requests: int
    total_points: int
