"""Care facility / NGO bookkeeping tables used by the statistics panel."""

from datetime import datetime
from sqlmodel import SQLModel, Field
from .enums import ApplicationStatus, MembershipStatus


class OrganisationApplication(SQLModel, table=True):
    __tablename__ = "organisation_applications"

    id_application: int | None = Field(default=None, primary_key=True)
    id_organisation: int = Field(foreign_key="user_profiles.id_user", index=True)
    applicant_name: str = Field(default="", max_length=120)
    status: ApplicationStatus = Field(default=ApplicationStatus.IN_APPLICATION)
    created_at: datetime = Field(default_factory=datetime.now)


class OrganisationVolunteer(SQLModel, table=True):
    __tablename__ = "organisation_volunteers"

    id_membership: int | None = Field(default=None, primary_key=True)
    id_organisation: int = Field(foreign_key="user_profiles.id_user", index=True)
    id_volunteer: int = Field(foreign_key="user_profiles.id_user")
    status: MembershipStatus = Field(default=MembershipStatus.ACTIVE)
    created_at: datetime = Field(default_factory=datetime.now)


class OrganisationActivityBase(SQLModel):
    activity_type: str = Field(max_length=50)
    description: str = Field(default="", max_length=500)


class OrganisationActivity(OrganisationActivityBase, table=True):
    __tablename__ = "organisation_activities_log"

    id_activity: int | None = Field(default=None, primary_key=True)
    id_organisation: int = Field(foreign_key="user_profiles.id_user", index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class OrganisationActivityCreate(OrganisationActivityBase):
    pass


class OrganisationActivityPublic(OrganisationActivityBase):
    id_activity: int
    id_organisation: int
    created_at: datetime


class OrganisationStatistics(SQLModel):
    total_applications: int = 0
    in_application: int = 0
    in_progress: int = 0
    completed: int = 0
    total_volunteers: int = 0
    active_volunteers: int = 0
    active_volunteer_ratio: float = 0.0
