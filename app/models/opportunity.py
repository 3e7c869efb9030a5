from datetime import date, datetime
from sqlmodel import SQLModel, Field
from .enums import AssignmentStatus


class Opportunity(SQLModel, table=True):
    """An urgent need published on the dashboard."""

    __tablename__ = "opportunities"

    id_opportunity: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    location: str = Field(default="", max_length=255)
    description: str = Field(default="")
    created_at: datetime = Field(default_factory=datetime.now)


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id_event: int | None = Field(default=None, primary_key=True)
    title: str = Field(max_length=200)
    location: str = Field(default="", max_length=255)
    event_date: date | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class AssignedOpportunityBase(SQLModel):
    opportunity_title: str = Field(max_length=200)
    status: AssignmentStatus = Field(default=AssignmentStatus.ASSIGNED)
    start_date: date | None = None


class AssignedOpportunity(AssignedOpportunityBase, table=True):
    __tablename__ = "assigned_opportunities"

    id_assignment: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class AssignedOpportunityPublic(AssignedOpportunityBase):
    id_assignment: int
    created_at: datetime
