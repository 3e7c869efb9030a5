from datetime import datetime
from sqlmodel import SQLModel, Field
from .enums import ProcessingStatus


class IdeaSubmissionBase(SQLModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    category: str | None = Field(default=None, max_length=50)


class IdeaSubmission(IdeaSubmissionBase, table=True):
    __tablename__ = "idea_submissions"

    id_idea: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    status: ProcessingStatus = Field(default=ProcessingStatus.PENDING)
    created_at: datetime = Field(default_factory=datetime.now)


class IdeaSubmissionCreate(IdeaSubmissionBase):
    pass


class IdeaSubmissionPublic(IdeaSubmissionBase):
    id_idea: int
    id_user: int
    status: ProcessingStatus
    created_at: datetime
