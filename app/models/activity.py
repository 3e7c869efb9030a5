from datetime import datetime
from sqlmodel import SQLModel, Field


class UserActivityBase(SQLModel):
    activity_type: str = Field(max_length=50)
    description: str = Field(default="", max_length=500)
    points_earned: int = Field(default=0, ge=0)


class UserActivity(UserActivityBase, table=True):
    __tablename__ = "user_activities"

    id_activity: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    created_at: datetime = Field(default_factory=datetime.now)


class UserActivityCreate(UserActivityBase):
    pass


class UserActivityPublic(UserActivityBase):
    id_activity: int
    id_user: int
    created_at: datetime
