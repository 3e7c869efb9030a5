"""Back-office administrators. They are separate from user profiles and only use /internal/admin."""

from sqlmodel import SQLModel, Field


class AdminBase(SQLModel):
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, index=True, max_length=50)


class Admin(AdminBase, table=True):
    __tablename__ = "admins"

    id_admin: int | None = Field(default=None, primary_key=True)
    hashed_password: str


class AdminCreate(AdminBase):
    password: str = Field(min_length=8)


class AdminPublic(AdminBase):
    id_admin: int
