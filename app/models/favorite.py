"""Favorite model - a user's saved urgent needs and events."""

from datetime import datetime
from sqlmodel import SQLModel, Field, UniqueConstraint
from .enums import FavoriteItemType


class Favorite(SQLModel, table=True):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("id_user", "item_id", "item_type", name="uq_favorite_item"),
    )

    id_favorite: int | None = Field(default=None, primary_key=True)
    id_user: int = Field(foreign_key="user_profiles.id_user", index=True)
    item_id: int
    item_type: FavoriteItemType
    created_at: datetime = Field(default_factory=datetime.now)


class FavoritePublic(SQLModel):
    id_favorite: int
    item_id: int
    item_type: FavoriteItemType
    item_title: str | None = None
    item_location: str | None = None
    created_at: datetime


class FavoriteState(SQLModel):
    item_id: int
    item_type: FavoriteItemType
    is_favorite: bool
