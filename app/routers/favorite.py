from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_user
from app.models.user import UserProfile
from app.models.favorite import FavoritePublic, FavoriteState
from app.models.enums import FavoriteItemType
from app.services import favorite as favorite_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/", response_model=list[FavoritePublic])
def read_favorites(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> list[FavoritePublic]:
    """
    Retrieve the authenticated user's saved urgent needs and events.

    Returns:
        `list[FavoritePublic]`: Favorites newest first, with the item's title and location.
    """
    user_id = ensure_id(current_user.id_user, "UserProfile")
    return favorite_service.get_favorites(session, user_id)


@router.get("/{item_type}/{item_id}", response_model=FavoriteState)
def read_favorite_state(
    item_type: FavoriteItemType,
    item_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> FavoriteState:
    user_id = ensure_id(current_user.id_user, "UserProfile")
    return FavoriteState(
        item_id=item_id,
        item_type=item_type,
        is_favorite=favorite_service.is_favorite(session, user_id, item_type, item_id),
    )


@router.post("/{item_type}/{item_id}", status_code=201)
def add_favorite(
    item_type: FavoriteItemType,
    item_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> None:
    """
    Save an urgent need or an event to the user's favorites.

    Raises:
        `404 NotFoundError`: If the item does not exist.
        `409 AlreadyExistsError`: If the item is already a favorite.
    """
    user_id = ensure_id(current_user.id_user, "UserProfile")
    favorite_service.add_favorite(session, user_id, item_type, item_id)
    session.commit()


@router.delete("/{item_type}/{item_id}", status_code=204)
def remove_favorite(
    item_type: FavoriteItemType,
    item_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> None:
    """
    Remove an item from the user's favorites.

    Raises:
        `404 NotFoundError`: If the item is not a favorite.
    """
    user_id = ensure_id(current_user.id_user, "UserProfile")
    favorite_service.remove_favorite(session, user_id, item_type, item_id)
    session.commit()


@router.post("/{item_type}/{item_id}/toggle", response_model=FavoriteState)
def toggle_favorite(
    item_type: FavoriteItemType,
    item_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> FavoriteState:
    """Add the item if it is not a favorite yet, remove it otherwise; returns the new state."""
    user_id = ensure_id(current_user.id_user, "UserProfile")
    state = favorite_service.toggle_favorite(session, user_id, item_type, item_id)
    session.commit()
    return state
