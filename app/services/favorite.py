"""Favorite service: urgent needs and events a user saved for later."""

from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError

from app.models.favorite import Favorite, FavoritePublic, FavoriteState
from app.models.opportunity import Opportunity, Event
from app.models.enums import FavoriteItemType
from app.exceptions import NotFoundError, AlreadyExistsError

# Table holding the items of each favorite type
ITEM_MODELS: dict[FavoriteItemType, type[Opportunity] | type[Event]] = {
    FavoriteItemType.URGENT_NEED: Opportunity,
    FavoriteItemType.EVENT: Event,
}


def _get_item(session: Session, item_type: FavoriteItemType, item_id: int):
    return session.get(ITEM_MODELS[item_type], item_id)


def _get_favorite(
    session: Session, user_id: int, item_type: FavoriteItemType, item_id: int
) -> Favorite | None:
    return session.exec(
        select(Favorite).where(
            Favorite.id_user == user_id,
            Favorite.item_id == item_id,
            Favorite.item_type == item_type,
        )
    ).first()


def is_favorite(
    session: Session, user_id: int, item_type: FavoriteItemType, item_id: int
) -> bool:
    """Tell whether the user saved this item."""
    return _get_favorite(session, user_id, item_type, item_id) is not None


def add_favorite(
    session: Session, user_id: int, item_type: FavoriteItemType, item_id: int
) -> Favorite:
    """
    Save an urgent need or an event to the user's favorites.

    Raises:
        NotFoundError: If the item does not exist.
        AlreadyExistsError: If the item is already a favorite.
    """
    if _get_item(session, item_type, item_id) is None:
        raise NotFoundError(ITEM_MODELS[item_type].__name__, item_id)

    if is_favorite(session, user_id, item_type, item_id):
        raise AlreadyExistsError("Favorite", item_type.value, item_id)

    favorite = Favorite(id_user=user_id, item_id=item_id, item_type=item_type)
    session.add(favorite)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        # Rare race where another request inserted the same favorite
        raise AlreadyExistsError("Favorite", item_type.value, item_id)
    session.refresh(favorite)
    return favorite


def remove_favorite(
    session: Session, user_id: int, item_type: FavoriteItemType, item_id: int
) -> None:
    """
    Remove an item from the user's favorites.

    Raises:
        NotFoundError: If the item is not a favorite of this user.
    """
    favorite = _get_favorite(session, user_id, item_type, item_id)
    if not favorite:
        raise NotFoundError("Favorite", item_id)
    session.delete(favorite)
    session.flush()


def toggle_favorite(
    session: Session, user_id: int, item_type: FavoriteItemType, item_id: int
) -> FavoriteState:
    """
    Flip the favorite state of an item and return the new state.

    Toggling twice leaves the user's favorites as they were.
    """
    if is_favorite(session, user_id, item_type, item_id):
        remove_favorite(session, user_id, item_type, item_id)
        now_favorite = False
    else:
        add_favorite(session, user_id, item_type, item_id)
        now_favorite = True
    return FavoriteState(item_id=item_id, item_type=item_type, is_favorite=now_favorite)


def get_favorites(session: Session, user_id: int) -> list[FavoritePublic]:
    """
    List a user's favorites, newest first, with the title and location of each item.

    Items deleted since they were saved are still listed, without title or location.
    """
    favorites = session.exec(
        select(Favorite)
        .where(Favorite.id_user == user_id)
        .order_by(
            Favorite.created_at.desc(),  # type: ignore[attr-defined]
            Favorite.id_favorite.desc(),  # type: ignore[union-attr]
        )
    ).all()

    results = []
    for favorite in favorites:
        item = _get_item(session, favorite.item_type, favorite.item_id)
        results.append(
            FavoritePublic(
                id_favorite=favorite.id_favorite,  # type: ignore[arg-type]
                item_id=favorite.item_id,
                item_type=favorite.item_type,
                item_title=item.title if item else None,
                item_location=item.location if item else None,
                created_at=favorite.created_at,
            )
        )
    return results
