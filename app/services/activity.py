"""Activity log and points bookkeeping for user profiles."""

from sqlmodel import Session, select

from app.models.activity import UserActivity, UserActivityCreate, UserActivityPublic
from app.models.user import UserProfile
from app.exceptions import NotFoundError, ValidationError
from app.utils.logger import logger


def record_activity(
    session: Session, user_id: int, activity_in: UserActivityCreate
) -> UserActivity:
    """
    Log an activity for a user and credit the points it earned.

    Parameters:
        session: Database session.
        user_id: Profile the activity belongs to.
        activity_in: Activity type, description and points earned (never negative).

    Returns:
        UserActivity: The stored activity.

    Raises:
        NotFoundError: If the profile does not exist.
        ValidationError: If `points_earned` is negative.
    """
    if activity_in.points_earned < 0:
        raise ValidationError("Points earned cannot be negative", field="points_earned")

    profile = session.get(UserProfile, user_id)
    if not profile:
        raise NotFoundError("UserProfile", user_id)

    activity = UserActivity.model_validate(activity_in, update={"id_user": user_id})
    profile.points += activity_in.points_earned

    session.add(activity)
    session.add(profile)
    session.flush()
    session.refresh(activity)
    logger.debug(
        f"Activity '{activity.activity_type}' recorded for profile {user_id} "
        f"(+{activity.points_earned} points)"
    )
    return activity


def get_user_activities(
    session: Session, user_id: int, *, limit: int | None = None
) -> list[UserActivity]:
    """Activities of a user, newest first, optionally capped to `limit` rows."""
    statement = (
        select(UserActivity)
        .where(UserActivity.id_user == user_id)
        .order_by(
            UserActivity.created_at.desc(),  # type: ignore[attr-defined]
            UserActivity.id_activity.desc(),  # type: ignore[union-attr]
        )
    )
    if limit is not None:
        statement = statement.limit(limit)
    return list(session.exec(statement).all())


def to_public_list(activities: list[UserActivity]) -> list[UserActivityPublic]:
    return [UserActivityPublic.model_validate(a) for a in activities]
