"""Profile service module: accounts of volunteers, business partners and organisations."""

from sqlmodel import Session, select
from sqlalchemy.exc import IntegrityError

from app.core.config import get_settings
from app.core.password import get_password_hash
from app.models.user import (
    UserProfile,
    UserProfileCreate,
    UserProfilePublic,
    UserProfileUpdate,
    ProfileOverview,
)
from app.models.opportunity import AssignedOpportunity, AssignedOpportunityPublic
from app.models.enums import UserType, VerificationStatus, AccessLevel
from app.exceptions import NotFoundError, AlreadyExistsError, ValidationError
from app.services import activity as activity_service
from app.services import favorite as favorite_service
from app.utils.logger import logger
from app.utils.validation import ensure_id, mask_email, require_text

VERIFICATION_LABELS = {
    VerificationStatus.NOT_VERIFIED: "Not Verified",
    VerificationStatus.IN_VERIFICATION: "In Verification",
    VerificationStatus.VERIFIED: "Verified",
    VerificationStatus.REJECTED: "Rejected",
}


def verification_label(status: VerificationStatus | str | None) -> str:
    """Human readable label of a verification status; unknown values read "Unknown"."""
    try:
        return VERIFICATION_LABELS[VerificationStatus(status)]
    except ValueError:
        return "Unknown"


def is_read_only(profile: UserProfile) -> bool:
    """
    Tell whether a profile is limited to read-only use.

    An account is read-only when its access level says so, or while it is being verified,
    whatever its access level.
    """
    return (
        profile.access_level == AccessLevel.READ_ONLY
        or profile.verification_status == VerificationStatus.IN_VERIFICATION
    )


def validate_password_length(password: str) -> None:
    """Raise ValidationError (field `password`) when shorter than PASSWORD_MIN_LENGTH."""
    min_length = get_settings().PASSWORD_MIN_LENGTH
    if len(password) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters long",
            field="password",
        )


def validate_password(password: str, confirm_password: str) -> None:
    """
    Check a sign-up password against its confirmation and the minimum length.

    Raises:
        ValidationError: On mismatch (field `confirm_password`) or when too short (field `password`).
    """
    if password != confirm_password:
        raise ValidationError("Passwords do not match", field="confirm_password")
    validate_password_length(password)


def add_profile(session: Session, profile: UserProfile) -> UserProfile:
    """
    Persist a new profile, translating a duplicate e-mail into AlreadyExistsError.

    The session is flushed, not committed.
    """
    session.add(profile)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        raise AlreadyExistsError("UserProfile", "email", profile.email)
    session.refresh(profile)
    logger.info(
        f"Created {profile.user_type.value} profile {profile.id_user} "
        f"({mask_email(profile.email)})"
    )
    return profile


def create_profile(session: Session, profile_in: UserProfileCreate) -> UserProfile:
    """
    Sign up a new account with a password.

    Self-registered accounts start in verification with read-only access and no points.

    Raises:
        ValidationError: If name or e-mail is blank, or the password is too short.
        AlreadyExistsError: If the e-mail is already used.
    """
    full_name = require_text(profile_in.full_name, "full_name", "Name")
    email = require_text(profile_in.email, "email", "Email").lower()
    validate_password_length(profile_in.password)

    db_profile = UserProfile.model_validate(
        profile_in,
        update={
            "full_name": full_name,
            "email": email,
            "hashed_password": get_password_hash(profile_in.password),
            "verification_status": VerificationStatus.IN_VERIFICATION,
            "access_level": AccessLevel.READ_ONLY,
            "points": 0,
        },
    )
    return add_profile(session, db_profile)


def get_profile(session: Session, user_id: int) -> UserProfile | None:
    """Retrieve a profile by primary key, or None."""
    return session.get(UserProfile, user_id)


def get_profile_by_email(session: Session, email: str) -> UserProfile | None:
    """
    Retrieve a profile by e-mail address (case-insensitive).

    Returns:
        UserProfile | None: The matching profile, or None.
    """
    statement = select(UserProfile).where(UserProfile.email == email.strip().lower())
    return session.exec(statement).first()


def get_profile_or_raise(
    session: Session, user_id: int, user_type: UserType | None = None
) -> UserProfile:
    """
    Retrieve a profile by ID, optionally requiring a user type.

    Raises:
        NotFoundError: If no profile has this ID.
        ValidationError: If the profile exists but is of another type (field `user_type`).
    """
    profile = get_profile(session, user_id)
    if not profile:
        raise NotFoundError("UserProfile", user_id)
    if user_type is not None and profile.user_type != user_type:
        raise ValidationError(
            f"Profile {user_id} is not a {user_type.value}", field="user_type"
        )
    return profile


def get_profiles(
    session: Session,
    *,
    user_type: UserType | None = None,
    verification_status: VerificationStatus | None = None,
    offset: int = 0,
    limit: int = 100,
) -> list[UserProfile]:
    """
    List profiles ordered by name, optionally filtered by type and verification status.
    """
    statement = select(UserProfile)
    if user_type is not None:
        statement = statement.where(UserProfile.user_type == user_type)
    if verification_status is not None:
        statement = statement.where(
            UserProfile.verification_status == verification_status
        )
    statement = statement.order_by(UserProfile.full_name).offset(offset).limit(limit)  # type: ignore[arg-type]
    return list(session.exec(statement).all())


def update_profile(
    session: Session, user_id: int, profile_update: UserProfileUpdate
) -> UserProfile:
    """
    Apply a partial update to a profile; only the fields that were sent change.

    Raises:
        NotFoundError: If the profile does not exist.
        ValidationError: If the name is set to a blank value.
    """
    db_profile = get_profile_or_raise(session, user_id)
    update_data = profile_update.model_dump(exclude_unset=True)

    if "full_name" in update_data:
        update_data["full_name"] = require_text(
            update_data["full_name"], "full_name", "Name"
        )
    for key in ("skills", "interests"):
        if update_data.get(key) is not None:
            update_data[key] = [item.strip() for item in update_data[key] if item.strip()]

    for key, value in update_data.items():
        if value is None and key in ("location", "bio", "skills", "interests"):
            continue
        setattr(db_profile, key, value)

    session.add(db_profile)
    session.flush()
    session.refresh(db_profile)
    return db_profile


def set_verification_status(
    session: Session, user_id: int, status: VerificationStatus
) -> UserProfile:
    """
    Record the outcome of an account review.

    A verified account gains full access; every other status leaves it read-only.
    """
    db_profile = get_profile_or_raise(session, user_id)
    db_profile.verification_status = status
    db_profile.access_level = (
        AccessLevel.FULL_ACCESS
        if status == VerificationStatus.VERIFIED
        else AccessLevel.READ_ONLY
    )
    session.add(db_profile)
    session.flush()
    session.refresh(db_profile)
    logger.info(f"Profile {user_id} verification set to {status.value}")
    return db_profile


def get_assigned_opportunities(
    session: Session, user_id: int
) -> list[AssignedOpportunity]:
    """Opportunities a user takes part in, newest first."""
    statement = (
        select(AssignedOpportunity)
        .where(AssignedOpportunity.id_user == user_id)
        .order_by(
            AssignedOpportunity.created_at.desc(),  # type: ignore[attr-defined]
            AssignedOpportunity.id_assignment.desc(),  # type: ignore[union-attr]
        )
    )
    return list(session.exec(statement).all())


def get_profile_overview(session: Session, profile: UserProfile) -> ProfileOverview:
    """
    Gather what the profile page displays for a user.

    Activities, participated projects and favorites are all listed newest first; favorites carry
    the title and location of the saved item.
    """
    user_id = ensure_id(profile.id_user, "UserProfile")
    return ProfileOverview(
        profile=UserProfilePublic.model_validate(profile),
        is_read_only=is_read_only(profile),
        verification_label=verification_label(profile.verification_status),
        activities=activity_service.to_public_list(
            activity_service.get_user_activities(session, user_id)
        ),
        assigned_opportunities=[
            AssignedOpportunityPublic.model_validate(assignment)
            for assignment in get_assigned_opportunities(session, user_id)
        ],
        favorites=favorite_service.get_favorites(session, user_id),
    )
