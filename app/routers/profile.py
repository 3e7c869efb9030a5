from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_user
from app.models.user import (
    UserProfile,
    UserProfileCreate,
    UserProfilePublic,
    UserProfileUpdate,
    ProfileOverview,
)
from app.models.activity import UserActivityPublic
from app.models.enums import UserType
from app.exceptions import ValidationError
from app.services import profile as profile_service
from app.services import activity as activity_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post("/", response_model=UserProfilePublic, status_code=201)
def create_volunteer_profile(
    profile_in: UserProfileCreate,
    session: Annotated[Session, Depends(get_session)],
) -> UserProfile:
    """
    Sign up as a volunteer.

    Business partners and care facilities sign up through `/registrations`, which also
    collects their company details and documents.

    ### What Gets Created:
    - A volunteer profile in verification, with read-only access and no points

    Raises:
        `409 AlreadyExistsError`: If the e-mail is already used.
        `422 ValidationError`: If the account type is not `volunteer`, a field is blank or the
            password is shorter than 8 characters.
    """
    if profile_in.user_type != UserType.VOLUNTEER:
        raise ValidationError(
            "Organisations register through /registrations", field="user_type"
        )
    profile = profile_service.create_profile(session, profile_in)
    session.commit()
    session.refresh(profile)
    return profile


@router.get("/me", response_model=UserProfilePublic)
def read_my_profile(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    return current_user


@router.patch("/me", response_model=UserProfilePublic)
def update_my_profile(
    profile_update: UserProfileUpdate,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """
    Update the authenticated user's profile.

    Only the fields included in the request body change. E-mail, account type, verification
    and points cannot be changed here.

    ### Updatable Fields:
    - full_name, location, bio, avatar_url
    - skills, interests (lists of strings; blank items are dropped)
    """
    user_id = ensure_id(current_user.id_user, "UserProfile")
    updated = profile_service.update_profile(session, user_id, profile_update)
    session.commit()
    session.refresh(updated)
    return updated


@router.get("/me/overview", response_model=ProfileOverview)
def read_my_overview(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> ProfileOverview:
    """
    Retrieve everything the profile page shows.

    Returns:
        `ProfileOverview`: The profile, whether it is read-only, its verification label, and the
            user's activities, participated projects and favorites, each newest first.
    """
    return profile_service.get_profile_overview(session, current_user)


@router.get("/me/activities", response_model=list[UserActivityPublic])
def read_my_activities(
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> list[UserActivityPublic]:
    user_id = ensure_id(current_user.id_user, "UserProfile")
    return activity_service.to_public_list(
        activity_service.get_user_activities(session, user_id)
    )


@router.get("/{user_id}", response_model=UserProfilePublic)
def read_profile(
    user_id: int,
    session: Annotated[Session, Depends(get_session)],
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """
    Retrieve a public profile by ID.

    Raises:
        `401 Unauthorized`: If no valid authentication token is provided.
        `404 NotFoundError`: If no profile exists with the given ID.
    """
    return profile_service.get_profile_or_raise(session, user_id)
