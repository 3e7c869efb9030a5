from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_organisation
from app.models.user import UserProfile
from app.models.organisation import (
    OrganisationStatistics,
    OrganisationActivityCreate,
    OrganisationActivityPublic,
)
from app.services import organisation as organisation_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/organisations", tags=["organisations"])


@router.get("/me/statistics", response_model=OrganisationStatistics)
def read_statistics(
    session: Annotated[Session, Depends(get_session)],
    organisation: Annotated[UserProfile, Depends(get_current_organisation)],
) -> OrganisationStatistics:
    """
    Retrieve the statistics panel of the authenticated care facility / NGO.

    ### Figures:
    - applications in total and per status (`in_application`, `in_progress`, `completed`)
    - volunteers in total, active volunteers and the share of active volunteers

    Raises:
        `403 InsufficientPermissionsError`: If the account is not a care facility / NGO.
    """
    organisation_id = ensure_id(organisation.id_user, "UserProfile")
    return organisation_service.get_statistics(session, organisation_id)


@router.get("/me/activities", response_model=list[OrganisationActivityPublic])
def read_recent_activities(
    session: Annotated[Session, Depends(get_session)],
    organisation: Annotated[UserProfile, Depends(get_current_organisation)],
) -> list[OrganisationActivityPublic]:
    """Latest entries of the organisation's activity log, newest first."""
    organisation_id = ensure_id(organisation.id_user, "UserProfile")
    return [
        OrganisationActivityPublic.model_validate(activity)
        for activity in organisation_service.get_recent_activities(
            session, organisation_id
        )
    ]


@router.post(
    "/me/activities", response_model=OrganisationActivityPublic, status_code=201
)
def log_activity(
    activity_in: OrganisationActivityCreate,
    session: Annotated[Session, Depends(get_session)],
    organisation: Annotated[UserProfile, Depends(get_current_organisation)],
) -> OrganisationActivityPublic:
    organisation_id = ensure_id(organisation.id_user, "UserProfile")
    activity = organisation_service.log_activity(session, organisation_id, activity_in)
    session.commit()
    session.refresh(activity)
    return OrganisationActivityPublic.model_validate(activity)
