"""Business partner router: team management and the partner side of the relation lifecycle."""

from typing import Annotated, Literal
from anyio import to_thread

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_partner, get_current_full_access_partner
from app.models.user import UserProfile, UserProfilePublic
from app.models.activity import UserActivityCreate, UserActivityPublic
from app.models.enums import RelationStatus
from app.models.relation import (
    RelationWithVolunteer,
    RelationNotesUpdate,
    VolunteerOnBehalfCreate,
    TeamSummary,
)
from app.services import relation as relation_service
from app.services import activity as activity_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/partners", tags=["partners"])


def _relation_response(session: Session, relation_id: int) -> RelationWithVolunteer:
    relation = relation_service.get_relation(session, relation_id)
    assert relation is not None
    return relation_service.to_relation_with_volunteer(relation)


@router.get("/me/team", response_model=list[RelationWithVolunteer])
def read_team(
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_partner)],
    status_filter: Annotated[
        Literal["all", "active", "invited"],
        Query(alias="status", description="Which team members to list."),
    ] = "all",
    search: Annotated[
        str | None,
        Query(description="Case-insensitive match on the volunteer's name or e-mail."),
    ] = None,
) -> list[RelationWithVolunteer]:
    """
    Retrieve the authenticated partner's team.

    The team is made of active members and volunteers with an outstanding invitation,
    newest first. Released volunteers and pending join requests are not part of it.

    ### Filters:
    - **status**: `all` (default), `active` or `invited`
    - **search**: text matched against the volunteer's name or e-mail

    Raises:
        `401 Unauthorized`: If no valid authentication token is provided.
        `403 InsufficientPermissionsError`: If the account is not a business partner.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    return relation_service.get_partner_team(
        session,
        partner_id,
        status_filter=None if status_filter == "all" else RelationStatus(status_filter),
        search=search,
    )


@router.get("/me/team/summary", response_model=TeamSummary)
def read_team_summary(
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_partner)],
) -> TeamSummary:
    """Head counts of the partner's team and the points its members earned."""
    partner_id = ensure_id(partner.id_user, "UserProfile")
    return relation_service.get_team_summary(session, partner_id)


@router.get("/me/requests", response_model=list[RelationWithVolunteer])
def read_pending_requests(
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_partner)],
) -> list[RelationWithVolunteer]:
    """
    Retrieve join requests awaiting the partner's decision.

    Returns:
        `list[RelationWithVolunteer]`: Pending requests sent by volunteers, newest first.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    return relation_service.get_pending_requests(session, partner_id)


@router.get("/me/available-volunteers", response_model=list[UserProfilePublic])
def read_available_volunteers(
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_partner)],
    search: Annotated[str | None, Query()] = None,
) -> list[UserProfile]:
    """
    Retrieve volunteers the partner can still invite.

    Volunteers who already have a relation with the partner are left out, whatever its
    status: active, invited, pending or released.

    Args:
        `search`: Optional text matched against the volunteer's name or e-mail.

    Returns:
        `list[UserProfilePublic]`: Volunteer profiles ordered by name.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    return relation_service.get_available_volunteers(session, partner_id, search=search)


@router.post(
    "/me/invitations/{volunteer_id}",
    response_model=RelationWithVolunteer,
    status_code=201,
)
def invite_volunteer(
    volunteer_id: int,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> RelationWithVolunteer:
    """
    Invite a volunteer to join the partner's team.

    The relation starts as `invited`; it becomes `active` once the volunteer accepts.

    ### Authorization:
    - **Business partner with full access**: accounts still in verification are read-only

    Args:
        `volunteer_id`: The volunteer to invite.

    Returns:
        `RelationWithVolunteer`: The new invitation.

    Raises:
        `403 InsufficientPermissionsError`: If the partner account is read-only.
        `404 NotFoundError`: If the volunteer does not exist.
        `409 AlreadyExistsError`: If the volunteer is already related to the partner.
        `422 ValidationError`: If the profile is not a volunteer.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation = relation_service.invite_volunteer(session, partner_id, volunteer_id)
    relation_id = ensure_id(relation.id_relation, "Relation")
    session.commit()
    return _relation_response(session, relation_id)


@router.post("/me/volunteers", response_model=RelationWithVolunteer, status_code=201)
async def register_volunteer(
    volunteer_in: VolunteerOnBehalfCreate,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> RelationWithVolunteer:
    """
    Register a volunteer who has no account and add them to the team straight away.

    The volunteer profile is created verified, with full access and without a password, so
    it cannot be used to log in. The relation is created `active`.

    ### Input:
    - **full_name**, **email**, **location**: required, surrounding whitespace is ignored
    - **skills**, **interests**: comma separated, e.g. `"first aid, cooking"`
    - **bio**: free text

    Raises:
        `403 InsufficientPermissionsError`: If the partner account is read-only.
        `409 AlreadyExistsError`: If the e-mail is already used.
        `422 ValidationError`: If a required field is blank.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation = relation_service.register_volunteer_for_partner(
        session, partner_id, volunteer_in
    )
    relation_id = ensure_id(relation.id_relation, "Relation")
    await to_thread.run_sync(session.commit)
    return _relation_response(session, relation_id)


@router.post("/me/relations/{relation_id}/accept", response_model=RelationWithVolunteer)
def accept_request(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> RelationWithVolunteer:
    """
    Accept a volunteer's pending join request.

    Raises:
        `403 InsufficientPermissionsError`: If the relation belongs to another partner.
        `404 NotFoundError`: If the relation does not exist.
        `422 ValidationError`: If the relation is not pending.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation_service.accept_request(session, partner_id, relation_id)
    session.commit()
    return _relation_response(session, relation_id)


@router.post("/me/relations/{relation_id}/reject", status_code=204)
def reject_request(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> None:
    """
    Reject a volunteer's pending join request; the request is deleted.

    Raises:
        `403 InsufficientPermissionsError`: If the relation belongs to another partner.
        `404 NotFoundError`: If the relation does not exist.
        `422 ValidationError`: If the relation is not pending.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation_service.reject_request(session, partner_id, relation_id)
    session.commit()


@router.post("/me/relations/{relation_id}/release", response_model=RelationWithVolunteer)
def release_volunteer(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> RelationWithVolunteer:
    """
    Release an active member from the team.

    The relation is kept as `released`, so the volunteer cannot be invited again.

    Raises:
        `403 InsufficientPermissionsError`: If the relation belongs to another partner.
        `404 NotFoundError`: If the relation does not exist.
        `422 ValidationError`: If the volunteer is not an active member.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation_service.release_volunteer(session, partner_id, relation_id)
    session.commit()
    return _relation_response(session, relation_id)


@router.patch("/me/relations/{relation_id}/notes", response_model=RelationWithVolunteer)
def update_relation_notes(
    relation_id: int,
    notes_in: RelationNotesUpdate,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> RelationWithVolunteer:
    """Replace the partner's private notes about a team member; blank notes clear them."""
    partner_id = ensure_id(partner.id_user, "UserProfile")
    relation_service.update_notes(session, partner_id, relation_id, notes_in.notes)
    session.commit()
    return _relation_response(session, relation_id)


@router.get(
    "/me/team/{volunteer_id}/activities", response_model=list[UserActivityPublic]
)
def read_member_activities(
    volunteer_id: int,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_partner)],
) -> list[UserActivityPublic]:
    """
    Retrieve the latest activities of a team member.

    Raises:
        `403 InsufficientPermissionsError`: If the volunteer is not active or invited in the team.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    return activity_service.to_public_list(
        relation_service.get_member_activities(session, partner_id, volunteer_id)
    )


@router.post(
    "/me/team/{volunteer_id}/activities",
    response_model=UserActivityPublic,
    status_code=201,
)
def record_member_activity(
    volunteer_id: int,
    activity_in: UserActivityCreate,
    session: Annotated[Session, Depends(get_session)],
    partner: Annotated[UserProfile, Depends(get_current_full_access_partner)],
) -> UserActivityPublic:
    """
    Record an activity for an active team member.

    The points earned are added to the volunteer's total, which also counts towards the
    team summary.

    ### Input:
    - **activity_type**: short label, e.g. `"shift"`
    - **description**: free text
    - **points_earned**: zero or more

    Raises:
        `403 InsufficientPermissionsError`: If the partner account is read-only, or the
            volunteer is not an active member of the team.
        `422 ValidationError`: If the body is invalid.
    """
    partner_id = ensure_id(partner.id_user, "UserProfile")
    activity = relation_service.record_member_activity(
        session, partner_id, volunteer_id, activity_in
    )
    session.commit()
    session.refresh(activity)
    return UserActivityPublic.model_validate(activity)
