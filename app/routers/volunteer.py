"""Volunteer router: the volunteer side of the relation lifecycle."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.database.database import get_session
from app.core.dependencies import get_current_volunteer
from app.models.user import UserProfile, UserProfilePublic
from app.models.relation import RelationWithPartner
from app.services import relation as relation_service
from app.utils.validation import ensure_id

router = APIRouter(prefix="/volunteers", tags=["volunteers"])


def _relation_response(session: Session, relation_id: int) -> RelationWithPartner:
    relation = relation_service.get_relation(session, relation_id)
    assert relation is not None
    return relation_service.to_relation_with_partner(relation)


@router.get("/me/partners", response_model=list[RelationWithPartner])
def read_my_partners(
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
) -> list[RelationWithPartner]:
    """
    Retrieve the authenticated volunteer's business partners.

    Lists active memberships, join requests still pending and invitations waiting for an
    answer, newest first. Released relations are not shown.

    ### Authentication Required:
    This endpoint requires a valid authentication token for a volunteer account.

    Returns:
        `list[RelationWithPartner]`: Relations with the partner's public profile embedded.

    Raises:
        `401 Unauthorized`: If no valid authentication token is provided.
        `403 InsufficientPermissionsError`: If the account is not a volunteer.
    """
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    return relation_service.get_volunteer_partners(session, volunteer_id)


@router.get("/me/available-partners", response_model=list[UserProfilePublic])
def read_available_partners(
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
    search: Annotated[
        str | None,
        Query(description="Case-insensitive match on the partner's name or location."),
    ] = None,
) -> list[UserProfile]:
    """
    Retrieve verified business partners the volunteer can still ask to join.

    Partners the volunteer is already related to, in any status, are left out.
    """
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    return relation_service.get_available_partners(session, volunteer_id, search=search)


@router.post(
    "/me/requests/{partner_id}", response_model=RelationWithPartner, status_code=201
)
def request_to_join(
    partner_id: int,
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
) -> RelationWithPartner:
    """
    Ask to join a business partner's team.

    The request stays `pending` until the partner accepts or rejects it.

    Args:
        `partner_id`: The business partner to join.

    Returns:
        `RelationWithPartner`: The new pending request.

    Raises:
        `404 NotFoundError`: If the partner does not exist.
        `409 AlreadyExistsError`: If the volunteer is already related to the partner.
        `422 ValidationError`: If the profile is not a verified business partner.
    """
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    relation = relation_service.request_to_join(session, volunteer_id, partner_id)
    relation_id = ensure_id(relation.id_relation, "Relation")
    session.commit()
    return _relation_response(session, relation_id)


@router.delete("/me/requests/{relation_id}", status_code=204)
def cancel_request(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
) -> None:
    """
    Withdraw a pending join request.

    Raises:
        `403 InsufficientPermissionsError`: If the request belongs to another volunteer.
        `404 NotFoundError`: If the request does not exist.
        `422 ValidationError`: If the request was already answered.
    """
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    relation_service.cancel_request(session, volunteer_id, relation_id)
    session.commit()


@router.post(
    "/me/invitations/{relation_id}/accept", response_model=RelationWithPartner
)
def accept_invitation(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
) -> RelationWithPartner:
    """Accept a partner's invitation and become an active team member."""
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    relation_service.accept_invitation(session, volunteer_id, relation_id)
    session.commit()
    return _relation_response(session, relation_id)


@router.post("/me/invitations/{relation_id}/decline", status_code=204)
def decline_invitation(
    relation_id: int,
    session: Annotated[Session, Depends(get_session)],
    volunteer: Annotated[UserProfile, Depends(get_current_volunteer)],
) -> None:
    """Decline a partner's invitation; the invitation is deleted."""
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")
    relation_service.decline_invitation(session, volunteer_id, relation_id)
    session.commit()
