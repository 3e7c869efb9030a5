"""Volunteer <-> business partner relation lifecycle.

A relation links one volunteer to one business partner:

    none --request--> pending --accept--> active --release--> released
    none --invite---> invited --accept--> active

A pending request leaves the table when the partner rejects it or the volunteer
cancels it; an invitation leaves it when the volunteer declines. There is at most
one relation per (volunteer, partner) pair, whatever its status, so a volunteer
who was ever released cannot be invited again by the same partner.
"""

from datetime import datetime

from sqlalchemy.orm import selectinload
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, func, or_, col

from app.models.relation import (
    VolunteerPartnerRelation,
    RelationWithVolunteer,
    RelationWithPartner,
    VolunteerOnBehalfCreate,
    TeamSummary,
)
from app.models.user import UserProfile, UserProfilePublic
from app.models.activity import UserActivity, UserActivityCreate
from app.models.enums import (
    RelationStatus,
    InvitationType,
    UserType,
    VerificationStatus,
    AccessLevel,
)
from app.exceptions import (
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    InvalidStateError,
    InsufficientPermissionsError,
)
from app.core.config import get_settings
from app.services import profile as profile_service
from app.services import activity as activity_service
from app.utils.logger import logger
from app.utils.validation import ensure_id, require_text, split_comma_separated

# Lifecycle actions performed on an existing relation:
# action -> (statuses it may start from, status it leads to; None deletes the row)
TRANSITIONS: dict[str, tuple[frozenset[RelationStatus], RelationStatus | None]] = {
    "accept": (frozenset({RelationStatus.PENDING}), RelationStatus.ACTIVE),
    "reject": (frozenset({RelationStatus.PENDING}), None),
    "release": (frozenset({RelationStatus.ACTIVE}), RelationStatus.RELEASED),
    "cancel": (frozenset({RelationStatus.PENDING}), None),
    "accept_invitation": (frozenset({RelationStatus.INVITED}), RelationStatus.ACTIVE),
    "decline_invitation": (frozenset({RelationStatus.INVITED}), None),
}

TEAM_STATUSES = (RelationStatus.ACTIVE, RelationStatus.INVITED)
VOLUNTEER_VISIBLE_STATUSES = (
    RelationStatus.ACTIVE,
    RelationStatus.PENDING,
    RelationStatus.INVITED,
)


# Lookups


def get_relation(session: Session, relation_id: int) -> VolunteerPartnerRelation | None:
    """Retrieve a relation by ID with both profiles loaded, or None."""
    statement = (
        select(VolunteerPartnerRelation)
        .where(VolunteerPartnerRelation.id_relation == relation_id)
        .options(
            selectinload(VolunteerPartnerRelation.volunteer),  # type: ignore[arg-type]
            selectinload(VolunteerPartnerRelation.partner),  # type: ignore[arg-type]
        )
    )
    return session.exec(statement).first()


def get_relation_between(
    session: Session, volunteer_id: int, partner_id: int
) -> VolunteerPartnerRelation | None:
    """Retrieve the relation linking a volunteer and a partner, whatever its status."""
    return session.exec(
        select(VolunteerPartnerRelation).where(
            VolunteerPartnerRelation.id_volunteer == volunteer_id,
            VolunteerPartnerRelation.id_partner == partner_id,
        )
    ).first()


def _get_owned_relation(
    session: Session,
    relation_id: int,
    *,
    partner_id: int | None = None,
    volunteer_id: int | None = None,
) -> VolunteerPartnerRelation:
    relation = get_relation(session, relation_id)
    if not relation:
        raise NotFoundError("Relation", relation_id)
    if partner_id is not None and relation.id_partner != partner_id:
        raise InsufficientPermissionsError("This relation belongs to another partner")
    if volunteer_id is not None and relation.id_volunteer != volunteer_id:
        raise InsufficientPermissionsError(
            "This relation belongs to another volunteer"
        )
    return relation


def _apply_transition(
    session: Session, relation: VolunteerPartnerRelation, action: str
) -> VolunteerPartnerRelation | None:
    """
    Run a lifecycle action on a relation.

    Timestamps follow the target status: `joined_at` is written when the relation becomes
    active, `released_at` when it is released, never otherwise.

    Returns:
        The updated relation, or None when the action deletes it.

    Raises:
        InvalidStateError: If the relation's current status does not allow the action.
    """
    allowed_from, target = TRANSITIONS[action]
    if relation.status not in allowed_from:
        raise InvalidStateError("Relation", action.replace("_", " "), relation.status.value)

    if target is None:
        session.delete(relation)
        session.flush()
        logger.info(f"Relation {relation.id_relation} removed ({action})")
        return None

    relation.status = target
    if target == RelationStatus.ACTIVE:
        relation.joined_at = datetime.now()
    elif target == RelationStatus.RELEASED:
        relation.released_at = datetime.now()

    session.add(relation)
    session.flush()
    session.refresh(relation)
    logger.info(f"Relation {relation.id_relation} is now {target.value} ({action})")
    return relation


def _insert_relation(
    session: Session, relation: VolunteerPartnerRelation
) -> VolunteerPartnerRelation:
    existing = get_relation_between(session, relation.id_volunteer, relation.id_partner)
    if existing:
        raise AlreadyExistsError(
            "Relation", "volunteer_partner", f"{relation.id_volunteer}-{relation.id_partner}"
        )

    session.add(relation)
    try:
        session.flush()
    except IntegrityError:
        session.rollback()
        # Concurrent double submission hit the unique constraint
        raise AlreadyExistsError(
            "Relation", "volunteer_partner", f"{relation.id_volunteer}-{relation.id_partner}"
        )
    session.refresh(relation)
    return relation


# Partner side


def invite_volunteer(
    session: Session, partner_id: int, volunteer_id: int
) -> VolunteerPartnerRelation:
    """
    Invite a volunteer to a partner's team.

    Parameters:
        session: Database session.
        partner_id: Inviting business partner.
        volunteer_id: Invited volunteer.

    Returns:
        VolunteerPartnerRelation: New relation with status `invited` and type `partner_invite`.

    Raises:
        NotFoundError: If the volunteer does not exist.
        ValidationError: If the profile is not a volunteer.
        AlreadyExistsError: If the two are already related, whatever the status.
    """
    profile_service.get_profile_or_raise(session, volunteer_id, UserType.VOLUNTEER)
    relation = _insert_relation(
        session,
        VolunteerPartnerRelation(
            id_volunteer=volunteer_id,
            id_partner=partner_id,
            status=RelationStatus.INVITED,
            invitation_type=InvitationType.PARTNER_INVITE,
        ),
    )
    logger.info(f"Partner {partner_id} invited volunteer {volunteer_id}")
    return relation


def accept_request(
    session: Session, partner_id: int, relation_id: int
) -> VolunteerPartnerRelation:
    """
    Accept a volunteer's pending join request; the volunteer becomes an active member.

    Raises:
        NotFoundError: If the relation does not exist.
        InsufficientPermissionsError: If it belongs to another partner.
        InvalidStateError: If the relation is not pending.
    """
    relation = _get_owned_relation(session, relation_id, partner_id=partner_id)
    updated = _apply_transition(session, relation, "accept")
    assert updated is not None
    return updated


def reject_request(session: Session, partner_id: int, relation_id: int) -> None:
    """
    Reject a pending join request. The relation is deleted, not kept as rejected.

    Raises:
        NotFoundError: If the relation does not exist.
        InsufficientPermissionsError: If it belongs to another partner.
        InvalidStateError: If the relation is not pending.
    """
    relation = _get_owned_relation(session, relation_id, partner_id=partner_id)
    _apply_transition(session, relation, "reject")


def release_volunteer(
    session: Session, partner_id: int, relation_id: int
) -> VolunteerPartnerRelation:
    """
    Release an active team member.

    Raises:
        NotFoundError: If the relation does not exist.
        InsufficientPermissionsError: If it belongs to another partner.
        InvalidStateError: If the relation is not active.
    """
    relation = _get_owned_relation(session, relation_id, partner_id=partner_id)
    updated = _apply_transition(session, relation, "release")
    assert updated is not None
    return updated


def update_notes(
    session: Session, partner_id: int, relation_id: int, notes: str | None
) -> VolunteerPartnerRelation:
    """Store the partner's private notes about a team member; blank notes are cleared."""
    relation = _get_owned_relation(session, relation_id, partner_id=partner_id)
    relation.notes = notes.strip() if notes and notes.strip() else None
    session.add(relation)
    session.flush()
    session.refresh(relation)
    return relation


def register_volunteer_for_partner(
    session: Session, partner_id: int, volunteer_in: VolunteerOnBehalfCreate
) -> VolunteerPartnerRelation:
    """
    Create a volunteer profile on a volunteer's behalf and add it straight to the team.

    The identity fields are checked before anything is written. The new profile is verified,
    has full access and no password (it cannot log in); the relation is created active.

    Parameters:
        session: Database session.
        partner_id: Registering business partner.
        volunteer_in: Name, e-mail and location (required), comma separated skills and
            interests, and a bio.

    Returns:
        VolunteerPartnerRelation: The active relation, with the new volunteer loaded.

    Raises:
        ValidationError: If name, e-mail or location is blank.
        AlreadyExistsError: If the e-mail is already used by another profile.
    """
    full_name = require_text(volunteer_in.full_name, "full_name", "Name")
    email = require_text(volunteer_in.email, "email", "Email").lower()
    location = require_text(volunteer_in.location, "location", "Location")

    volunteer = profile_service.add_profile(
        session,
        UserProfile(
            full_name=full_name,
            email=email,
            location=location,
            bio=volunteer_in.bio.strip(),
            skills=split_comma_separated(volunteer_in.skills),
            interests=split_comma_separated(volunteer_in.interests),
            points=0,
            user_type=UserType.VOLUNTEER,
            verification_status=VerificationStatus.VERIFIED,
            access_level=AccessLevel.FULL_ACCESS,
        ),
    )
    volunteer_id = ensure_id(volunteer.id_user, "UserProfile")

    relation = _insert_relation(
        session,
        VolunteerPartnerRelation(
            id_volunteer=volunteer_id,
            id_partner=partner_id,
            status=RelationStatus.ACTIVE,
            invitation_type=InvitationType.PARTNER_INVITE,
            joined_at=datetime.now(),
        ),
    )
    logger.info(f"Partner {partner_id} registered volunteer {volunteer_id}")
    return relation


# Volunteer side


def request_to_join(
    session: Session, volunteer_id: int, partner_id: int
) -> VolunteerPartnerRelation:
    """
    Ask to join a business partner's team.

    Returns:
        VolunteerPartnerRelation: New relation with status `pending` and type `volunteer_request`.

    Raises:
        NotFoundError: If the partner does not exist.
        ValidationError: If the profile is not a business partner, or is not
            verified yet (field `verification_status`).
        AlreadyExistsError: If the two are already related, whatever the status.
    """
    partner = profile_service.get_profile_or_raise(
        session, partner_id, UserType.BUSINESS_PARTNER
    )
    if partner.verification_status != VerificationStatus.VERIFIED:
        raise ValidationError(
            "This business partner is not verified yet", field="verification_status"
        )
    relation = _insert_relation(
        session,
        VolunteerPartnerRelation(
            id_volunteer=volunteer_id,
            id_partner=partner_id,
            status=RelationStatus.PENDING,
            invitation_type=InvitationType.VOLUNTEER_REQUEST,
        ),
    )
    logger.info(f"Volunteer {volunteer_id} asked to join partner {partner_id}")
    return relation


def cancel_request(session: Session, volunteer_id: int, relation_id: int) -> None:
    """
    Withdraw the volunteer's own pending join request.

    Raises:
        NotFoundError: If the relation does not exist.
        InsufficientPermissionsError: If it belongs to another volunteer.
        InvalidStateError: If the relation is not pending.
    """
    relation = _get_owned_relation(session, relation_id, volunteer_id=volunteer_id)
    _apply_transition(session, relation, "cancel")


def accept_invitation(
    session: Session, volunteer_id: int, relation_id: int
) -> VolunteerPartnerRelation:
    """Accept a partner's invitation; the volunteer becomes an active member."""
    relation = _get_owned_relation(session, relation_id, volunteer_id=volunteer_id)
    updated = _apply_transition(session, relation, "accept_invitation")
    assert updated is not None
    return updated


def decline_invitation(session: Session, volunteer_id: int, relation_id: int) -> None:
    """Decline a partner's invitation; the relation is deleted."""
    relation = _get_owned_relation(session, relation_id, volunteer_id=volunteer_id)
    _apply_transition(session, relation, "decline_invitation")


# Listings


def _matches(search: str | None, *values: str | None) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    return any(needle in (value or "").lower() for value in values)


def to_relation_with_volunteer(
    relation: VolunteerPartnerRelation,
) -> RelationWithVolunteer:
    return RelationWithVolunteer(
        **relation.model_dump(),
        volunteer=UserProfilePublic.model_validate(relation.volunteer),
    )


def to_relation_with_partner(relation: VolunteerPartnerRelation) -> RelationWithPartner:
    return RelationWithPartner(
        **relation.model_dump(),
        partner=UserProfilePublic.model_validate(relation.partner),
    )


def _partner_relations(
    session: Session, partner_id: int, statuses: tuple[RelationStatus, ...]
) -> list[VolunteerPartnerRelation]:
    statement = (
        select(VolunteerPartnerRelation)
        .where(
            VolunteerPartnerRelation.id_partner == partner_id,
            col(VolunteerPartnerRelation.status).in_(statuses),
        )
        .options(selectinload(VolunteerPartnerRelation.volunteer))  # type: ignore[arg-type]
        .order_by(
            VolunteerPartnerRelation.created_at.desc(),  # type: ignore[attr-defined]
            VolunteerPartnerRelation.id_relation.desc(),  # type: ignore[union-attr]
        )
    )
    return list(session.exec(statement).all())


def get_partner_team(
    session: Session,
    partner_id: int,
    *,
    status_filter: RelationStatus | None = None,
    search: str | None = None,
) -> list[RelationWithVolunteer]:
    """
    List a partner's team: active members and outstanding invitations, newest first.

    Parameters:
        status_filter: Keep only `active` or only `invited` relations; None keeps both.
        search: Case-insensitive text matched against the volunteer's name or e-mail.
    """
    statuses = TEAM_STATUSES
    if status_filter is not None:
        statuses = tuple(s for s in TEAM_STATUSES if s == status_filter)

    return [
        to_relation_with_volunteer(relation)
        for relation in _partner_relations(session, partner_id, statuses)
        if _matches(search, relation.volunteer.full_name, relation.volunteer.email)
    ]


def get_pending_requests(session: Session, partner_id: int) -> list[RelationWithVolunteer]:
    """Join requests awaiting the partner's decision, newest first."""
    return [
        to_relation_with_volunteer(relation)
        for relation in _partner_relations(
            session, partner_id, (RelationStatus.PENDING,)
        )
        if relation.invitation_type == InvitationType.VOLUNTEER_REQUEST
    ]


def _search_clause(search: str | None, *columns):
    needle = (search or "").strip()
    if not needle:
        return None
    # Literal substring match: % and _ in the search text are escaped
    return or_(*(col(column).icontains(needle, autoescape=True) for column in columns))


def get_available_volunteers(
    session: Session, partner_id: int, *, search: str | None = None
) -> list[UserProfile]:
    """
    Volunteers a partner can still invite, ordered by name.

    Every volunteer already related to the partner is left out, whatever the relation's status.

    Parameters:
        search: Case-insensitive text matched against the volunteer's name or e-mail.
    """
    related = select(VolunteerPartnerRelation.id_volunteer).where(
        VolunteerPartnerRelation.id_partner == partner_id
    )
    statement = select(UserProfile).where(
        UserProfile.user_type == UserType.VOLUNTEER,
        col(UserProfile.id_user).not_in(related),
    )
    clause = _search_clause(search, UserProfile.full_name, UserProfile.email)
    if clause is not None:
        statement = statement.where(clause)
    return list(session.exec(statement.order_by(UserProfile.full_name)).all())  # type: ignore[arg-type]


def get_volunteer_partners(
    session: Session, volunteer_id: int
) -> list[RelationWithPartner]:
    """A volunteer's active, pending and invited partner relations, newest first."""
    statement = (
        select(VolunteerPartnerRelation)
        .where(
            VolunteerPartnerRelation.id_volunteer == volunteer_id,
            col(VolunteerPartnerRelation.status).in_(VOLUNTEER_VISIBLE_STATUSES),
        )
        .options(selectinload(VolunteerPartnerRelation.partner))  # type: ignore[arg-type]
        .order_by(
            VolunteerPartnerRelation.created_at.desc(),  # type: ignore[attr-defined]
            VolunteerPartnerRelation.id_relation.desc(),  # type: ignore[union-attr]
        )
    )
    return [to_relation_with_partner(r) for r in session.exec(statement).all()]


def get_available_partners(
    session: Session, volunteer_id: int, *, search: str | None = None
) -> list[UserProfile]:
    """
    Verified business partners a volunteer can still ask to join, ordered by name.

    Parameters:
        search: Case-insensitive text matched against the partner's name or location.
    """
    related = select(VolunteerPartnerRelation.id_partner).where(
        VolunteerPartnerRelation.id_volunteer == volunteer_id
    )
    statement = select(UserProfile).where(
        UserProfile.user_type == UserType.BUSINESS_PARTNER,
        UserProfile.verification_status == VerificationStatus.VERIFIED,
        col(UserProfile.id_user).not_in(related),
    )
    clause = _search_clause(search, UserProfile.full_name, UserProfile.location)
    if clause is not None:
        statement = statement.where(clause)
    return list(session.exec(statement.order_by(UserProfile.full_name)).all())  # type: ignore[arg-type]


def get_team_summary(session: Session, partner_id: int) -> TeamSummary:
    """
    Head counts of a partner's team and the total points its members earned.

    Points are summed over active and invited members.
    """
    rows = session.exec(
        select(VolunteerPartnerRelation.status, func.count())
        .where(VolunteerPartnerRelation.id_partner == partner_id)
        .group_by(VolunteerPartnerRelation.status)
    ).all()
    counts = {status: count for status, count in rows}

    total_points = session.exec(
        select(func.coalesce(func.sum(UserProfile.points), 0))
        .select_from(VolunteerPartnerRelation)
        .join(UserProfile, VolunteerPartnerRelation.id_volunteer == UserProfile.id_user)  # type: ignore[arg-type]
        .where(
            VolunteerPartnerRelation.id_partner == partner_id,
            col(VolunteerPartnerRelation.status).in_(TEAM_STATUSES),
        )
    ).one()

    active = counts.get(RelationStatus.ACTIVE, 0)
    invited = counts.get(RelationStatus.INVITED, 0)
    return TeamSummary(
        total_members=active + invited,
        active_members=active,
        invited_members=invited,
        pending_requests=counts.get(RelationStatus.PENDING, 0),
        total_points=int(total_points),
    )


def get_member_activities(
    session: Session, partner_id: int, volunteer_id: int
) -> list[UserActivity]:
    """
    Recent activities of one of the partner's team members.

    Raises:
        InsufficientPermissionsError: If the volunteer is not active or invited in this team.
    """
    relation = get_relation_between(session, volunteer_id, partner_id)
    if not relation or relation.status not in TEAM_STATUSES:
        raise InsufficientPermissionsError("This volunteer is not part of your team")
    return activity_service.get_user_activities(
        session, volunteer_id, limit=get_settings().RECENT_ACTIVITY_LIMIT
    )


def record_member_activity(
    session: Session, partner_id: int, volunteer_id: int, activity_in: UserActivityCreate
) -> UserActivity:
    """
    Log an activity for an active member of the partner's team and credit its points.

    Invited volunteers have not joined yet, so nothing can be recorded for them.

    Raises:
        InsufficientPermissionsError: If the volunteer is not an active member of this team.
        ValidationError: If `points_earned` is negative.
    """
    relation = get_relation_between(session, volunteer_id, partner_id)
    if not relation or relation.status != RelationStatus.ACTIVE:
        raise InsufficientPermissionsError("This volunteer is not an active team member")
    activity = activity_service.record_activity(session, volunteer_id, activity_in)
    logger.info(
        f"Partner {partner_id} recorded activity {activity.id_activity} "
        f"for volunteer {volunteer_id}"
    )
    return activity
