"""Shared fixtures for service tests."""

from datetime import datetime
import pytest
from sqlmodel import Session

from app.models.enums import RelationStatus, InvitationType
from app.models.relation import VolunteerPartnerRelation


# Session and profile fixtures are inherited from root conftest.py


@pytest.fixture(name="relation_factory")
def relation_factory_fixture(session: Session):
    """Return a callable storing a relation in the given status."""

    def create(
        volunteer,
        partner,
        status: RelationStatus,
        invitation_type: InvitationType | None = None,
    ) -> VolunteerPartnerRelation:
        if invitation_type is None:
            invitation_type = (
                InvitationType.VOLUNTEER_REQUEST
                if status == RelationStatus.PENDING
                else InvitationType.PARTNER_INVITE
            )
        relation = VolunteerPartnerRelation(
            id_volunteer=volunteer.id_user,
            id_partner=partner.id_user,
            status=status,
            invitation_type=invitation_type,
            joined_at=datetime.now() if status == RelationStatus.ACTIVE else None,
        )
        session.add(relation)
        session.commit()
        session.refresh(relation)
        return relation

    return create


@pytest.fixture(name="pending_relation")
def pending_relation_fixture(relation_factory, volunteer, partner):
    return relation_factory(volunteer, partner, RelationStatus.PENDING)


@pytest.fixture(name="invited_relation")
def invited_relation_fixture(relation_factory, volunteer, partner):
    return relation_factory(volunteer, partner, RelationStatus.INVITED)


@pytest.fixture(name="active_relation")
def active_relation_fixture(relation_factory, volunteer, partner):
    return relation_factory(volunteer, partner, RelationStatus.ACTIVE)
