import pytest
from fastapi import HTTPException
from sqlmodel import Session

from app.core.dependencies import (
    get_current_admin,
    get_current_full_access_partner,
    get_current_organisation,
    get_current_partner,
    get_current_user,
    get_current_volunteer,
)
from app.core.security import create_access_token, create_refresh_token
from app.exceptions import InsufficientPermissionsError
from app.models.enums import AccessLevel, UserType, VerificationStatus


class TestGetCurrentUser:
    def test_valid_token(self, session: Session, volunteer):
        token = create_access_token(data={"sub": volunteer.email})

        assert get_current_user(token, session).id_user == volunteer.id_user

    def test_refresh_token_rejected(self, session: Session, volunteer):
        token = create_refresh_token(data={"sub": volunteer.email})

        with pytest.raises(HTTPException) as exc_info:
            get_current_user(token, session)
        assert exc_info.value.status_code == 401

    def test_admin_token_rejected(self, session: Session, volunteer):
        token = create_access_token(data={"sub": volunteer.email, "mode": "admin"})

        with pytest.raises(HTTPException):
            get_current_user(token, session)

    def test_unknown_subject(self, session: Session):
        token = create_access_token(data={"sub": "ghost@example.com"})

        with pytest.raises(HTTPException):
            get_current_user(token, session)

    def test_malformed_token(self, session: Session):
        with pytest.raises(HTTPException):
            get_current_user("not.a.jwt", session)


class TestUserTypeGuards:
    def test_matching_types_pass(self, volunteer, partner, organisation):
        assert get_current_volunteer(volunteer) is volunteer
        assert get_current_partner(partner) is partner
        assert get_current_organisation(organisation) is organisation

    @pytest.mark.parametrize(
        "guard", [get_current_partner, get_current_organisation]
    )
    def test_volunteer_is_refused(self, guard, volunteer):
        with pytest.raises(InsufficientPermissionsError):
            guard(volunteer)


class TestFullAccessPartner:
    def test_verified_partner(self, partner):
        assert get_current_full_access_partner(partner) is partner

    def test_partner_in_verification(self, profile_factory):
        pending = profile_factory(
            UserType.BUSINESS_PARTNER, "pending@example.com", verified=False
        )

        with pytest.raises(InsufficientPermissionsError):
            get_current_full_access_partner(pending)

    def test_in_verification_wins_over_full_access(self, session: Session, partner):
        partner.verification_status = VerificationStatus.IN_VERIFICATION
        partner.access_level = AccessLevel.FULL_ACCESS

        with pytest.raises(InsufficientPermissionsError):
            get_current_full_access_partner(partner)


class TestGetCurrentAdmin:
    def test_admin_token(self, session: Session, admin):
        token = create_access_token(data={"sub": admin.username, "mode": "admin"})
        assert get_current_admin(token, session).id_admin == admin.id_admin

    def test_token_without_admin_mode(self, session: Session, admin):
        token = create_access_token(data={"sub": admin.username})

        with pytest.raises(HTTPException) as exc_info:
            get_current_admin(token, session)
        assert exc_info.value.status_code == 401
