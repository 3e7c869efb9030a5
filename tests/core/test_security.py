"""Tests for authentication and token utilities."""

from datetime import timedelta
import jwt
import pytest
from sqlmodel import Session

from app.core.config import get_settings
from app.core.security import (
    authenticate_admin,
    authenticate_user,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.models.enums import UserType

PASSWORD = "secret_password"


class TestAuthenticateUser:
    """Test profile authentication logic."""

    def test_email_is_case_insensitive(self, session: Session, profile_factory):
        profile = profile_factory(
            UserType.BUSINESS_PARTNER, "owner@shop.pl", password=PASSWORD
        )

        authenticated = authenticate_user(session, "  OWNER@Shop.pl", PASSWORD)

        assert authenticated is not None
        assert authenticated.id_user == profile.id_user

    def test_wrong_password(self, session: Session, profile_factory):
        profile_factory(UserType.VOLUNTEER, "ola@example.com", password=PASSWORD)
        assert authenticate_user(session, "ola@example.com", "wrong_password") is None

    def test_unknown_email(self, session: Session):
        assert authenticate_user(session, "ghost@example.com", PASSWORD) is None

    def test_profile_without_password(self, session: Session, volunteer):
        assert authenticate_user(session, volunteer.email, "") is None
        assert authenticate_user(session, volunteer.email, PASSWORD) is None


class TestAuthenticateAdmin:
    def test_success(self, session: Session, admin):
        assert authenticate_admin(session, "testadmin", "adminpassword123") == admin

    def test_failure(self, session: Session, admin):
        assert authenticate_admin(session, "testadmin", "wrong") is None
        assert authenticate_admin(session, "nobody", "adminpassword123") is None


class TestTokens:
    def test_access_token_claims(self):
        token = create_access_token(data={"sub": "ola@example.com"})

        payload = decode_token(token)

        assert payload["sub"] == "ola@example.com"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_refresh_token_type(self):
        token = create_refresh_token(data={"sub": "ola@example.com"})
        assert decode_token(token)["type"] == "refresh"

    def test_expired_token(self):
        token = create_access_token(
            data={"sub": "ola@example.com"}, expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token)

    def test_foreign_signature(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "ola@example.com", "type": "access"},
            "another-secret-key-of-sufficient-length",
            algorithm=settings.ALGORITHM,
        )

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token)
