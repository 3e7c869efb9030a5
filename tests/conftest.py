import os

# Settings are read when app.database.database is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only-min-32-chars")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.config import Settings  # noqa: E402
from app.core.password import get_password_hash  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.database.database import get_session  # noqa: E402
from app.main import app  # noqa: E402
from app.models.admin import Admin  # noqa: E402
from app.models.enums import UserType, VerificationStatus, AccessLevel  # noqa: E402
from app.models.user import UserProfile  # noqa: E402

TEST_PASSWORD = "Password123"


@pytest.fixture(scope="function")
def test_settings():
    """Provide test settings with mock values."""
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key-for-testing-only-min-32-chars",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=30,
        REFRESH_TOKEN_EXPIRE_DAYS=7,
    )


@pytest.fixture(name="session")
def session_fixture():
    """
    Yield a SQLModel Session bound to a fresh in-memory SQLite database.

    StaticPool keeps the single connection alive so every session sees the same data.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """TestClient whose requests share the test session."""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="profile_factory")
def profile_factory_fixture(session: Session):
    """
    Return a callable creating committed profiles.

    Profiles are verified with full access unless told otherwise. A password is only hashed
    when one is passed, which keeps the fixture fast.
    """

    def create(
        user_type: UserType,
        email: str,
        *,
        full_name: str | None = None,
        location: str = "Warsaw",
        verified: bool = True,
        password: str | None = None,
        points: int = 0,
    ) -> UserProfile:
        profile = UserProfile(
            full_name=full_name or email.split("@")[0].replace(".", " ").title(),
            email=email,
            location=location,
            user_type=user_type,
            verification_status=(
                VerificationStatus.VERIFIED
                if verified
                else VerificationStatus.IN_VERIFICATION
            ),
            access_level=AccessLevel.FULL_ACCESS if verified else AccessLevel.READ_ONLY,
            points=points,
            hashed_password=get_password_hash(password) if password else None,
        )
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    return create


@pytest.fixture(name="volunteer")
def volunteer_fixture(profile_factory) -> UserProfile:
    return profile_factory(
        UserType.VOLUNTEER, "anna.volunteer@example.com", full_name="Anna Nowak"
    )


@pytest.fixture(name="partner")
def partner_fixture(profile_factory) -> UserProfile:
    return profile_factory(
        UserType.BUSINESS_PARTNER, "shop@example.com", full_name="Corner Shop"
    )


@pytest.fixture(name="other_partner")
def other_partner_fixture(profile_factory) -> UserProfile:
    return profile_factory(
        UserType.BUSINESS_PARTNER,
        "bakery@example.com",
        full_name="Village Bakery",
        location="Krakow",
    )


@pytest.fixture(name="organisation")
def organisation_fixture(profile_factory) -> UserProfile:
    return profile_factory(
        UserType.CARE_FACILITY_NGO, "care@example.com", full_name="Sunny Care Home"
    )


@pytest.fixture(name="auth_headers")
def auth_headers_fixture():
    """Return a callable building a bearer header for a profile."""

    def build(profile: UserProfile) -> dict[str, str]:
        token = create_access_token(data={"sub": profile.email})
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture(name="admin")
def admin_fixture(session: Session) -> Admin:
    admin = Admin(
        first_name="Test",
        last_name="Admin",
        email="admin@example.com",
        username="testadmin",
        hashed_password=get_password_hash("adminpassword123"),
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    return admin


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(admin: Admin) -> dict[str, str]:
    token = create_access_token(data={"sub": admin.username, "mode": "admin"})
    return {"Authorization": f"Bearer {token}"}
