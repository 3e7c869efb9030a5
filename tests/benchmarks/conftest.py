"""Shared fixtures for benchmark tests."""

import uuid
import pytest
from sqlmodel import Session, create_engine, SQLModel
from sqlmodel.pool import StaticPool

from app.models.user import UserProfile
from app.models.enums import UserType, VerificationStatus, AccessLevel


@pytest.fixture(name="session")
def session_fixture():
    """
    Create and yield a SQLModel Session bound to a fresh in-memory SQLite database.

    Yields:
        Session: A SQLModel Session connected to the created in-memory SQLite database; the session is closed when the fixture tears down.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="bench_profile_factory")
def bench_profile_factory_fixture(session: Session):
    """
    Create a factory that adds verified profiles with unique e-mails.

    No password is hashed, so the factory stays out of the measured cost.

    Returns:
        create_callable (Callable[[UserType], UserProfile]): Returns a new committed profile of
        the requested type on each call.
    """

    def create(user_type: UserType = UserType.VOLUNTEER) -> UserProfile:
        unique = uuid.uuid4().hex[:8]
        profile = UserProfile(
            full_name=f"Bench {user_type.value} {unique}",
            email=f"bench_{unique}@example.com",
            location="Warsaw",
            user_type=user_type,
            verification_status=VerificationStatus.VERIFIED,
            access_level=AccessLevel.FULL_ACCESS,
        )
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    return create
