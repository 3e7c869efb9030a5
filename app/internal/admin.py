from datetime import timedelta
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from app.database.database import get_session
from app.core.security import authenticate_admin, create_access_token
from app.core.password import get_password_hash
from app.core.dependencies import get_current_admin
from app.core.config import get_settings, Settings
from app.exceptions import AlreadyExistsError, InvalidCredentialsError
from app.models.admin import Admin, AdminCreate, AdminPublic
from app.models.enums import UserType, VerificationStatus, ProcessingStatus
from app.models.registration import (
    BusinessPartnerRegistration,
    BusinessPartnerRegistrationPublic,
    CareFacilityRegistrationPublic,
)
from app.models.token import Token
from app.models.user import UserProfile, UserProfilePublic, VerificationUpdate
from app.services import profile as profile_service
from app.services import registration as registration_service
from app.utils.logger import logger

router = APIRouter(
    prefix="/internal/admin", tags=["Internal Admin"], include_in_schema=False
)

RegistrationKind = Literal["business-partners", "care-facilities"]
REGISTRATION_KINDS: dict[str, UserType] = {
    "business-partners": UserType.BUSINESS_PARTNER,
    "care-facilities": UserType.CARE_FACILITY_NGO,
}


@router.post("/login", response_model=Token)
def login_admin(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    admin = authenticate_admin(session, form_data.username, form_data.password)
    if not admin:
        raise InvalidCredentialsError("Incorrect admin username or password")

    # Admin sessions get no refresh token
    access_token = create_access_token(
        data={"sub": admin.username, "mode": "admin"},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(access_token=access_token, token_type="bearer")


@router.post("/", response_model=AdminPublic, dependencies=[Depends(get_current_admin)])
def create_new_admin(
    *,
    session: Session = Depends(get_session),
    admin_in: AdminCreate,
):
    if session.exec(select(Admin).where(Admin.username == admin_in.username)).first():
        raise AlreadyExistsError("Admin", "username", admin_in.username)
    if session.exec(select(Admin).where(Admin.email == admin_in.email)).first():
        raise AlreadyExistsError("Admin", "email", admin_in.email)

    db_admin = Admin.model_validate(
        admin_in, update={"hashed_password": get_password_hash(admin_in.password)}
    )
    session.add(db_admin)
    session.commit()
    session.refresh(db_admin)
    logger.info(f"Admin '{db_admin.username}' created")
    return db_admin


@router.get(
    "/profiles",
    response_model=list[UserProfilePublic],
    dependencies=[Depends(get_current_admin)],
)
def read_profiles(
    session: Annotated[Session, Depends(get_session)],
    user_type: Annotated[UserType | None, Query()] = None,
    verification_status: Annotated[VerificationStatus | None, Query()] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 100,
) -> list[UserProfile]:
    """List profiles, e.g. `?verification_status=in_verification` for the review queue."""
    return profile_service.get_profiles(
        session,
        user_type=user_type,
        verification_status=verification_status,
        offset=offset,
        limit=limit,
    )


@router.patch(
    "/profiles/{user_id}/verification",
    response_model=UserProfilePublic,
    dependencies=[Depends(get_current_admin)],
)
def update_verification(
    user_id: int,
    verification_in: VerificationUpdate,
    session: Annotated[Session, Depends(get_session)],
) -> UserProfile:
    """
    Set a profile's verification status.

    `verified` grants full access; any other status makes the account read-only.
    """
    profile = profile_service.set_verification_status(
        session, user_id, verification_in.verification_status
    )
    session.commit()
    session.refresh(profile)
    return profile


def _registration_public(
    session: Session, registration
) -> BusinessPartnerRegistrationPublic | CareFacilityRegistrationPublic:
    if isinstance(registration, BusinessPartnerRegistration):
        return BusinessPartnerRegistrationPublic.model_validate(registration)
    return registration_service.to_care_facility_public(session, registration)


@router.get(
    "/registrations/{kind}",
    response_model=list[BusinessPartnerRegistrationPublic]
    | list[CareFacilityRegistrationPublic],
    dependencies=[Depends(get_current_admin)],
)
def read_registrations(
    kind: RegistrationKind,
    session: Annotated[Session, Depends(get_session)],
    registration_status: Annotated[
        ProcessingStatus | None, Query(alias="status")
    ] = None,
):
    """List registrations of one kind, oldest first, optionally filtered by status."""
    registrations = registration_service.get_registrations(
        session, REGISTRATION_KINDS[kind], status=registration_status
    )
    return [_registration_public(session, r) for r in registrations]


@router.post(
    "/registrations/{kind}/{registration_id}/approve",
    response_model=BusinessPartnerRegistrationPublic | CareFacilityRegistrationPublic,
    dependencies=[Depends(get_current_admin)],
)
def approve_registration(
    kind: RegistrationKind,
    registration_id: int,
    session: Annotated[Session, Depends(get_session)],
):
    """Approve a pending registration; the account becomes verified with full access."""
    registration = registration_service.approve_registration(
        session, REGISTRATION_KINDS[kind], registration_id
    )
    session.commit()
    session.refresh(registration)
    return _registration_public(session, registration)


@router.post(
    "/registrations/{kind}/{registration_id}/reject",
    response_model=BusinessPartnerRegistrationPublic | CareFacilityRegistrationPublic,
    dependencies=[Depends(get_current_admin)],
)
def reject_registration(
    kind: RegistrationKind,
    registration_id: int,
    session: Annotated[Session, Depends(get_session)],
):
    """Reject a pending registration; the account is marked rejected and stays read-only."""
    registration = registration_service.reject_registration(
        session, REGISTRATION_KINDS[kind], registration_id
    )
    session.commit()
    session.refresh(registration)
    return _registration_public(session, registration)
