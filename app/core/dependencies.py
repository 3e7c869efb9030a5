from typing import Annotated
from jwt.exceptions import InvalidTokenError
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session, select

from app.core.security import decode_token
from app.database.database import get_session
from app.exceptions import InsufficientPermissionsError
from app.models.user import UserProfile
from app.models.token import TokenData
from app.models.admin import Admin
from app.models.enums import UserType
from app.services import profile as profile_service


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Session = Depends(get_session),
) -> UserProfile:
    """
    Resolve the authenticated profile from an access JWT.

    Returns:
        user (UserProfile): The profile whose email matches the token's subject.

    Raises:
        HTTPException: 401 Unauthorized if the token is invalid, not an access token, missing the subject, or if no matching profile is found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
        subject: str | None = payload.get("sub")
        if subject is None or payload.get("type") != "access":
            raise credentials_exception
        if payload.get("mode") == "admin":
            raise credentials_exception

        token_data = TokenData(subject=subject)
    except InvalidTokenError:
        raise credentials_exception
    user = profile_service.get_profile_by_email(session, token_data.subject)
    if user is None:
        raise credentials_exception
    return user


def _require_user_type(user: UserProfile, user_type: UserType) -> UserProfile:
    if user.user_type != user_type:
        raise InsufficientPermissionsError(
            f"This action is only available to {user_type.value} accounts"
        )
    return user


def get_current_volunteer(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """Return the authenticated profile, which must be a volunteer (403 otherwise)."""
    return _require_user_type(current_user, UserType.VOLUNTEER)


def get_current_partner(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """Return the authenticated profile, which must be a business partner (403 otherwise)."""
    return _require_user_type(current_user, UserType.BUSINESS_PARTNER)


def get_current_organisation(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    """Return the authenticated profile, which must be a care facility / NGO (403 otherwise)."""
    return _require_user_type(current_user, UserType.CARE_FACILITY_NGO)


def get_current_full_access_partner(
    partner: Annotated[UserProfile, Depends(get_current_partner)],
) -> UserProfile:
    """
    Return the authenticated business partner if it may perform write actions.

    Accounts still in verification or limited to read-only access can browse their team
    but cannot change it.

    Raises:
        InsufficientPermissionsError: If the account is read-only.
    """
    if profile_service.is_read_only(partner):
        raise InsufficientPermissionsError(
            "Your account has read-only access until it is verified"
        )
    return partner


def get_current_admin(
    token: Annotated[str, Depends(oauth2_scheme)],
    session: Session = Depends(get_session),
) -> Admin:
    """
    Validate an access JWT for an administrator and return the corresponding Admin.

    Validates that the token payload contains a username (`sub`), that `mode` equals "admin", and that `type` equals "access".

    Raises:
        HTTPException: 401 Unauthorized if the token is invalid, missing required claims, or no matching admin is found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate admin credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_token(token)
        username: str | None = payload.get("sub")
        mode: str | None = payload.get("mode")
        token_type: str | None = payload.get("type")

        # Refresh tokens and regular user tokens are both rejected here
        if username is None or mode != "admin" or token_type != "access":
            raise credentials_exception

        token_data = TokenData(subject=username)
    except InvalidTokenError:
        raise credentials_exception

    statement = select(Admin).where(Admin.username == token_data.subject)
    admin = session.exec(statement).first()

    if admin is None:
        raise credentials_exception

    return admin
