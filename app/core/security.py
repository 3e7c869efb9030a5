from jwt.exceptions import PyJWTError
from typing import Literal
from datetime import datetime, timedelta, timezone

import jwt
from sqlmodel import Session, select

from app.core.config import get_settings
from app.core.password import verify_password, DUMMY_HASH
from app.exceptions import AppException
from app.models.user import UserProfile
from app.models.admin import Admin


def authenticate_user(
    session: Session, email: str, password: str
) -> UserProfile | None:
    """
    Authenticate a profile by email and password.

    Profiles without a password (registered by a partner on a volunteer's behalf) can never log in.

    Returns:
        UserProfile if authentication succeeds, `None` otherwise.
    """
    statement = select(UserProfile).where(UserProfile.email == email.strip().lower())
    user = session.exec(statement).first()
    hash_to_verify = (
        user.hashed_password if user and user.hashed_password else DUMMY_HASH
    )
    if verify_password(password, hash_to_verify) and user and user.hashed_password:
        return user
    return None


def authenticate_admin(session: Session, username: str, password: str) -> Admin | None:
    """
    Authenticate an admin by username and password.

    Returns:
        Admin: The matching Admin object if credentials are valid, `None` otherwise.
    """
    statement = select(Admin).where(Admin.username == username)
    admin = session.exec(statement).first()
    hash_to_verify = admin.hashed_password if admin else DUMMY_HASH
    if verify_password(password, hash_to_verify) and admin:
        return admin
    return None


def create_token(
    data: dict, expires_delta: timedelta, type: Literal["access", "refresh"]
) -> str:
    """
    Create a JSON Web Token with the given payload, expiration, and token type.

    Parameters:
        data (dict): Payload claims to include in the token.
        expires_delta (timedelta): Time span from now after which the token expires.
        type (Literal["access", "refresh"]): Token classification included in the token claims.

    Returns:
        token (str): Encoded JWT string.

    Raises:
        AppException: If the token cannot be generated.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode.update({"exp": expire, "type": type})
    settings = get_settings()
    try:
        return jwt.encode(
            to_encode,
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )
    except PyJWTError as e:
        raise AppException("Could not generate authentication token.") from e


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token containing the provided payload.

    If `expires_delta` is None the expiration comes from ACCESS_TOKEN_EXPIRE_MINUTES.
    """
    expires_delta = (
        expires_delta
        if expires_delta
        else timedelta(minutes=get_settings().ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return create_token(data, expires_delta=expires_delta, type="access")


def create_refresh_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT refresh token containing the provided payload.

    If `expires_delta` is None the expiration comes from REFRESH_TOKEN_EXPIRE_DAYS.
    """
    expires_delta = (
        expires_delta
        if expires_delta
        else timedelta(days=get_settings().REFRESH_TOKEN_EXPIRE_DAYS)
    )
    return create_token(data, expires_delta=expires_delta, type="refresh")


def decode_token(token: str) -> dict:
    """
    Decode and verify a JWT issued by this service.

    Raises:
        jwt.exceptions.InvalidTokenError: If the signature, expiry or format is invalid.
    """
    settings = get_settings()
    return jwt.decode(
        token,
        settings.SECRET_KEY.get_secret_value(),
        algorithms=[settings.ALGORITHM],
    )
