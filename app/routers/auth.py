from datetime import timedelta
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from app.database.database import get_session
from app.core.config import get_settings, Settings
from app.core.security import (
    authenticate_user,
    create_access_token,
    create_refresh_token,
    decode_token,
)
from app.exceptions import InvalidCredentialsError, InvalidTokenError, TokenExpiredError
from app.models.token import Token, TokenRefreshRequest
from app.services import profile as profile_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Log in with e-mail and password (OAuth2 password flow).

    The form's `username` field carries the e-mail address, matched case-insensitively.
    Accounts registered by a partner on a volunteer's behalf have no password and cannot log in.
    Accounts still in verification can log in; they are read-only until verified.

    Returns:
        `Token`: An access token and a refresh token, both with the e-mail as subject.

    Raises:
        `401 InvalidCredentialsError`: If the e-mail is unknown or the password is wrong.
    """
    user = authenticate_user(session, form_data.username, form_data.password)
    if not user:
        raise InvalidCredentialsError()

    access_token = create_access_token(
        data={"sub": user.email},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    refresh_token = create_refresh_token(
        data={"sub": user.email},
        expires_delta=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )
    return Token(
        access_token=access_token, refresh_token=refresh_token, token_type="bearer"
    )


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request_data: TokenRefreshRequest,
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """
    Exchange a refresh token for a new access token.

    Expects JSON: {"refresh_token": "..."}. The refresh token is returned unchanged; logging
    in again is the only way to extend it.

    Raises:
        `401 TokenExpiredError`: If the refresh token has expired.
        `401 InvalidTokenError`: If the token is malformed, is an access token, or its
            profile no longer exists.
    """
    incoming_refresh_token = request_data.refresh_token
    try:
        payload = decode_token(incoming_refresh_token)
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("refresh")
    except jwt.InvalidTokenError:
        raise InvalidTokenError()

    email: str | None = payload.get("sub")
    if email is None or payload.get("type") != "refresh":
        raise InvalidTokenError()
    if not profile_service.get_profile_by_email(session, email):
        raise InvalidTokenError()

    new_access_token = create_access_token(
        data={"sub": email},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return Token(
        access_token=new_access_token,
        refresh_token=incoming_refresh_token,
        token_type="bearer",
    )
