from pydantic import BaseModel


class Token(BaseModel):
    """Login response. Admin logins carry no refresh token."""

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"


class TokenData(BaseModel):
    # Profile e-mail for users, username for admins
    subject: str


class TokenRefreshRequest(BaseModel):
    refresh_token: str
