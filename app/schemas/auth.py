"""Authentication schemas for request/response validation."""

from pydantic import BaseModel

from app.models.user import Role


class SessionResponse(BaseModel):
    """The resolved identity behind the current session."""

    user_id: str
    name: str | None
    email: str | None
    image: str | None
    role: Role
    claimed: bool
    linkedin_url: str | None
    can_moderate: bool


class LogoutResponse(BaseModel):
    """Response after clearing the session cookie."""

    signed_out: bool
