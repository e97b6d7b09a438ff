"""User-related Pydantic schemas."""

from uuid import UUID

from pydantic import BaseModel, field_validator

from app.models.user import Role


class SkillRatingResponse(BaseModel):
    """A rated skill on a profile."""

    skill_id: str
    skill_name: str
    skill_type: str
    expertise_area: str
    rating: int
    verified: bool


class ProfileCommentResponse(BaseModel):
    """Comment shown on a profile."""

    id: str
    content: str
    author_id: str
    author_name: str | None
    approved: bool
    created_at: str


class UserSummary(BaseModel):
    """Directory listing entry."""

    user_id: str
    name: str | None
    image: str | None
    claimed: bool
    top_skills: list[SkillRatingResponse]


class ListUsersResponse(BaseModel):
    """Response for GET /users."""

    items: list[UserSummary]


class UserProfileResponse(BaseModel):
    """Public user profile response."""

    user_id: str
    name: str | None
    image: str | None
    linkedin_url: str | None
    role: Role
    claimed: bool
    bio: str | None
    education: str | None
    years_experience: int | None
    skills: list[SkillRatingResponse]
    comments: list[ProfileCommentResponse]
    can_edit: bool
    can_claim: bool
    # Note: email is NOT included - it's private


class UserMeResponse(BaseModel):
    """Response for GET /users/me (the signed-in user's dashboard)."""

    user_id: str
    name: str | None
    email: str | None
    image: str | None
    linkedin_url: str | None
    role: Role
    claimed: bool
    bio: str | None
    education: str | None
    years_experience: int | None
    skills: list[SkillRatingResponse]
    comments_received: list[ProfileCommentResponse]


class CreateUserRequest(BaseModel):
    """Curator request to seed an unclaimed profile."""

    name: str
    linkedin_url: str
    education: str | None = None
    years_experience: int | None = None
    bio: str | None = None

    @field_validator("name", "linkedin_url")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Name and LinkedIn URL are required."""
        if not v.strip():
            raise ValueError("Name and LinkedIn URL are required")
        return v.strip()

    @field_validator("years_experience")
    @classmethod
    def validate_years(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Years of experience cannot be negative")
        return v


class UpdateUserRequest(BaseModel):
    """Request to update a profile. Only fields that are sent are changed."""

    name: str | None = None
    linkedin_url: str | None = None
    education: str | None = None
    years_experience: int | None = None
    bio: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        # Only runs for a sent value; an omitted name keeps the default.
        if v is None or not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("linkedin_url")
    @classmethod
    def validate_linkedin_url(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            return v or None
        return v

    @field_validator("years_experience")
    @classmethod
    def validate_years(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Years of experience cannot be negative")
        return v


class UserResponse(BaseModel):
    """Profile fields returned after a create, update, or claim."""

    user_id: str
    name: str | None
    email: str | None
    image: str | None
    linkedin_url: str | None
    role: Role
    claimed: bool
    bio: str | None
    education: str | None
    years_experience: int | None


class SkillEntry(BaseModel):
    """One submitted skill rating."""

    skill_id: UUID
    rating: int


class ReplaceSkillsRequest(BaseModel):
    """Full replacement of a user's skill set."""

    skills: list[SkillEntry]


class ReplaceSkillsResponse(BaseModel):
    """The user's skill set after replacement."""

    user_id: str
    skills: list[SkillRatingResponse]


class ClaimResponse(BaseModel):
    """Response after a successful claim (session cookie is reissued)."""

    user_id: str
    name: str | None
    email: str | None
    claimed: bool
