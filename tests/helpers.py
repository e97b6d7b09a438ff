"""Helpers shared by test modules and fixtures."""

from typing import Any

from httpx import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.jwt import create_session_token
from app.auth.linkedin import ExternalAccount, LinkedInProvider, profile_url_for
from app.config import settings
from app.errors import UnauthenticatedError
from app.models.user import OAuthAccount, Role, User


def session_token_from(response: Response) -> str | None:
    """Extract the session token from a response's Set-Cookie headers."""
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == "session_token":
            value = rest.split(";", 1)[0].strip().strip('"')
            return value or None
    return None


class FakeLinkedInProvider(LinkedInProvider):
    """LinkedIn provider whose code exchange returns registered accounts."""

    def __init__(self):
        super().__init__(settings)
        self.accounts: dict[str, ExternalAccount] = {}

    def register(
        self,
        code: str,
        subject: str,
        name: str | None = "Test Person",
        email: str | None = "person@example.com",
        image: str | None = "https://media.licdn.com/avatar.jpg",
    ) -> ExternalAccount:
        account = ExternalAccount(
            provider=LinkedInProvider.name,
            subject=subject,
            name=name,
            email=email,
            image=image,
        )
        self.accounts[code] = account
        return account

    async def exchange_code(self, code: str) -> ExternalAccount:
        if code not in self.accounts:
            raise UnauthenticatedError("LinkedIn sign-in failed")
        return self.accounts[code]


async def create_user(
    db_session: AsyncSession,
    name: str,
    role: Role = Role.MEMBER,
    claimed: bool = True,
    email: str | None = None,
    linkedin_subject: str | None = None,
    linkedin_url: str | None = None,
) -> dict[str, Any]:
    """Create a user, optionally linked to a LinkedIn account, with a session token."""
    user = User(
        name=name,
        email=email,
        role=role,
        claimed=claimed,
        linkedin_url=linkedin_url,
    )
    db_session.add(user)
    await db_session.flush()

    if linkedin_subject:
        db_session.add(
            OAuthAccount(
                user_id=user.id,
                provider=LinkedInProvider.name,
                provider_account_id=linkedin_subject,
                profile_url=profile_url_for(linkedin_subject),
            )
        )

    await db_session.commit()

    return {
        "user_id": str(user.id),
        "name": user.name,
        "email": user.email,
        "linkedin_url": user.linkedin_url,
        "token": create_session_token(str(user.id)),
    }
