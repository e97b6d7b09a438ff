"""LinkedIn OpenID Connect sign-in.

Implements the authorization code flow and maps the userinfo response to an
ExternalAccount.
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import httpx

from app.config import Settings, settings
from app.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

_LINKEDIN_AUTH_URL = "https://www.linkedin.com/oauth/v2/authorization"
_LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"
_LINKEDIN_USERINFO_URL = "https://api.linkedin.com/v2/userinfo"
_PROFILE_URL_PREFIX = "https://www.linkedin.com/in/"


def profile_url_for(subject: str) -> str:
    """Canonical external profile URL for a LinkedIn subject id."""
    return f"{_PROFILE_URL_PREFIX}{subject}"


@dataclass(frozen=True)
class ExternalAccount:
    """Identity returned by a successful provider handshake."""

    provider: str
    subject: str
    name: str | None
    email: str | None
    image: str | None

    @property
    def profile_url(self) -> str:
        return profile_url_for(self.subject)


class LinkedInProvider:
    """LinkedIn OAuth2 provider (OpenID Connect scopes)."""

    name = "linkedin"
    scope = "openid profile email"

    def __init__(self, config: Settings):
        self._settings = config

    def get_authorization_url(self, state: str) -> str:
        """Build the LinkedIn authorization URL for a CSRF state value."""
        params = {
            "response_type": "code",
            "client_id": self._settings.linkedin_client_id,
            "redirect_uri": self._settings.linkedin_redirect_uri,
            "scope": self.scope,
            "state": state,
        }
        return f"{_LINKEDIN_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ExternalAccount:
        """
        Exchange an authorization code for the user's LinkedIn identity.

        Raises:
            UnauthenticatedError: if LinkedIn rejects the code or returns no subject
        """
        if not self._settings.linkedin_client_id or not self._settings.linkedin_client_secret:
            logger.error("LINKEDIN_CLIENT_ID / LINKEDIN_CLIENT_SECRET are not configured")
            raise UnauthenticatedError("LinkedIn sign-in is not configured")

        async with httpx.AsyncClient(timeout=10.0) as client:
            token_resp = await client.post(
                _LINKEDIN_TOKEN_URL,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "client_id": self._settings.linkedin_client_id,
                    "client_secret": self._settings.linkedin_client_secret,
                    "redirect_uri": self._settings.linkedin_redirect_uri,
                },
            )
            if token_resp.status_code >= 400:
                logger.warning("LinkedIn token exchange failed: %s", token_resp.text)
                raise UnauthenticatedError("LinkedIn sign-in failed")

            access_token = token_resp.json().get("access_token")
            if not access_token:
                raise UnauthenticatedError("LinkedIn sign-in failed")

            user_resp = await client.get(
                _LINKEDIN_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            if user_resp.status_code >= 400:
                logger.warning("LinkedIn userinfo request failed: %s", user_resp.status_code)
                raise UnauthenticatedError("LinkedIn sign-in failed")

            userinfo: dict[str, Any] = user_resp.json()

        return account_from_userinfo(userinfo)


def account_from_userinfo(userinfo: dict[str, Any]) -> ExternalAccount:
    """Map an OpenID Connect userinfo payload to an ExternalAccount."""
    subject = str(userinfo.get("sub") or "")
    if not subject:
        raise UnauthenticatedError("LinkedIn did not return a subject identifier")

    return ExternalAccount(
        provider=LinkedInProvider.name,
        subject=subject,
        name=userinfo.get("name"),
        email=userinfo.get("email"),
        image=userinfo.get("picture"),
    )


def get_linkedin_provider() -> LinkedInProvider:
    """Dependency returning the configured LinkedIn provider."""
    return LinkedInProvider(settings)
