"""
Tests for explicit profile claiming:
- POST /api/v1/users/{user_id}/claim
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.dml import Update

from app.auth.linkedin import profile_url_for
from app.auth.session import Identity
from app.errors import ConflictError
from app.models.user import Role, User
from app.services.claims import claim_profile
from tests.helpers import session_token_from


class TestClaimProfile:
    """POST /api/v1/users/{user_id}/claim tests."""

    async def test_matching_identity_claims(
        self, async_client: AsyncClient, unclaimed_profile: dict, claimant: dict, auth_headers
    ):
        response = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(claimant["token"]),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == unclaimed_profile["user_id"]
        assert data["claimed"] is True
        assert data["email"] == "alex.smith@example.com"

    async def test_session_moves_to_claimed_profile(
        self, async_client: AsyncClient, unclaimed_profile: dict, claimant: dict, auth_headers
    ):
        """The reissued session cookie resolves to the claimed profile."""
        response = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(claimant["token"]),
        )
        token = session_token_from(response)
        assert token

        session = await async_client.get("/api/v1/auth/session", headers=auth_headers(token))
        assert session.json()["user_id"] == unclaimed_profile["user_id"]
        assert session.json()["claimed"] is True

    async def test_next_signin_resolves_to_claimed_profile(
        self, async_client: AsyncClient, unclaimed_profile: dict, claimant: dict, auth_headers, linkedin, sign_in
    ):
        """The LinkedIn link follows the claim."""
        await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(claimant["token"]),
        )

        linkedin.register("code-1", subject="asmith")
        response = await sign_in("code-1")

        assert response.json()["user_id"] == unclaimed_profile["user_id"]

    async def test_profile_becomes_claimed(
        self, async_client: AsyncClient, unclaimed_profile: dict, claimant: dict, auth_headers
    ):
        await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(claimant["token"]),
        )

        profile = await async_client.get(f"/api/v1/users/{unclaimed_profile['user_id']}")
        assert profile.json()["claimed"] is True
        assert profile.json()["can_claim"] is False

    async def test_mismatched_identity_forbidden(
        self, async_client: AsyncClient, unclaimed_profile: dict, member: dict, auth_headers
    ):
        response = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(member["token"]),
        )

        assert response.status_code == 403
        assert "curator" in response.json()["error"]["message"].lower()

        profile = await async_client.get(f"/api/v1/users/{unclaimed_profile['user_id']}")
        assert profile.json()["claimed"] is False

    async def test_elevated_role_does_not_bypass_match(
        self, async_client: AsyncClient, unclaimed_profile: dict, curator: dict, auth_headers
    ):
        """Claiming is identity-bound; curators cannot claim on someone's behalf."""
        response = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(curator["token"]),
        )
        assert response.status_code == 403

    async def test_second_claim_conflicts(
        self, async_client: AsyncClient, unclaimed_profile: dict, claimant: dict, auth_headers
    ):
        first = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(claimant["token"]),
        )
        assert first.status_code == 200

        second = await async_client.post(
            f"/api/v1/users/{unclaimed_profile['user_id']}/claim",
            headers=auth_headers(session_token_from(first)),
        )
        assert second.status_code == 409

    async def test_claimed_profile_conflicts(
        self, async_client: AsyncClient, member: dict, second_member: dict, auth_headers
    ):
        response = await async_client.post(
            f"/api/v1/users/{member['user_id']}/claim",
            headers=auth_headers(second_member["token"]),
        )
        assert response.status_code == 409

    async def test_missing_profile(self, async_client: AsyncClient, claimant: dict, auth_headers):
        response = await async_client.post(
            f"/api/v1/users/{uuid.uuid4()}/claim",
            headers=auth_headers(claimant["token"]),
        )
        assert response.status_code == 404

    async def test_requires_auth(self, async_client: AsyncClient, unclaimed_profile: dict):
        response = await async_client.post(f"/api/v1/users/{unclaimed_profile['user_id']}/claim")
        assert response.status_code == 401

    async def test_claim_attempts_rate_limited(self, async_client: AsyncClient, claimant: dict, auth_headers):
        missing = uuid.uuid4()
        for _ in range(5):
            response = await async_client.post(
                f"/api/v1/users/{missing}/claim",
                headers=auth_headers(claimant["token"]),
            )
            assert response.status_code == 404

        response = await async_client.post(
            f"/api/v1/users/{missing}/claim",
            headers=auth_headers(claimant["token"]),
        )
        assert response.status_code == 429


class TestClaimRace:
    """The conditional update decides a claim lost to a concurrent writer."""

    async def test_lost_race_conflicts(
        self, db_session: AsyncSession, unclaimed_profile: dict, claimant: dict, monkeypatch
    ):
        """Another claim lands between the read and the update."""
        target_id = uuid.UUID(unclaimed_profile["user_id"])
        identity = Identity(
            user_id=uuid.UUID(claimant["user_id"]),
            role=Role.MEMBER,
            claimed=True,
            name=claimant["name"],
            email=claimant["email"],
            image=None,
            external_profile_url=profile_url_for("asmith"),
        )

        execute = db_session.execute
        raced = []

        async def execute_after_competing_claim(statement, *args, **kwargs):
            if isinstance(statement, Update) and statement.table.name == "users" and not raced:
                raced.append(True)
                await execute(
                    update(User)
                    .where(User.id == target_id)
                    .values(claimed=True, email="winner@example.com")
                )
            return await execute(statement, *args, **kwargs)

        monkeypatch.setattr(db_session, "execute", execute_after_competing_claim)

        with pytest.raises(ConflictError):
            await claim_profile(db_session, identity, target_id)

        monkeypatch.undo()
        assert raced
        result = await db_session.execute(
            select(User).where(User.id == target_id).execution_options(populate_existing=True)
        )
        profile = result.scalar_one()
        assert profile.claimed is True
        assert profile.email == "winner@example.com"
