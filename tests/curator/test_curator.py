"""
Tests for curator endpoints:
- GET /api/v1/curator/pending
- GET /api/v1/curator/stats
- PATCH /api/v1/curator/users/{user_id}/role
"""

import uuid

from httpx import AsyncClient


async def _seed_content(client: AsyncClient, author: dict, target: dict, auth_headers) -> tuple[dict, dict]:
    question = await client.post(
        "/api/v1/questions",
        json={"title": "Best CAM for aluminium?", "content": "Fusion or SolidWorks?"},
        headers=auth_headers(author["token"]),
    )
    comment = await client.post(
        "/api/v1/comments",
        json={"target_user_id": target["user_id"], "content": "Solid engineer."},
        headers=auth_headers(author["token"]),
    )
    return question.json(), comment.json()


class TestPendingQueue:
    """GET /api/v1/curator/pending tests."""

    async def test_lists_pending_content(
        self, async_client: AsyncClient, member: dict, second_member: dict, moderator: dict, auth_headers
    ):
        question, comment = await _seed_content(async_client, member, second_member, auth_headers)

        response = await async_client.get("/api/v1/curator/pending", headers=auth_headers(moderator["token"]))

        assert response.status_code == 200
        data = response.json()
        assert [q["id"] for q in data["questions"]] == [question["id"]]
        assert [c["id"] for c in data["comments"]] == [comment["id"]]
        assert data["questions"][0]["answer_count"] == 0

    async def test_approved_content_leaves_queue(
        self, async_client: AsyncClient, member: dict, second_member: dict, curator: dict, auth_headers
    ):
        question, comment = await _seed_content(async_client, member, second_member, auth_headers)
        await async_client.patch(
            f"/api/v1/questions/{question['id']}",
            json={"approved": True},
            headers=auth_headers(curator["token"]),
        )

        response = await async_client.get("/api/v1/curator/pending", headers=auth_headers(curator["token"]))
        data = response.json()
        assert data["questions"] == []
        assert [c["id"] for c in data["comments"]] == [comment["id"]]

    async def test_member_forbidden(self, async_client: AsyncClient, member: dict, auth_headers):
        response = await async_client.get("/api/v1/curator/pending", headers=auth_headers(member["token"]))
        assert response.status_code == 403

    async def test_anonymous_unauthenticated(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/curator/pending")
        assert response.status_code == 401


class TestDirectoryStats:
    """GET /api/v1/curator/stats tests."""

    async def test_counts(
        self,
        async_client: AsyncClient,
        member: dict,
        second_member: dict,
        unclaimed_profile: dict,
        curator: dict,
        auth_headers,
    ):
        await _seed_content(async_client, member, second_member, auth_headers)

        response = await async_client.get("/api/v1/curator/stats", headers=auth_headers(curator["token"]))

        assert response.status_code == 200
        assert response.json() == {
            "total_users": 4,
            "claimed_users": 3,
            "pending_comments": 1,
            "pending_questions": 1,
        }

    async def test_member_forbidden(self, async_client: AsyncClient, member: dict, auth_headers):
        response = await async_client.get("/api/v1/curator/stats", headers=auth_headers(member["token"]))
        assert response.status_code == 403


class TestUpdateRole:
    """PATCH /api/v1/curator/users/{user_id}/role tests."""

    async def test_curator_promotes_member(
        self, async_client: AsyncClient, member: dict, curator: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/curator/users/{member['user_id']}/role",
            json={"role": "CURATOR"},
            headers=auth_headers(curator["token"]),
        )

        assert response.status_code == 200
        assert response.json() == {"user_id": member["user_id"], "name": "Member One", "role": "CURATOR"}

    async def test_moderator_may_change_roles(
        self, async_client: AsyncClient, member: dict, moderator: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/curator/users/{member['user_id']}/role",
            json={"role": "MODERATOR"},
            headers=auth_headers(moderator["token"]),
        )
        assert response.status_code == 200

    async def test_member_forbidden(
        self, async_client: AsyncClient, member: dict, second_member: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/curator/users/{second_member['user_id']}/role",
            json={"role": "CURATOR"},
            headers=auth_headers(member["token"]),
        )
        assert response.status_code == 403

    async def test_unknown_role_rejected(
        self, async_client: AsyncClient, member: dict, curator: dict, auth_headers
    ):
        response = await async_client.patch(
            f"/api/v1/curator/users/{member['user_id']}/role",
            json={"role": "ADMIN"},
            headers=auth_headers(curator["token"]),
        )
        assert response.status_code == 400

    async def test_missing_user(self, async_client: AsyncClient, curator: dict, auth_headers):
        response = await async_client.patch(
            f"/api/v1/curator/users/{uuid.uuid4()}/role",
            json={"role": "MEMBER"},
            headers=auth_headers(curator["token"]),
        )
        assert response.status_code == 404
