"""
Shared test fixtures for DeltaProNet API tests.

Provides database session management, test clients, user fixtures and a
stand-in LinkedIn provider.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.auth.jwt import create_state_token
from app.auth.linkedin import get_linkedin_provider, profile_url_for
from app.config import settings
from app.database import Base, build_async_url, get_db
from app.main import app
from app.middleware.rate_limit import reset_limiter

# Import models so they're registered with Base.metadata before table creation
from app.models.skill import ExpertiseArea, Skill, SkillType
from app.models.user import Role
from tests.helpers import FakeLinkedInProvider, create_user

# Test database URL (uses separate test database)
TEST_DATABASE_URL = build_async_url(settings.test_database_url)

# Create test engine with NullPool to avoid connection issues
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    poolclass=NullPool,
    echo=False,
)

TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# --- Rate Limiter Reset Fixture ---


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """Reset rate limiter before each test to ensure test isolation."""
    reset_limiter()
    yield


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create tables before each test function, drop after.
    Provides isolated database state per test.
    """
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client configured for testing.
    Overrides database dependency with test session.
    """

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        follow_redirects=True,
    ) as client:
        yield client

    app.dependency_overrides.clear()


# --- Authentication Helper Fixtures ---


@pytest.fixture
def auth_headers():
    """Factory fixture for creating bearer session headers."""

    def _auth_headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def linkedin(async_client: AsyncClient) -> FakeLinkedInProvider:
    """Replace the LinkedIn provider for the duration of a test."""
    provider = FakeLinkedInProvider()
    app.dependency_overrides[get_linkedin_provider] = lambda: provider
    return provider


@pytest.fixture
def sign_in(async_client: AsyncClient) -> Callable[[str], Awaitable[Response]]:
    """Complete the LinkedIn callback for a registered code with a valid state."""

    async def _sign_in(code: str) -> Response:
        state = create_state_token()
        return await async_client.get(
            "/api/v1/auth/linkedin/callback",
            params={"code": code, "state": state},
            headers={"Cookie": f"oauth_state={state}"},
        )

    return _sign_in


# --- User Fixtures ---


@pytest_asyncio.fixture
async def member(db_session: AsyncSession) -> dict[str, Any]:
    """A signed-up member linked to LinkedIn subject 'member-one'."""
    return await create_user(
        db_session,
        name="Member One",
        email="member.one@example.com",
        linkedin_subject="member-one",
        linkedin_url=profile_url_for("member-one"),
    )


@pytest_asyncio.fixture
async def second_member(db_session: AsyncSession) -> dict[str, Any]:
    """A second member for testing ownership/authorization scenarios."""
    return await create_user(
        db_session,
        name="Member Two",
        email="member.two@example.com",
        linkedin_subject="member-two",
        linkedin_url=profile_url_for("member-two"),
    )


@pytest_asyncio.fixture
async def moderator(db_session: AsyncSession) -> dict[str, Any]:
    return await create_user(
        db_session,
        name="Moderator",
        role=Role.MODERATOR,
        email="moderator@example.com",
        linkedin_subject="the-moderator",
        linkedin_url=profile_url_for("the-moderator"),
    )


@pytest_asyncio.fixture
async def curator(db_session: AsyncSession) -> dict[str, Any]:
    return await create_user(
        db_session,
        name="Curator",
        role=Role.CURATOR,
        email="curator@example.com",
        linkedin_subject="the-curator",
        linkedin_url=profile_url_for("the-curator"),
    )


@pytest_asyncio.fixture
async def unclaimed_profile(db_session: AsyncSession) -> dict[str, Any]:
    """A curator-seeded profile for LinkedIn subject 'asmith', not yet claimed."""
    return await create_user(
        db_session,
        name="A. Smith",
        claimed=False,
        linkedin_url=profile_url_for("asmith"),
    )


@pytest_asyncio.fixture
async def claimant(db_session: AsyncSession) -> dict[str, Any]:
    """
    The 'asmith' LinkedIn identity, signed up on a separate fresh profile.

    Models someone who signed in before a curator seeded their profile.
    """
    return await create_user(
        db_session,
        name="Alex Smith",
        email="alex.smith@example.com",
        linkedin_subject="asmith",
    )


@pytest_asyncio.fixture
async def skills(db_session: AsyncSession) -> dict[str, str]:
    """Two expertise areas with a few skills; returns skill name -> id."""
    software = ExpertiseArea(name="Software", description="Software development", order=2)
    electronica = ExpertiseArea(name="Electronica", description="Electronics", order=1)
    db_session.add_all([software, electronica])
    await db_session.flush()

    created = [
        Skill(name="Embedded", type=SkillType.GENERAL, order=1, expertise_area_id=software.id),
        Skill(name="Python", type=SkillType.LANGUAGE, order=2, expertise_area_id=software.id),
        Skill(name="C", type=SkillType.LANGUAGE, order=3, expertise_area_id=software.id),
        Skill(name="ESD", type=SkillType.GENERAL, order=1, expertise_area_id=electronica.id),
        Skill(name="SolidWorks CAD", type=SkillType.TOOL, order=2, expertise_area_id=electronica.id),
        Skill(name="Voeding", type=SkillType.GENERAL, order=3, expertise_area_id=electronica.id),
    ]
    db_session.add_all(created)
    await db_session.commit()

    return {skill.name: str(skill.id) for skill in created}


# --- Utility Fixtures ---


@pytest.fixture
def frozen_time():
    """
    Fixture for time-based testing using freezegun.

    Usage:
        with frozen_time("2026-02-01 12:00:00"):
            # time is frozen
    """
    from freezegun import freeze_time

    return freeze_time
