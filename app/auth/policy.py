"""Authorization policy.

Roles map to fixed capability sets; every permission decision is a
capability-membership test over primitive inputs (ids and a role tag). These
functions perform no I/O and are evaluated fresh on every request.

A ``None`` role or actor id stands for an unauthenticated caller and is
granted nothing.
"""

import enum
from uuid import UUID

from app.models.user import Role


class Capability(str, enum.Enum):
    EDIT_ANY_PROFILE = "edit_any_profile"
    MODERATE_CONTENT = "moderate_content"
    CURATE_DIRECTORY = "curate_directory"


_ELEVATED = frozenset(
    {
        Capability.EDIT_ANY_PROFILE,
        Capability.MODERATE_CONTENT,
        Capability.CURATE_DIRECTORY,
    }
)

# Moderator and curator share one capability set; the names are historical.
ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.MEMBER: frozenset(),
    Role.MODERATOR: _ELEVATED,
    Role.CURATOR: _ELEVATED,
}


def capabilities_for(role: Role | None) -> frozenset[Capability]:
    """Return the capability set granted to a role."""
    if role is None:
        return frozenset()
    return ROLE_CAPABILITIES.get(Role(role), frozenset())


def has_capability(role: Role | None, capability: Capability) -> bool:
    return capability in capabilities_for(role)


def is_curator(role: Role | None) -> bool:
    """True for CURATOR and MODERATOR."""
    return has_capability(role, Capability.CURATE_DIRECTORY)


def is_moderator(role: Role | None) -> bool:
    """True only for MODERATOR."""
    return role is not None and Role(role) is Role.MODERATOR


def can_moderate_content(role: Role | None) -> bool:
    return has_capability(role, Capability.MODERATE_CONTENT)


def can_edit_user(actor_id: UUID | None, target_user_id: UUID, actor_role: Role | None) -> bool:
    """Self-service edit, or elevated-role override."""
    if actor_id is None:
        return False
    return actor_id == target_user_id or has_capability(actor_role, Capability.EDIT_ANY_PROFILE)


def can_view_pending(actor_id: UUID | None, author_id: UUID, actor_role: Role | None) -> bool:
    """Unapproved content is visible to its author and to moderators."""
    if actor_id is None:
        return False
    return actor_id == author_id or can_moderate_content(actor_role)


def can_claim(
    identity_profile_url: str | None,
    target_profile_url: str | None,
    target_claimed: bool,
) -> bool:
    """An unclaimed profile may be claimed by the identity with the exact same profile URL."""
    if target_claimed or not identity_profile_url or not target_profile_url:
        return False
    return identity_profile_url == target_profile_url
