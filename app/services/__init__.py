"""Services for the DeltaProNet directory."""

from app.services.claims import claim_profile
from app.services.identity import IdentityResolver, resolve_identity
from app.services.skills import replace_user_skills

__all__ = ["IdentityResolver", "resolve_identity", "claim_profile", "replace_user_skills"]
