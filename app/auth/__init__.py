"""Authentication and authorization for the directory API."""

from app.auth.jwt import create_session_token, create_state_token, decode_token
from app.auth.session import Identity, resolve_session

__all__ = [
    "Identity",
    "resolve_session",
    "create_session_token",
    "create_state_token",
    "decode_token",
]
