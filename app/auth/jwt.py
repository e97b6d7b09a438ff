"""JWT session tokens.

The token carries only the resolved internal user id; everything else about
the identity is re-read from the database when the session is materialized.
"""

import secrets
from datetime import datetime, timedelta, timezone

from jose import jwt

from app.config import settings

SESSION_TOKEN_TYPE = "session"


def create_session_token(user_id: str) -> str:
    """Create a signed session token for an internal user id."""
    expire = datetime.now(timezone.utc) + timedelta(days=settings.session_token_expire_days)
    payload = {
        "sub": user_id,
        "exp": expire,
        "type": SESSION_TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def create_state_token() -> str:
    """Create a short-lived signed OAuth state value."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=10)
    payload = {"exp": expire, "type": "oauth_state", "nonce": secrets.token_urlsafe(16)}
    return jwt.encode(payload, settings.jwt_secret, algorithm="HS256")


def decode_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Returns the payload if valid, None if invalid or expired.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=["HS256"])
        return payload
    except jwt.JWTError:
        return None
