"""Rate limiting for sign-in and claim endpoints using slowapi."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Keyed by client IP. Limits are declared per endpoint from settings
# (signin_rate_limit, claim_rate_limit); endpoints decorated with
# limiter.limit must accept a Request parameter.
limiter = Limiter(key_func=get_remote_address)


def reset_limiter() -> None:
    """Reset the limiter storage. Used in tests to clear rate limit state."""
    limiter.reset()
