"""
Request admission for account endpoints.

``Admission(policy)`` is a route dependency running the rate limiter and then
the suspicious-activity detector. The origin guard has already run in the
security-headers middleware. Rate-limit headers and the counted key are left
on ``request.state`` for that middleware to finish once the response status
is known.
"""

from typing import Optional

from fastapi import Request

from src.api.error import RateLimitError
from src.api.security.events import (
    RATE_LIMIT_EXCEEDED,
    SUSPICIOUS_ACTIVITY,
    log_security_event,
)
from src.api.security.rate_limiter import RateLimitPolicy, client_key
from src.api.security.suspicious_activity import detect_suspicious_activity
from src.api.utils.cookies import extract_session_token
from src.api.utils.jwt import read_session_token


class Admission:
    def __init__(self, policy: RateLimitPolicy, rejection_message: Optional[str] = None):
        self.policy = policy
        self.rejection_message = rejection_message or "Too many requests. Please try again later."

    async def __call__(self, request: Request) -> None:
        state = request.app.state

        user_id = _session_user_id(request)

        if state.config.RATE_LIMIT_ENABLED:
            key = client_key(request, user_id)
            result = state.rate_limiter.check(key, self.policy)
            request.state.rate_limit = (key, self.policy)
            request.state.rate_limit_headers = result.headers()
            if not result.success:
                log_security_event(
                    RATE_LIMIT_EXCEEDED,
                    request,
                    message=(
                        f"{self.policy.name} rate limit exceeded: "
                        f"{result.remaining}/{result.limit} remaining"
                    ),
                    user_id=user_id,
                )
                raise RateLimitError(
                    self.rejection_message,
                    retry_after=result.retry_after or 0,
                    headers=result.headers(),
                )

        suspicious = detect_suspicious_activity(request.headers)
        if suspicious.is_suspicious:
            log_security_event(
                SUSPICIOUS_ACTIVITY,
                request,
                message=f"Suspicious activity detected: {', '.join(suspicious.reasons)}",
                user_id=user_id,
            )


def _session_user_id(request: Request) -> Optional[str]:
    """User id from a valid session token, without touching the database."""
    token = extract_session_token(request, request.app.state.config)
    if token is None:
        return None
    claims = read_session_token(token)
    return claims.sub if claims else None
