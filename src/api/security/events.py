"""
Security event logging.

Events go to the ``security`` logger. Logging is best-effort: a failure
while building or emitting an event never reaches the request.
"""

import logging
from typing import Optional

from starlette.requests import Request

security_logger = logging.getLogger("security")

CORS_VIOLATION = "CORS_VIOLATION"
RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
SUSPICIOUS_ACTIVITY = "SUSPICIOUS_ACTIVITY"


def log_security_event(
    event_type: str,
    request: Request,
    message: Optional[str] = None,
    user_id: Optional[str] = None,
) -> None:
    try:
        details = {
            "type": event_type,
            "ip": request.headers.get("x-forwarded-for")
            or (request.client.host if request.client else None),
            "user_id": user_id,
            "user_agent": request.headers.get("user-agent"),
            "path": request.url.path,
            "method": request.method,
            "message": message,
        }
        security_logger.warning(
            f"Security event: {event_type}",
            extra={"security_event": {k: v for k, v in details.items() if v is not None}},
        )
    except Exception:  # noqa: BLE001
        pass
