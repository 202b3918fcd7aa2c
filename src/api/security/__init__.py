from .admission import Admission
from .origin_guard import OriginGuard
from .rate_limiter import (
    API_POLICY,
    AUTH_POLICY,
    PASSWORD_RESET_POLICY,
    PROFILE_POLICY,
    RateLimiter,
    RateLimitPolicy,
    RateLimitResult,
    client_key,
)
from .suspicious_activity import SuspiciousActivityResult, detect_suspicious_activity

__all__ = [
    "Admission",
    "OriginGuard",
    "RateLimiter",
    "RateLimitPolicy",
    "RateLimitResult",
    "client_key",
    "AUTH_POLICY",
    "API_POLICY",
    "PROFILE_POLICY",
    "PASSWORD_RESET_POLICY",
    "SuspiciousActivityResult",
    "detect_suspicious_activity",
]
