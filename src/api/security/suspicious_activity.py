import re
from typing import List

from pydantic import BaseModel, Field
from starlette.datastructures import Headers

MIN_USER_AGENT_LENGTH = 10
MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10 MiB

BOT_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (r"bot", r"crawler", r"spider", r"scraper", r"curl", r"wget")
]

SINGLE_VALUE_HEADERS = ("x-forwarded-for", "x-real-ip")


class SuspiciousActivityResult(BaseModel):
    is_suspicious: bool
    reasons: List[str] = Field(default_factory=list)


def detect_suspicious_activity(headers: Headers) -> SuspiciousActivityResult:
    """
    Flag requests that look automated or malformed.

    Every check runs; the result lists all reasons found. Detection never
    rejects a request on its own.
    """
    reasons: List[str] = []
    user_agent = headers.get("user-agent", "")

    if len(user_agent) < MIN_USER_AGENT_LENGTH:
        reasons.append("Missing or suspicious user agent")

    if any(pattern.search(user_agent) for pattern in BOT_PATTERNS):
        reasons.append("Bot-like user agent detected")

    for name in SINGLE_VALUE_HEADERS:
        if len(headers.getlist(name)) > 1:
            reasons.append(f"Multiple {name} headers")

    if _content_length(headers) > MAX_CONTENT_LENGTH:
        reasons.append("Unusually large request")

    return SuspiciousActivityResult(is_suspicious=bool(reasons), reasons=reasons)


def _content_length(headers: Headers) -> int:
    try:
        return int(headers.get("content-length", "0"))
    except ValueError:
        return 0
