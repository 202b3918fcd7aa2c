from typing import Iterable, List, MutableMapping, Optional

from starlette.datastructures import Headers

CORS_ALLOW_METHODS = "GET, OPTIONS, PATCH, DELETE, POST, PUT"
CORS_ALLOW_HEADERS = (
    "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
    "Content-MD5, Content-Type, Date, X-Api-Version, Authorization"
)

CONTENT_SECURITY_POLICY = (
    "default-src 'self'; script-src 'self' 'unsafe-inline' 'unsafe-eval'; "
    "style-src 'self' 'unsafe-inline'; img-src 'self' data: https:; "
    "font-src 'self' data:; connect-src 'self'"
)
PERMISSIONS_POLICY = "camera=(), microphone=(), geolocation=(), payment=(), usb=()"

SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": PERMISSIONS_POLICY,
}


class OriginGuard:
    """
    Origin allow-list plus the static CORS and security response headers.

    Outside production every origin is accepted. In production the Origin
    header must equal one allow-list entry exactly, and a request without
    an Origin header is refused.
    """

    def __init__(self, allowed_origins: Iterable[str], production: bool):
        self.allowed_origins: List[str] = list(allowed_origins)
        self.production = production

    def validate_origin(self, headers: Headers) -> bool:
        if not self.production:
            return True
        origin: Optional[str] = headers.get("origin")
        if not origin:
            return False
        return origin in self.allowed_origins

    def apply_cors_headers(self, headers: MutableMapping[str, str]) -> None:
        if self.allowed_origins:
            headers["Access-Control-Allow-Origin"] = ", ".join(self.allowed_origins)
        headers["Access-Control-Allow-Methods"] = CORS_ALLOW_METHODS
        headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        headers["Access-Control-Allow-Credentials"] = "true"

    @staticmethod
    def apply_security_headers(headers: MutableMapping[str, str]) -> None:
        for name, value in SECURITY_HEADERS.items():
            headers[name] = value
