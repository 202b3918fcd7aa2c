from typing import Dict, Optional

from fastapi import status
from libs.result import Error

INTERNAL_ERROR_BODY = {"success": False, "error": "Internal server error", "code": "INTERNAL_ERROR"}


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        payload = {
            "success": False,
            "error": self.base_error.message,
            "code": self.base_error.code,
        }
        if self.base_error.field:
            payload["field"] = self.base_error.field
        if self.base_error.details:
            payload["details"] = list(self.base_error.details)
        return payload


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class ValidationError(ClientError):
    """Malformed or unsafe input"""

    def __init__(self, base_error: Error):
        super().__init__(base_error, status_code=status.HTTP_400_BAD_REQUEST)


class AuthenticationError(ClientError):
    """Bad credentials or missing session; never says which"""

    def __init__(self, base_error: Optional[Error] = None):
        super().__init__(
            base_error or Error("UNAUTHORIZED", "Unauthorized"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


class AuthorizationOriginError(ClientError):
    """Request origin is not on the allow-list"""

    def __init__(self):
        super().__init__(
            Error("FORBIDDEN_ORIGIN", "Forbidden"),
            status_code=status.HTTP_403_FORBIDDEN,
        )


class ConflictError(ClientError):
    """Duplicate email, username or display name; field says which"""

    def __init__(self, base_error: Error):
        super().__init__(base_error, status_code=status.HTTP_400_BAD_REQUEST)


class RateLimitError(ClientError):
    def __init__(self, message: str, retry_after: int, headers: Dict[str, str]):
        self.retry_after = retry_after
        super().__init__(
            Error("RATE_LIMITED", message),
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            headers=headers,
        )

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["retryAfter"] = self.retry_after
        return payload


class NotFoundError(ClientError):
    def __init__(self, base_error: Optional[Error] = None):
        super().__init__(
            base_error or Error("USER_NOT_FOUND", "User not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
