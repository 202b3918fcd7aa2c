"""
Password Service

Hashing, verification and strength rules for account passwords, plus
random tokens for out-of-band flows (password reset links).
"""

import re
import secrets
import string
from typing import List

import bcrypt
from pydantic import BaseModel, Field

from src.domain.errors import HashingError

BCRYPT_ROUNDS = 12
# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128

COMMON_PASSWORDS = (
    "password",
    "123456",
    "123456789",
    "qwerty",
    "abc123",
    "password123",
    "admin",
    "letmein",
    "welcome",
    "monkey",
)

TOKEN_ALPHABET = string.ascii_letters + string.digits

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"\d")

# Compared against when the stored hash is unusable, so a broken row costs
# the same as a wrong password.
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


class PasswordStrengthResult(BaseModel):
    """Outcome of a strength check; errors keep rule order"""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a password with bcrypt (cost factor 12).

    Raises:
        HashingError: the bcrypt library failed
    """
    try:
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(BCRYPT_ROUNDS))
    except (ValueError, TypeError) as exc:
        raise HashingError("Password hashing failed") from exc
    return hashed.decode("utf-8")


def validate_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash in constant time."""
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        bcrypt.checkpw(_encode(password), _DUMMY_HASH)
        return False


def verify_dummy_password(password: str) -> None:
    """Burn one bcrypt comparison when there is no user to check against."""
    bcrypt.checkpw(_encode(password), _DUMMY_HASH)


def validate_password_strength(password: str) -> PasswordStrengthResult:
    """
    Evaluate every strength rule and collect all violations.

    Rules never short-circuit: a password that is short, has no digit and
    contains "admin" reports all three problems.
    """
    errors: List[str] = []

    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append("Password must be at least 8 characters long")

    if len(password) > MAX_PASSWORD_LENGTH:
        errors.append("Password must be less than 128 characters long")

    if not _LOWERCASE.search(password):
        errors.append("Password must contain at least one lowercase letter")

    if not _UPPERCASE.search(password):
        errors.append("Password must contain at least one uppercase letter")

    if not _DIGIT.search(password):
        errors.append("Password must contain at least one number")

    lowered = password.lower()
    if any(common in lowered for common in COMMON_PASSWORDS):
        errors.append("Password is too common. Please choose a more secure password")

    return PasswordStrengthResult(is_valid=not errors, errors=errors)


def generate_token(length: int = 32) -> str:
    """Random alphanumeric token from a cryptographically secure source."""
    return "".join(secrets.choice(TOKEN_ALPHABET) for _ in range(length))


def is_email_allowed(email: str, blocked_domains) -> bool:
    """False when the email's domain contains one of the blocked domains."""
    _, _, domain = email.rpartition("@")
    domain = domain.lower()
    if not domain:
        return True
    return not any(blocked.lower() in domain for blocked in blocked_domains)
