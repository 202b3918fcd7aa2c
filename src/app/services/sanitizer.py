"""
Input Sanitizer

Cleans free text before it is persisted and strips prototype-pollution
keys from JSON payloads.
"""

import re
from typing import Any

MAX_INPUT_LENGTH = 1000

FORBIDDEN_KEYS = frozenset({"__proto__", "constructor", "prototype"})

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>")


def sanitize_input(text: str) -> str:
    """
    Trim, drop <script> blocks and every other tag, cap at 1000 characters.

    Idempotent: sanitizing sanitized text returns it unchanged.
    """
    cleaned = _SCRIPT_BLOCK.sub("", text.strip())
    cleaned = _ANY_TAG.sub("", cleaned).strip()
    # A cut can land right after whitespace
    return cleaned[:MAX_INPUT_LENGTH].rstrip()


def sanitize_json(value: Any) -> Any:
    """
    Drop __proto__ / constructor / prototype keys from a decoded JSON value.

    A top-level object that carries one of those keys is rejected whole and
    replaced by {}; nested objects only lose the offending keys. Scalars pass
    through unchanged.
    """
    if isinstance(value, dict) and FORBIDDEN_KEYS.intersection(value.keys()):
        return {}
    return _strip_forbidden(value)


def _strip_forbidden(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            key: _strip_forbidden(item)
            for key, item in value.items()
            if key not in FORBIDDEN_KEYS
        }
    if isinstance(value, (list, tuple)):
        return [_strip_forbidden(item) for item in value]
    return value
