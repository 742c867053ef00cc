"""Redaction of sensitive values in free-form metadata before it is persisted.

Keys are matched case-insensitively by substring against SENSITIVE_KEY_PATTERNS,
recursively through nested dicts and lists. Values under a matching key are
replaced wholesale with REDACTED, whatever their type.
"""

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "[REDACTED]"

SENSITIVE_KEY_PATTERNS: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "credential",
    "api_key",
    "apikey",
    "authorization",
    "cookie",
    "session",
    "private_key",
    "client_secret",
)

_NORMALIZE_RE = re.compile(r"[\s\-]+")


def _normalize_key(key: str) -> str:
    """Lowercase and fold '-' / whitespace to '_' so X-Api-Key matches api_key."""
    return _NORMALIZE_RE.sub("_", key.strip().lower())


def is_sensitive_key(key: Any) -> bool:
    """Return True if the key name looks like it holds a credential, token or secret."""
    if not isinstance(key, str):
        return False
    normalized = _normalize_key(key)
    return any(pattern in normalized for pattern in SENSITIVE_KEY_PATTERNS)


def redact_sensitive(value: Any) -> Any:
    """Return a copy of value with sensitive keys redacted at any depth.

    Args:
        value: A JSON-like structure (dict, list, tuple, scalar).

    Returns:
        Structure of the same shape; input is never mutated.
    """
    if isinstance(value, Mapping):
        return {
            key: REDACTED if is_sensitive_key(key) else redact_sensitive(item)
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [redact_sensitive(item) for item in value]
    return value
