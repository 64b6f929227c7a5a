"""Security utilities for log output.

Keeps credentials and raw user identifiers out of log lines.
"""

import hashlib
import re
import urllib.parse

# Sensitive patterns that should be filtered from logs
SENSITIVE_PATTERNS = [
    "password=",
    "token=",
    "secret=",
    "xoxb-",
    "xoxp-",
    "xapp-",
    "redis://",
    "rediss://",
]


def redact_url(url: str) -> str:
    """Mask the password of a connection URL.

    Args:
        url: Connection URL, possibly with credentials

    Returns:
        URL with the password replaced by '***'

    Example:
        >>> redact_url("redis://:hunter2@cache:6379/0")
        'redis://:***@cache:6379/0'
    """
    if not url:
        return url

    parts = urllib.parse.urlsplit(url)
    if parts.password is None:
        return url

    userinfo = f"{parts.username or ''}:***"
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urllib.parse.urlunsplit(parts._replace(netloc=f"{userinfo}@{host}"))


def hash_user_id(user_id: str) -> str:
    """Create a consistent hash for a user id (for logging without exposing it).

    Args:
        user_id: Platform member id

    Returns:
        12-character hex hash of the id, or 'unknown' for empty ids
    """
    if not user_id:
        return "unknown"
    return hashlib.sha256(user_id.encode()).hexdigest()[:12]


def filter_sensitive_content(text: str) -> str:
    """Filter sensitive information from logs.

    Args:
        text: The text to filter

    Returns:
        Filtered text with sensitive content redacted

    Example:
        >>> filter_sensitive_content("token=xoxb-123")
        '[REDACTED DUE TO SENSITIVE CONTENT]'
    """
    if not text:
        return text

    lowered = text.lower()
    if any(pattern in lowered for pattern in SENSITIVE_PATTERNS):
        return "[REDACTED DUE TO SENSITIVE CONTENT]"

    # Long alphanumeric runs look like API keys/tokens
    return re.sub(r"[A-Za-z0-9\-_]{32,}", "[API_KEY_REDACTED]", text)
