"""
Logging redaction helpers.
Redacts quote API tokens and sync credentials from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # Query string credentials: ?token=... / &auth=...
    (re.compile(r"(?i)([?&](?:token|auth)=)([^&\s'\"]+)"), r"\1[REDACTED]"),
    # Generic key/value pairs in messages or config dumps
    (re.compile(r"(?i)\b(auth_token|access_token|api[_-]?key)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; let the handler report it
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    """Attach the filter to the root logger and to its handlers."""
    root = logging.getLogger()
    for target in (root, *root.handlers):
        if any(isinstance(existing, RedactingFilter) for existing in target.filters):
            continue
        target.addFilter(RedactingFilter())
