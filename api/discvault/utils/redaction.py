"""Redaction helpers for outbound request diagnostics."""

from __future__ import annotations

import re
from typing import Mapping

_URL_USERINFO_RE = re.compile(r"([a-z][a-z0-9+.-]*://)([^@/]+)@", re.IGNORECASE)
_QUERY_SECRET_RE = re.compile(r"(?i)(token|secret|password|api_key|apikey|access_token)=([^&\s]+)")
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([A-Za-z0-9._~-]+)")
SENSITIVE_PARAMS = frozenset({"api_key", "apikey", "token", "access_token", "password"})
SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def redact_secrets(text: str) -> str:
    """Redact common secret patterns from a log string."""
    if not text:
        return text
    redacted = _URL_USERINFO_RE.sub(r"\1***@", text)
    redacted = _QUERY_SECRET_RE.sub(r"\1=***", redacted)
    return _BEARER_RE.sub(r"\1***", redacted)


def redact_mapping(values: Mapping[str, object] | None, sensitive: frozenset[str] = SENSITIVE_PARAMS) -> dict:
    """Copy query params or headers with secret values masked."""
    if not values:
        return {}
    return {key: "***" if key.lower() in sensitive else value for key, value in values.items()}
