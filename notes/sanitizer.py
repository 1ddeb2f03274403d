"""
Text sanitization helpers.

Topic prose is stored as plain text and every string pushed over the
WebSocket is stripped of markup, so both go through bleach with an empty
allow-list.
"""

import html
import logging
import re
from typing import Any

import bleach

logger = logging.getLogger(__name__)

JAVASCRIPT_RE = re.compile(r'javascript\s*:', re.IGNORECASE)


class Sanitizer:
    """Strips ALL HTML tags and attributes using bleach."""

    ALLOWED_TAGS = []
    ALLOWED_ATTRIBUTES = {}

    @staticmethod
    def sanitize_string(value: str) -> str:
        if not isinstance(value, str):
            return value

        cleaned = Sanitizer.to_plain_text(value)

        if JAVASCRIPT_RE.search(cleaned):
            logger.warning(f"[SANITIZER] Potential XSS detected and blocked: {value[:100]}")
            cleaned = JAVASCRIPT_RE.sub('', cleaned)

        return cleaned

    @staticmethod
    def to_plain_text(value: str) -> str:
        """Strip markup for storage; entities are decoded since templates escape on output."""
        if not value:
            return ''
        cleaned = bleach.clean(
            value,
            tags=Sanitizer.ALLOWED_TAGS,
            attributes=Sanitizer.ALLOWED_ATTRIBUTES,
            strip=True,
        )
        return html.unescape(cleaned)

    @staticmethod
    def sanitize_data(data: Any) -> Any:
        """Recursively sanitize strings inside dicts and lists."""
        if isinstance(data, dict):
            return {key: Sanitizer.sanitize_data(value) for key, value in data.items()}
        if isinstance(data, (list, tuple)):
            return [Sanitizer.sanitize_data(item) for item in data]
        if isinstance(data, str):
            return Sanitizer.sanitize_string(data)
        return data
