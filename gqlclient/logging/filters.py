"""
Custom logging filters for gqlclient.

Credential masking for log records.
"""

import logging
import re
from typing import List, Pattern, Tuple


class SensitiveDataFilter(logging.Filter):
    """Filter to mask credentials in log messages."""

    def __init__(self) -> None:
        """Initialize sensitive data filter."""
        super().__init__()

        self.rules: List[Tuple[Pattern[str], str]] = [
            # Bearer tokens
            (re.compile(r"(bearer\s+)([A-Za-z0-9\-._~+/]+=*)", re.IGNORECASE), r"\1***MASKED***"),
            # Authorization header values
            (
                re.compile(r"(authorization[\"']?\s*[:=]\s*[\"']?(?:(?:basic|token)\s+)?)(?!bearer\s)([^\s\"',}]+)", re.IGNORECASE),
                r"\1***MASKED***",
            ),
            # API keys, tokens and secrets
            (
                re.compile(r"((?:api[_-]?key|token|secret)[\"']?\s*[:=]\s*[\"']?)([^\s\"',}]+)", re.IGNORECASE),
                r"\1***MASKED***",
            ),
            # URLs with credentials
            (re.compile(r"(https?://[^:/\s]+):([^@/\s]+)@", re.IGNORECASE), r"\1:***MASKED***@"),
        ]

    def mask(self, message: str) -> str:
        """Return ``message`` with every credential masked."""
        for pattern, replacement in self.rules:
            message = pattern.sub(replacement, message)
        return message

    def filter(self, record: logging.LogRecord) -> bool:
        """Mask sensitive data in the record's message; never drops records."""
        message = record.getMessage()
        masked = self.mask(message)
        if masked != message:
            record.msg = masked
            record.args = ()
        return True


