"""Logging setup with bearer token redaction.

SDK modules log through ``logging.getLogger(__name__)``; this module only
provides an opt-in stdout configuration for applications and scripts
that do not configure logging themselves.
"""

import logging
import re
import sys
from typing import Optional

BEARER_PATTERN = re.compile(r"Bearer\s+[A-Za-z0-9._~+/=-]+", re.IGNORECASE)

# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def redact(text: str) -> str:
    """Replace bearer tokens in ``text`` with a placeholder."""
    return BEARER_PATTERN.sub("Bearer [REDACTED]", text)


class RedactingFormatter(logging.Formatter):
    """Formatter that strips bearer tokens from rendered messages."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def setup_logging(level: Optional[str] = None) -> None:
    """Configure a stdout handler for the ``twitter_ads`` logger.

    Safe to call more than once; only the first call installs a handler.

    :param level: Logging level name, defaults to ``settings.log_level``
    :type level: Optional[str]
    """
    global _LOGGING_CONFIGURED

    if level is None:
        from ..config.settings import settings

        level = settings.log_level

    sdk_logger = logging.getLogger("twitter_ads")
    sdk_logger.setLevel(getattr(logging, level.upper()))

    if _LOGGING_CONFIGURED:
        sdk_logger.debug("Logging already configured, skipping duplicate setup")
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        RedactingFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    sdk_logger.addHandler(handler)
    _LOGGING_CONFIGURED = True
