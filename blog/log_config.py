"""Logging setup for the blog tools.

Usage:
    from blog.log_config import setup_logging
    setup_logging("DEBUG")   # Call once at startup
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Set the root log level and make sure a stderr handler exists."""
    root = logging.getLogger()
    root.setLevel(_parse_level(level))

    # Test runners and host applications may already have added a handler
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured (root=%s)", level)


def _parse_level(level: str) -> int:
    """Convert a level name such as 'DEBUG' to its int value; unknown names fall back to INFO."""
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO
