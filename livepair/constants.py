"""
File extension constants and naming settings for Live Photo repair.
"""

import logging
from typing import Optional

from rich.console import Console

PROGRAM = "livepair"

# File extension constants
HEIC_EXTENSIONS = (".heic",)
JPG_EXTENSIONS = (".jpg", ".jpeg")
MOVIE_EXTENSIONS = (".mov",)
STILL_EXTENSIONS = HEIC_EXTENSIONS + JPG_EXTENSIONS
VALID_EXTENSIONS = STILL_EXTENSIONS + MOVIE_EXTENSIONS

# Device naming scheme
SIDECAR_PREFIX = "._"
CAPTURE_PREFIX = "IMG_"
PREFIX_LENGTH = 8

# Output layout
QUARANTINE_NAME = "Other"
VERSIONED_SUFFIX = "APPLE"
FIRST_VERSION = 100
CANONICAL_MOVIE_EXTENSION = ".mov"

_console: Optional[Console] = None


def get_console() -> Console:
    """Shared rich console for log handlers and reports."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def get_logger(name: str = PROGRAM) -> logging.Logger:
    """Get the program logger, or a child of it."""
    return logging.getLogger(name)
