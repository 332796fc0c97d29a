"""Configuration for the word budget and markdown build tools.

The word budget constants are fixed. Build paths, the watch interval and
the log level come from the environment, optionally seeded from a `.env`
file in the working directory.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def float_setting(name: str, default: float) -> float:
    """Read a float environment variable, falling back to `default`."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


# Word budget
TARGET_WORDS = 2700
CODE_LINE_WEIGHT = 15  # words per code line

# Markdown build
MARKDOWN_SOURCE = os.environ.get("MARKDOWN_SOURCE", "README.md")
MARKDOWN_DEST = os.environ.get("MARKDOWN_DEST", "README.html")
MARKDOWN_TEMPLATE = os.environ.get("MARKDOWN_TEMPLATE", "template.html")
WATCH_INTERVAL = float_setting("WATCH_INTERVAL", 1.0)  # seconds

LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")


def log_level(name: str | int) -> int:
    """Map a level name to its number; unknown names mean WARNING."""
    if isinstance(name, int):
        return name
    return logging.getLevelNamesMapping().get(name.strip().upper(), logging.WARNING)


def configure_logging(level: str | int = LOG_LEVEL) -> None:
    """Send log records to stderr; stdout is reserved for reports."""
    logging.basicConfig(
        level=log_level(level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
