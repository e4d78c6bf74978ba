"""Structured logging setup for Storydeck.

The TUI owns the terminal, so log events go to a JSON-lines file instead of
stderr. The file lives in ``~/.cache/storydeck/logs`` unless STORYDECK_LOG_DIR
points elsewhere.
"""

import structlog
from pathlib import Path
from typing import Any, Optional
import os


LOG_FILE_NAME = "storydeck.log"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def default_log_dir() -> Path:
    """Directory for the log file, honouring STORYDECK_LOG_DIR."""
    env_dir = os.environ.get("STORYDECK_LOG_DIR")
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".cache" / "storydeck" / "logs"


def configure_logging(log_dir: Optional[Path] = None) -> Path:
    """
    Configure structlog for JSON logging to ``<log_dir>/storydeck.log``.

    Log level can be controlled via STORYDECK_LOG_LEVEL environment variable:
    - Set to "DEBUG" to follow every stage change and parse
    - Defaults to "INFO"; an unknown level also falls back to "INFO" and the
      fallback is itself logged as a warning

    Log levels:
    - DEBUG: Command text, document edits, per-section parse results
    - INFO: Stage transitions, submissions, dismissals
    - WARNING: Ignored configuration overrides
    - ERROR: Rejected operations that escaped a handler

    Args:
        log_dir: Directory for the log file (default: default_log_dir())

    Returns:
        Path of the log file events are appended to

    Example:
        # Follow a session's stage changes
        STORYDECK_LOG_LEVEL=DEBUG storydeck run
        tail -f ~/.cache/storydeck/logs/storydeck.log | jq .
    """
    log_dir = log_dir or default_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    requested_level = os.environ.get("STORYDECK_LOG_LEVEL", "INFO").strip().upper()
    log_level = requested_level if requested_level in VALID_LEVELS else "INFO"

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=log_file.open("a", encoding="utf-8")),
        cache_logger_on_first_use=True,
    )

    if log_level != requested_level:
        structlog.get_logger(__name__).warning(
            "log_level_invalid",
            requested=requested_level,
            using=log_level,
            valid=list(VALID_LEVELS),
        )

    return log_file


def get_logger(name: str) -> Any:
    """Get a structured logger bound to ``name`` (usually the module's __name__)."""
    return structlog.get_logger(name)
