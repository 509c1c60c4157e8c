"""
Logging configuration for onboarding agents.

Provides structured logging with consistent levels and formatting for the
agents, the orchestrator and the engine facade.
"""

import logging
import os
import sys
from typing import Optional, Tuple

LOGGER_PREFIX = "onboarding"


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s [%(levelname)8s] [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def configure_agent_logging(
    agent_name: str,
    level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure structured logging for an onboarding component.

    Args:
        agent_name: Name of the component (e.g., "hr", "orchestrator")
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging (defaults to stderr only)

    Returns:
        Configured logger instance

    Example:
        >>> logger = configure_agent_logging("hr", "DEBUG")
        >>> logger.info("Agent started")
    """
    logger = logging.getLogger(f"{LOGGER_PREFIX}.{agent_name}")

    # Avoid duplicate handlers if already configured
    if logger.handlers:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = _formatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Don't propagate to root logger (avoid duplicate messages)
    logger.propagate = False

    return logger


def get_logger(agent_name: str) -> logging.Logger:
    """
    Get or create a logger for a component.

    Auto-configures the first time a name is seen, from apply_logging_settings()
    if it has been called, otherwise from the environment.
    """
    logger = logging.getLogger(f"{LOGGER_PREFIX}.{agent_name}")

    if not logger.handlers:
        level, log_file = _settings or configure_from_environment()
        logger = configure_agent_logging(agent_name, level, log_file)

    return logger


def configure_from_environment() -> Tuple[str, Optional[str]]:
    """Read log level and log file from ONBOARDING_LOG_LEVEL / ONBOARDING_LOG_FILE."""
    log_level = os.environ.get("ONBOARDING_LOG_LEVEL", "INFO")
    log_file = os.environ.get("ONBOARDING_LOG_FILE")
    return log_level, log_file


# Process-wide settings from the engine config; None until applied
_settings: Optional[Tuple[str, Optional[str]]] = None


def apply_logging_settings(level: str = "INFO", log_file: Optional[str] = None):
    """
    Apply a level (and optional log file) to every onboarding logger.

    Loggers created later pick the same settings up through get_logger().
    """
    global _settings
    _settings = (level, log_file)

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    for name, logger in logging.root.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger) or not name.startswith(f"{LOGGER_PREFIX}."):
            continue
        logger.setLevel(numeric_level)
        if log_file and not any(
            isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(log_file)
            for h in logger.handlers
        ):
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(_formatter())
            logger.addHandler(file_handler)
