"""Logging setup for entry points."""

import logging

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog.

    Args:
        level: Log level name (DEBUG, INFO, ...)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
    )
