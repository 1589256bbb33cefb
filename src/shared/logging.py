"""
Logging setup shared by the engine and the gateway.

Modules ask for their logger through ``setup_logging`` so the format is
identical everywhere.  The gateway's request middleware tags each HTTP
request with an ID from ``generate_correlation_id``.
"""

import logging
import uuid

LOG_FORMAT = "%(asctime)s  %(name)-28s  %(levelname)-7s  %(message)s"


def setup_logging(component: str, level: str = "INFO") -> logging.Logger:
    """
    Configure logging and return the logger for a component.

    Args:
        component: Dotted logger name (e.g. 'engine.camera').
        level: Log level string (e.g. 'INFO', 'DEBUG').

    Returns:
        Configured logger instance.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    return logging.getLogger(component)


def generate_correlation_id() -> str:
    """Generate a short ID used to tie together the log lines of one request."""
    return uuid.uuid4().hex[:12]
