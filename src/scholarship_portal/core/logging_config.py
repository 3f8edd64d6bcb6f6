"""
Logging configuration for the Scholarship Portal API.

Modules log through ``logging.getLogger(__name__)``; this only sets up the
root handler and quiets noisy third-party loggers.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once at startup."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
