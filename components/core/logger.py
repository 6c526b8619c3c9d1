"""Logging setup for the application."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled by the DEBUG setting on the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
