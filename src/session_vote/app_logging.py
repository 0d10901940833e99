"""Logging configuration helpers."""

import logging

LOGGER_NAME = "session_vote"


def configure_logging(level: str = "INFO", backend: str | None = None) -> None:
    """Attach one stream handler to the service logger.

    Repeated calls only adjust the level and the backend tag, so app
    factories can be called many times (as tests do) without duplicating
    output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    logger.propagate = False
    tag = f"vote/{backend}" if backend else "vote"
    formatter = logging.Formatter(
        f"%(asctime)s %(levelname)s [{tag}] %(name)s: %(message)s"
    )
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    for handler in logger.handlers:
        handler.setFormatter(formatter)
