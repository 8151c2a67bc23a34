"""
Logging setup.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the package logger."""
    logger = logging.getLogger("autoparts")
    logger.setLevel(level.upper())
    if not any(getattr(h, "_autoparts", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._autoparts = True
        logger.addHandler(handler)
