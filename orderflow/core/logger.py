"""
Logger lookup for orderflow modules.

Every module asks for its logger through get_logger(). By default that is a
standard library logger below the "orderflow" namespace; an application that
routes its logs elsewhere (structlog, loguru, a test double) can swap in its
own object with set_logger().

    from orderflow.core.logger import get_logger
    logger = get_logger(__name__)
"""

import logging
from typing import Any

_override: Any = None


def set_logger(logger: Any) -> None:
    """
    Route orderflow's module logging to the given object.

    The object needs debug/info/warning/error/exception methods. None
    restores the standard library loggers.
    """
    global _override
    _override = logger


def get_logger(name: str = "orderflow") -> Any:
    """Logger for name, or the object installed with set_logger()."""
    if _override is not None:
        return _override

    logger = logging.getLogger(name)
    # Silent unless the application configures handlers
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger
