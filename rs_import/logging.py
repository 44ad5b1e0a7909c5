"""Logging helpers. All loggers are children of the ``rs_import`` logger."""

import logging
import os
from typing import Optional, Union

_ROOT_LOGGER_NAME = "rs_import"
_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``rs_import`` namespace.

    Parameters
    ----------
    name : str
        Component name, e.g. ``"Pipeline"`` or a module ``__name__``.

    Returns
    -------
    logging.Logger
        The logger ``rs_import.<name>``; module names already under the namespace are used
        unchanged.
    """
    if name == _ROOT_LOGGER_NAME or name.startswith(_ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the ``rs_import`` logger and set its level.

    Calling this more than once only updates the level.

    Parameters
    ----------
    level : Optional[Union[int, str]]
        Logging level. Defaults to the ``RS_IMPORT_LOG_LEVEL`` environment variable, or
        ``INFO`` if it is unset.

    Returns
    -------
    logging.Logger
        The configured ``rs_import`` root logger.
    """
    global _handler

    if level is None:
        level = os.environ.get("RS_IMPORT_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = level.upper()

    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(_handler)
    return logger
