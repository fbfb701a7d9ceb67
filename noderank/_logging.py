"""Centralized logging configuration for NodeRank."""

import logging

PACKAGE_LOGGER_NAME: str = "noderank"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``noderank``.

    All loggers are children of the ``noderank`` logger so that hosts
    can configure logging for the whole walker at once via
    ``logging.getLogger("noderank")``.

    Parameters
    ----------
    name : str
        Module name, typically passed as ``__name__``.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    short_name = name.rsplit(".", maxsplit=1)[-1]
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{short_name}")
