"""
logging_config.py
~~~~~~~~~~~~~~~~~

Logging setup for applications using the feedforward package.

The package itself only creates module loggers; call ``configure_logging``
from application code to see their output.
"""

import logging
from typing import Optional, Union

from .config import load_settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Set up logging for the feedforward package.

    Args:
        level: Logging level or level name. Defaults to
            ``FEEDFORWARD_LOG_LEVEL`` (``INFO`` when unset).
    """
    if level is None:
        level = load_settings().log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    logging.getLogger('feedforward').setLevel(level)
    # matplotlib is chatty at DEBUG
    logging.getLogger('matplotlib').setLevel(max(level, logging.WARNING))
