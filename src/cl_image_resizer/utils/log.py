import os
import sys

from loguru import logger

LOG_LEVEL_ENV = "CL_IMAGE_RESIZER_LOG_LEVEL"
LOG_FORMAT = "<level>{level: <8}</level> | {message}"


def configure_logging(verbose: bool = False) -> int:
    """Replace loguru's default sink with a stderr sink for CLI use.

    The level is DEBUG when ``verbose``, otherwise INFO unless overridden by
    the ``CL_IMAGE_RESIZER_LOG_LEVEL`` environment variable.

    Returns:
        The id of the added sink
    """
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logger.remove()
    return logger.add(sys.stderr, level=level, format=LOG_FORMAT)
