import logging
import os
from datetime import datetime
from typing import Optional

from .datatypes import Pathlike

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def setup_logger(
    log_filename: Optional[Pathlike] = None,
    log_level: str = "info",
    use_console: bool = True,
) -> logging.Logger:
    """Setup log level. Handlers added by a previous call are closed.

    Args:
      log_filename:
        The filename to save the log. A timestamp is appended to it.
        If None, nothing is saved to disk.
      log_level:
        The log level to use, e.g., "debug", "info", "warning", "error",
        "critical"
      use_console:
        True to also print logs to console.
    Returns:
      Return the logger of the package, which the other loggers of
      sadriver propagate to.
    """
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(filename)s:%(lineno)d] %(message)s"
    )
    level = _LOG_LEVELS.get(log_level.lower(), logging.ERROR)

    logger = logging.getLogger("sadriver")
    logger.setLevel(level)

    # Calling it again replaces the handlers of the previous call.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_filename is not None:
        date_time = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
        log_filename = f"{log_filename}-{date_time}"
        log_dir = os.path.dirname(log_filename)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_filename, mode="w")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if use_console:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(formatter)
        logger.addHandler(console)

    return logger
