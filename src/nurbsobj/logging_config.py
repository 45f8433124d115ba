"""
Logging Configuration
=====================
Sets up the `nurbsobj` logger for applications embedding the codec.

What the codec logs:
    INFO     Start and completion of every `ObjIOManager` save or load.
    DEBUG    Decoded record summaries (degrees, control point counts,
             rationality), ignored directives such as comments or an
             unsupported `cstype`, and surface records cut short by a
             blank line.
    WARNING  Surfaces with an empty control point grid, written as an
             empty file.
    ERROR    Failed saves and loads, with traceback, before the error is
             re-raised to the caller.
"""
import logging
import sys
from typing import Optional


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'nurbsobj' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("nurbsobj")
    logger.setLevel(level)

    # Replace our own handlers when called again; handlers on the root
    # logger belong to the host application
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
