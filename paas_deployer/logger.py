import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "paas_deployer"


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create console handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # Create colored formatter
    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )
    handler.setFormatter(formatter)

    if not logger.handlers:
        logger.addHandler(handler)
    else:
        for existing in logger.handlers:
            existing.setLevel(handler.level)

    return logger


def set_debug_mode(enabled: bool) -> None:
    """Reconfigure the shared logger level, e.g. from the --debug flag."""
    global DEBUG_MODE
    DEBUG_MODE = enabled
    setup_logger(debug_mode=enabled)
    if enabled:
        logger.debug("Debug mode is active.")


def print_stack_trace():
    """Log the current exception's stack trace when debug mode is enabled."""
    if DEBUG_MODE:
        logger.error(traceback.format_exc())


# Logger defaults to INFO unless reconfigured later.
DEBUG_MODE = False
logger = setup_logger(debug_mode=DEBUG_MODE)
