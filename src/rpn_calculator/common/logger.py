"""Package-wide logger."""
import logging
import os

FORMAT = "[%(levelname)s - %(funcName)4s() ] %(message)s"
LOG_LEVEL_ENV = "RPN_CALCULATOR_LOG_LEVEL"


def _build_logger() -> logging.Logger:
    log = logging.getLogger("rpn_calculator")
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(FORMAT))
        log.addHandler(handler)
    log.setLevel(os.environ.get(LOG_LEVEL_ENV, "WARNING").upper())
    return log


logger = _build_logger()
