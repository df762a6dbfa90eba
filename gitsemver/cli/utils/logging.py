import logging
import sys
from typing import Optional


logger = logging.getLogger("gitsemver")

_handler: Optional[logging.Handler] = None


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.

    Logs go to stderr so that the calculated version on stdout stays usable
    in shell substitutions.
    """
    global _handler

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(levelname)s %(name)s: %(message)s" if debug else "%(message)s"
    )
    handler.setFormatter(formatter)

    log_level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(log_level)

    # stderr may have been swapped since the last call (click's test runner)
    if _handler is not None:
        logger.removeHandler(_handler)
    logger.addHandler(handler)
    _handler = handler
