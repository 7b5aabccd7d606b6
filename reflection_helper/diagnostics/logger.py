"""Python logging setup for Reflection Helper.

The diagnostics sink mirrors its lines to the ``reflection_helper`` logger;
this module only decides where that logger's records end up.
"""

import logging


def setup_logging(level: str = "INFO", quiet_sink: bool = False) -> None:
    """Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        quiet_sink: Only show sink errors, not successful accesses
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if quiet_sink:
        logging.getLogger("reflection_helper").setLevel(logging.WARNING)
    else:
        logging.getLogger("reflection_helper").setLevel(logging.NOTSET)
