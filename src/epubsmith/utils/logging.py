import logging
import sys
from typing import Optional


def setup_logging(debug: bool = False, level: Optional[int] = None) -> None:
    """
    Configure root logging for the application.

    Args:
        debug: If True, sets log level to DEBUG; otherwise INFO.
        level: Optional explicit level to override debug flag.
    """
    log_level = level if level is not None else (logging.DEBUG if debug else logging.INFO)

    # Clear existing handlers to avoid duplicate logs if setup is called multiple times
    root = logging.getLogger()
    if root.handlers:
        for h in list(root.handlers):
            root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stdout)
    # Debug runs show where a message came from; normal runs stay short
    fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    if log_level <= logging.DEBUG:
        fmt = "%(asctime)s %(levelname)s %(name)s:%(lineno)d - %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))

    root.setLevel(log_level)
    root.addHandler(handler)

    # Library warnings (lxml, bs4) end up in the same stream as our own messages
    logging.captureWarnings(True)
