import logging
import os
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handlers = []


def configure_logging(level: str = "info", log_file: Optional[str] = None) -> logging.Logger:
    """Log to stderr and, when ``log_file`` is set, to that file.

    stdout is left alone because the stdio MCP transport owns it. Calling
    this again replaces the handlers installed by the previous call.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    while _handlers:
        handler = _handlers.pop()
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    _handlers.append(console)

    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        _handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in _handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root
