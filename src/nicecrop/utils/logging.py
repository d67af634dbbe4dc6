"""
Logging utilities for the nicecrop library.

Library code only ever calls ``get_logger(__name__)``. Standalone scripts and
demos may call ``configure_logging()`` to get output on stderr. When nicecrop
is imported by an application that configured logging, its logs go to that
application's handlers.

nicecrop does NOT write any log files.

Example Usage
-------------
In library code:
    ```python
    from nicecrop.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("session ready")
    ```

In standalone examples/scripts:
    ```python
    from nicecrop.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "NICECROP_LOG_LEVEL"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the nicecrop logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the NICECROP_LOG_LEVEL
        env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to ``DEFAULT_FMT``.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr handler is already installed.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger("nicecrop")
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'nicecrop' package logger.
    """
    if name is None:
        name = "nicecrop"
    return logging.getLogger(name)
