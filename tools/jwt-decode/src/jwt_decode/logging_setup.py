"""
Logging configuration for the jwt-decode CLI.

Provides a console handler (WARNING by default, DEBUG when verbose) and an
optional file handler (always DEBUG).  Tokens and secrets are never passed
to the loggers.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def setup_logging(verbose: bool = False, log_file: str = "") -> Optional[str]:
    """Configure the root logger.

    - Console handler: WARNING+ by default.  When *verbose* is True the
      console level drops to DEBUG.
    - File handler: only when *log_file* is given; always DEBUG.

    Returns the path to the log file, or None when logging to console only.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers (e.g. from basicConfig)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_fmt = logging.Formatter(
        "%(levelname)-8s  %(message)s" if not verbose
        else "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_fmt)
    root_logger.addHandler(console_handler)

    if not log_file:
        return None

    log_dir = os.path.dirname(os.path.abspath(log_file))
    os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(file_handler)

    return log_file
