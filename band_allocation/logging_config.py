"""Logging setup for the API.

``setup_logging`` attaches a single console handler to the root logger.
Lambda already installs a handler on the root logger, in which case only
the level is adjusted.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once."""
    logger = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    if logger.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
