"""Logging setup.

All application loggers live under the ``blogify`` namespace and share a
single Rich console handler installed by :func:`setup_logging`.
"""

import logging

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "blogify"


def setup_logging(level: str = "INFO") -> None:
    """Install the console handler on the root application logger.

    Safe to call repeatedly; previous handlers are replaced.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = RichHandler(
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the application namespace."""
    if name.startswith("src."):
        name = name[len("src."):]
    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
