"""Logging setup shared by the library and the command-line interface.

Library modules obtain their loggers through :func:`get_logger` and never
configure handlers themselves; the CLI calls :func:`setup_logging` once.
"""

import logging
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

ROOT_LOGGER_NAME = "schema_forge"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package root logger."""
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: str = "WARNING", log_file: Optional[str | Path] = None
) -> logging.Logger:
    """Configure console (rich) and optional file logging.

    Args:
        level: Log level name for the console handler.
        log_file: Optional path of a file receiving DEBUG-level records.

    Returns:
        The configured package root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)

    if _configured:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

    root.setLevel(logging.DEBUG)

    console_handler = RichHandler(
        level=getattr(logging, level.upper(), logging.WARNING),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(file_handler)

    _configured = True
    return root
