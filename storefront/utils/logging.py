# storefront/utils/logging.py
import logging
import os

from rich.logging import RichHandler


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger z RichHandlerem; DEBUG gdy ustawiona zmienna środowiskowa DEBUG."""
    logger = logging.getLogger(name or "storefront")
    level = logging.DEBUG if os.getenv("DEBUG") else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = RichHandler(
            show_time=True,
            show_level=True,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("[%(name)s]  %(message)s"))
        handler.setLevel(level)
        logger.addHandler(handler)
        logger.propagate = False

    return logger
