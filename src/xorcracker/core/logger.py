from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
    }
)

ROOT_LOGGER = "xorcracker"


def configure_logging(level: str = "WARNING", *, log_file: str | Path | None = None) -> logging.Logger:
    """
    Attach a Rich console handler (stderr) and an optional plain-text file handler
    to the package logger. Safe to call repeatedly; old handlers are closed and dropped.
    """
    lvl = getattr(logging, level.upper(), None)
    if not isinstance(lvl, int):
        raise ValueError(f"Unknown log level '{level}'.")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(lvl)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = Console(theme=_LOG_THEME, stderr=True)
    logger.addHandler(
        RichHandler(
            level=lvl,
            console=console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
    )

    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S%z",
            )
        )
        logger.addHandler(fh)

    return logger
