"""
Logging factory and handlers
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

from taskchain.config import LOG_LEVELS, config

_FILE_HANDLER_NAME = "taskchain"
_RICH_HANDLER_NAME = "taskchain_rich"


def init_logger(
    name: str,
    log_dir: Path | None | Literal[False] = None,
    level: LOG_LEVELS | None = None,
    file_level: LOG_LEVELS | None = None,
    log_file_n: int | None = None,
    log_file_size: int | None = None,
    width: int | None = None,
) -> logging.Logger:
    """
    Make a logger.

    Log to a set of rotating files in the ``log_dir`` according to ``name`` ,
    as well as using the :class:`~rich.RichHandler` for pretty-formatted stdout logs.

    Handlers live on the root ``taskchain`` logger, so calling this repeatedly
    (once per module) only adjusts their levels rather than stacking duplicates.

    Args:
        name (str): Name of this logger. Ideally names are hierarchical
            and indicate what they are logging for, eg. ``taskchain.ledger.gateway``
            and don't contain metadata like timestamps, etc. (which are in the logs)
        log_dir (:class:`pathlib.Path`): Directory to store file-based logs in. If ``None``,
            get from :class:`.Config`. If ``False`` , disable file logging.
        level (:class:`.LOG_LEVELS`): Level to use for stdout logging. If ``None`` ,
            get from :class:`.Config`
        file_level (:class:`.LOG_LEVELS`): Level to use for file-based logging.
             If ``None`` , get from :class:`.Config`
        log_file_n (int): Number of rotating file logs to use.
            If ``None`` , get from :class:`.Config`
        log_file_size (int): Maximum size of logfiles before rotation.
            If ``None`` , get from :class:`.Config`
        width (int, None): Explicitly set width of rich stdout console.
            If ``None`` , get from :class:`.Config`

    Returns:
        :class:`logging.Logger`
    """
    if log_dir is None:
        log_dir = config.logs.dir
    if level is None:
        level = (
            config.logs.level_stdout if config.logs.level_stdout is not None else config.logs.level
        )
    if file_level is None:
        file_level = (
            config.logs.level_file if config.logs.level_file is not None else config.logs.level
        )
    if log_file_n is None:
        log_file_n = config.logs.file_n
    if log_file_size is None:
        log_file_size = config.logs.file_size
    if width is None:
        width = config.logs.width

    # set our logger to the minimum of the levels so that it always handles at least that severity
    # even if one or the other handlers might not.
    min_level = min([getattr(logging, level), getattr(logging, file_level)])

    if not name.startswith("taskchain"):
        name = "taskchain." + name

    _init_root(
        stdout_level=level,
        file_level=file_level,
        log_dir=log_dir,
        log_file_n=log_file_n,
        log_file_size=log_file_size,
        width=width,
    )

    logger = logging.getLogger(name)
    logger.setLevel(min_level)

    return logger


def _init_root(
    stdout_level: LOG_LEVELS,
    file_level: LOG_LEVELS,
    log_dir: Path | Literal[False],
    log_file_n: int = 5,
    log_file_size: int = 2**22,
    width: int | None = None,
) -> None:
    root_logger = logging.getLogger("taskchain")

    root_logger.handlers = [
        h for h in root_logger.handlers if h.name in (_RICH_HANDLER_NAME, _FILE_HANDLER_NAME)
    ]

    file_handlers = [
        handler for handler in root_logger.handlers if isinstance(handler, RotatingFileHandler)
    ]
    stream_handlers = [
        handler for handler in root_logger.handlers if isinstance(handler, RichHandler)
    ]

    if log_dir is not False and not file_handlers:
        root_logger.addHandler(
            _file_handler(
                _FILE_HANDLER_NAME,
                file_level,
                log_dir,
                log_file_n,
                log_file_size,
            )
        )
    else:
        for file_handler in file_handlers:
            file_handler.setLevel(file_level)

    if not stream_handlers:
        root_logger.addHandler(_rich_handler(stdout_level, name=_RICH_HANDLER_NAME, width=width))
    else:
        for stream_handler in stream_handlers:
            stream_handler.setLevel(stdout_level)

    # prevent propagation to the default root
    root_logger.propagate = False


def _file_handler(
    name: str,
    file_level: LOG_LEVELS,
    log_dir: Path,
    log_file_n: int = 5,
    log_file_size: int = 2**22,
) -> RotatingFileHandler:
    # See init_logger for arg docs

    filename = Path(log_dir) / ".".join([name, "log"])
    file_handler = RotatingFileHandler(
        str(filename), mode="a", maxBytes=log_file_size, backupCount=log_file_n
    )
    file_handler.name = name
    file_formatter = logging.Formatter("[%(asctime)s] %(levelname)s [%(name)s]: %(message)s")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(file_formatter)
    return file_handler


def _rich_handler(level: LOG_LEVELS, name: str, width: int | None = None) -> RichHandler:
    # stderr, so the CLI can keep stdout for json output
    console = Console(stderr=True)
    if width:
        console.width = width

    rich_handler = RichHandler(console=console, rich_tracebacks=True, markup=False)
    rich_handler.name = name
    rich_formatter = logging.Formatter(
        r"[%(name)s] %(message)s",
        datefmt="[%y-%m-%dT%H:%M:%S]",
    )
    rich_handler.setFormatter(rich_formatter)
    rich_handler.setLevel(level)
    return rich_handler
