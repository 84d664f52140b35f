import logging
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

from taskchain.logging import init_logger


def test_init_logger_namespace(tmp_path):
    """
    Loggers are nested under the taskchain root logger
    """
    logger = init_logger("ledger.test", log_dir=tmp_path)
    assert logger.name == "taskchain.ledger.test"
    assert init_logger("taskchain.advice.test", log_dir=tmp_path).name == "taskchain.advice.test"


def test_init_logger_no_duplicate_handlers(tmp_path):
    """
    Making many loggers doesn't stack handlers on the root logger
    """
    for i in range(5):
        init_logger(f"dup{i}", log_dir=tmp_path)

    root = logging.getLogger("taskchain")
    assert len([h for h in root.handlers if isinstance(h, RichHandler)]) == 1
    assert len([h for h in root.handlers if isinstance(h, RotatingFileHandler)]) == 1


def test_init_logger_levels(tmp_path):
    """
    The logger handles the lower of the stdout and file levels,
    and repeated calls update the handler levels
    """
    logger = init_logger("levels", log_dir=tmp_path, level="WARNING", file_level="DEBUG")
    assert logger.level == logging.DEBUG

    root = logging.getLogger("taskchain")
    [rich_handler] = [h for h in root.handlers if isinstance(h, RichHandler)]
    assert rich_handler.level == logging.WARNING

    init_logger("levels", log_dir=tmp_path, level="ERROR", file_level="ERROR")
    assert rich_handler.level == logging.ERROR
    assert logger.level == logging.ERROR
