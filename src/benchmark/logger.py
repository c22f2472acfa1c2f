"""Structured benchmark logging (timestamp, structure, operation, etc.)."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FILE_PATH = Path(__file__).parent.parent.parent / "logs/benchmark.log"
_LOG_LEVEL = logging.INFO

_file_handler: Optional[logging.Handler] = None


def setup_logging(
    log_file_path: Path = LOG_FILE_PATH,
    level: int = _LOG_LEVEL,
) -> None:
    """Configure the root logger to write to a rotating log file.

    Any handler previously installed by this function is replaced.

    Args:
        log_file_path (Path): The file the log records are written to.
        level (int): The minimum level of the records to keep.

    """
    global _file_handler

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()

    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        "level=%(levelname)s | time=%(asctime)s | process=%(process)d | "
        "module=%(module)s | funcName=%(funcName)s | "
        "lineno=%(lineno)d | message=%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    _file_handler = file_handler


def shutdown_logging() -> None:
    """Flush and detach the handler installed by setup_logging()."""
    global _file_handler
    if _file_handler is not None:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def log(
    structure: str,
    operation: str,
    operations_count: int,
    execution_time_ms: float,
) -> None:
    """Log the details of a measured operation using the configured
    logging system.

    Args:
        structure (str): The name of the benchmarked structure.
        operation (str): The measured operation.
        operations_count (int): How many times the operation was run.
        execution_time_ms (float): The total execution time in milliseconds.

    """
    logging.info(
        "Structure: %s, Operation: %s, Count: %d, Execution Time: %.2f ms",
        structure,
        operation,
        operations_count,
        execution_time_ms,
    )
