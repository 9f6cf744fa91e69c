import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from replaymitt.constants import get_data_directory


def clean_old_logs(log_dir: Path, max_files: int = 5):
    """Remove the oldest *.log files in `log_dir` until `max_files` remain

    Args:
        log_dir (Path): Directory holding the log files. A missing directory is ignored.
        max_files (int, optional): Number of log files to keep. Defaults to 5.
    """
    log_files = sorted(log_dir.glob("*.log"), key=os.path.getmtime)
    while len(log_files) > max_files:
        log_files.pop(0).unlink()


class CustomFormatter(logging.Formatter):
    def format(self, record):
        record.levelname = record.levelname.ljust(8)
        return super().format(record)


def configure_logger(
    log_level: int = logging.DEBUG, log_dir: Path | None = None, max_log_files: int = 5
) -> Path:
    """Route emitter logs to a timestamped file and the console

    The file gets the full timestamped format, the console a short one. Loggers that
    already exist (the replaymitt.* module loggers included) are pointed at the same
    handlers and level.

    Args:
        log_level (int): Level to log at. Defaults to logging.DEBUG.
        log_dir (Path | None): Where to store the logs. Defaults to <data directory>/logs.
        max_log_files (int): Keeps only the previous (n) log files. Defaults to 5.

    Returns:
        Path: The file being logged to.
    """
    if log_dir is None:
        log_dir = Path(get_data_directory()) / "logs"

    log_dir.mkdir(exist_ok=True, parents=True)
    clean_old_logs(log_dir=log_dir, max_files=max_log_files)

    log_filename = log_dir / datetime.now().strftime("%Y-%m-%d_%H-%M-%S.log")
    file_handler = logging.handlers.RotatingFileHandler(
        log_filename, maxBytes=10 * 1024**2, backupCount=5
    )
    file_handler.setFormatter(
        CustomFormatter("[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%d.%m.%Y %H:%M:%S")
    )
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

    logging.basicConfig(level=log_level, handlers=[file_handler, stream_handler], force=True)

    for name in logging.root.manager.loggerDict:
        logger = logging.getLogger(name)
        if isinstance(logger, logging.Logger):
            logger.handlers.clear()
            logger.setLevel(log_level)
            # Records reach the root handlers through propagation
            logger.propagate = True

    return log_filename
