import logging
import logging.handlers
import os
from datetime import datetime
from pathlib import Path

from schooldesk.constants import PACKAGE
from schooldesk.lib.get_platform import get_platform

# Chatty libraries that only log at WARNING and above unless we run at DEBUG
NOISY_LOGGERS = ("werkzeug", "engineio.server", "socketio.server", "urllib3", "geventwebsocket")

FILE_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(message)s"


def get_log_directory() -> Path:
    """Per-user folder for SchoolDesk log files.

    Raises:
        OSError: On platforms where no log folder is known.
    """
    platform = get_platform()
    home = Path.home()
    if platform == "windows":
        return home / "AppData" / "Local" / PACKAGE / "Logs"
    if platform in ("linux", "osx"):
        return home / ".config" / PACKAGE / "logs"
    raise OSError(f"No log folder known for platform: {platform}")


def clean_old_logs(log_dir: Path, max_files: int = 5) -> None:
    """Delete all but the newest ``max_files`` log files in ``log_dir``."""
    newest_first = sorted(log_dir.glob("*.log"), key=os.path.getmtime, reverse=True)
    for stale in newest_first[max_files:]:
        stale.unlink()


class CustomFormatter(logging.Formatter):
    """Pads the level name so file log lines stay aligned."""

    def format(self, record):
        record.levelname = f"{record.levelname:<8}"
        return super().format(record)


def configure_logger(
    log_level: int = logging.INFO,
    log_dir: Path | None = None,
    max_log_files: int = 5,
    console: bool = True,
) -> Path:
    """Send root logging to a new rotating log file and, optionally, the console.

    Each run gets its own file named after its start time. Older files beyond
    ``max_log_files`` are removed first.

    Args:
        log_level (int): Root log level.
        log_dir (Path | None): Where to write logs. Defaults to get_log_directory().
        max_log_files (int): How many earlier log files to keep.
        console (bool): Also log to stderr.

    Returns:
        Path: The file this process logs to.
    """
    log_dir = log_dir or get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)
    clean_old_logs(log_dir, max_files=max_log_files)

    log_file = log_dir / f"{datetime.now():%Y-%m-%d_%H-%M-%S}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024**2, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(CustomFormatter(FILE_FORMAT, datefmt="%d.%m.%Y %H:%M:%S"))
    handlers: list[logging.Handler] = [file_handler]
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(stream_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    library_level = log_level if log_level <= logging.DEBUG else max(log_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    return log_file
