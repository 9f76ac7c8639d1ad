"""
Logging setup for Logdog itself.

Records are written as JSON lines in the same shape as the logs Logdog
browses, to <global root>/.logdog/logdog-YYYY-MM-DD.json. Go module path
elements never start with a dot, so no generated logger writes into that
folder and the project list skips it.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

APP_NAME = "logdog"
LOG_DIR_NAME = ".logdog"

# logging level name -> wire level name
LEVEL_NAMES = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARNING": "WARN",
    "ERROR": "ERROR",
    "CRITICAL": "ERROR",
}

# LogRecord attributes that are not user supplied `extra` data
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonLineFormatter(logging.Formatter):
    """Format a record as {"timestamp", "level", "message", "data"}."""

    def format(self, record: logging.LogRecord) -> str:
        data = {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}
        data["logger"] = record.name
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "level": LEVEL_NAMES.get(record.levelname, record.levelname),
            "message": record.getMessage(),
            "data": data,
        }
        return json.dumps(entry, default=str)


class DailyJsonFileHandler(logging.Handler):
    """Append records to one file per day inside directory."""

    def __init__(self, directory: Path, prefix: str = APP_NAME):
        super().__init__()
        self.directory = Path(directory)
        self.prefix = prefix
        self.setFormatter(JsonLineFormatter())

    def current_file(self) -> Path:
        return self.directory / f"{self.prefix}-{datetime.now().strftime('%Y-%m-%d')}.json"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            with open(self.current_file(), 'a', encoding='utf-8') as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def setup_logging(global_root: Path, level: int = logging.INFO) -> Optional[Path]:
    """Send the package's log records to the global log root.

    Returns the log directory, or None if it could not be created; the app
    then runs without a log file.
    """
    package_logger = logging.getLogger(APP_NAME)
    for handler in package_logger.handlers:
        if isinstance(handler, DailyJsonFileHandler):
            return handler.directory

    log_dir = Path(global_root) / LOG_DIR_NAME
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None

    package_logger.setLevel(level)
    package_logger.addHandler(DailyJsonFileHandler(log_dir))
    # Keep records off the terminal the UI is drawing on
    package_logger.propagate = False
    return log_dir
