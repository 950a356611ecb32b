# Logging setup (console + file)
import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a console handler and, optionally, a file handler.

    Args:
        level: Log level name (e.g. "INFO", "DEBUG")
        log_file: Path of the log file. Empty or None disables file logging.

    Returns:
        The "app" logger
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # force=True so repeated app construction does not stack handlers
    logging.basicConfig(level=level.upper(), handlers=handlers, force=True)

    logger = logging.getLogger("app")
    logger.setLevel(level.upper())
    return logger
