# core/logger.py
"""
Process-wide logging setup.

Console output goes to stderr; stdout is reserved for the JSON payloads the
command line prints. A rotating log file can be added for long-running
workers. Chatty HTTP libraries are held at WARNING unless LOG_LEVEL is DEBUG.
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
NOISY_LOGGERS = ("urllib3", "charset_normalizer")

_configured = False


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _file_handler(path: str, level: int, formatter: logging.Formatter) -> logging.Handler | None:
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = RotatingFileHandler(
            path,
            maxBytes=int(os.getenv("LOG_MAX_BYTES", str(2 * 1024 * 1024))),
            backupCount=int(os.getenv("LOG_BACKUPS", "3")),
        )
    except OSError as e:
        logging.getLogger(__name__).warning("Inventory file logging disabled (%s): %s", path, e)
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(level_name: str | None = None) -> None:
    """Attach the inventory handlers to the root logger, once per process."""
    global _configured
    if _configured:
        return

    level_name = (level_name or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # Leave handlers installed by an embedding application alone
    if not root.handlers:
        if _env_flag("LOG_TO_CONSOLE", "true"):
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(level)
            console.setFormatter(formatter)
            root.addHandler(console)

        if _env_flag("LOG_TO_FILE", "false"):
            handler = _file_handler(os.getenv("LOG_FILE", "/data/inventory.log"), level, formatter)
            if handler is not None:
                root.addHandler(handler)

    if level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
