import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import settings

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"

# 外部ライブラリのリクエストログは多すぎるので抑える
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")


def setup_logging():
    """
    Console + <LOG_DIR>/app.log, rotated at 5 MB.
    Safe to call more than once; handlers are only attached the first time.
    """
    level = settings.LOG_LEVEL.upper()

    root = logging.getLogger()
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if root.handlers:
        return

    formatter = logging.Formatter(fmt=FMT, datefmt=DATEFMT)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    if not settings.LOG_DIR:
        return

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
