# docseq/core/config.py
import os
import sys
import logging
from pathlib import Path
from urllib.parse import urlparse

from dotenv import load_dotenv
from loguru import logger

project_root = Path(__file__).resolve().parent.parent.parent
dotenv_path = project_root / ".env"

# Existing environment variables always win over the .env file
if dotenv_path.is_file():
    logger.debug(f"Loading environment variables from: {dotenv_path}")
    load_dotenv(dotenv_path=dotenv_path, override=False)


class InterceptHandler(logging.Handler):
    """Routes standard library log records into Loguru."""
    def emit(self, record: logging.LogRecord) -> None:
        try: level = logger.level(record.levelname).name
        except ValueError: level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging():
    """Configure Loguru sinks and intercept stdlib logging (including docseq.* loggers)."""
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    log_file_path_str = os.getenv("LOG_FILE_PATH")
    log_rotation = os.getenv("LOG_ROTATION", "1 day")
    log_retention = os.getenv("LOG_RETENTION", "7 days")
    log_serialize = os.getenv("LOG_SERIALIZE", "False").lower() == "true"

    logger.remove()
    logger.add(sys.stderr, level=log_level_name, format=log_format, colorize=True)

    # File sink only when asked for; a library should not create log dirs on its own
    if log_file_path_str:
        log_file_path = Path(log_file_path_str)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file_path,
            level=log_level_name,
            format=log_format,
            rotation=log_rotation,
            retention=log_retention,
            serialize=log_serialize,
            enqueue=True,
            encoding="utf-8",
        )
        logger.info(f"File logging enabled at: {log_file_path}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # pymongo is chatty at DEBUG
    logging.getLogger("pymongo").setLevel(logging.WARNING)

    logger.info(f"Logging level set to: {log_level_name}")


# --- Database Configuration ---
MONGODB_URL: str = os.getenv("MONGODB_URL", "")
if not MONGODB_URL:
    logger.warning("MONGODB_URL is not set. Falling back to mongodb://localhost:27017.")
    MONGODB_URL = "mongodb://localhost:27017"

_default_db_name = urlparse(MONGODB_URL).path.lstrip("/") or "docseq"
DATABASE_NAME: str = os.getenv("DATABASE_NAME", _default_db_name)

COUNTER_COLLECTION: str = os.getenv("COUNTER_COLLECTION", "_counters")
