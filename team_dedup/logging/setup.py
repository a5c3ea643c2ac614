import sys
import logging
import re
from typing import Any, Optional

from loguru import logger

from team_dedup.config.settings import settings

# user:password@ part of a MongoDB connection string
URI_CREDENTIALS = re.compile(r"(mongodb(?:\+srv)?://[^:/@\s]+:)[^@\s]+@")


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sensitive data in log records."""
    record["message"] = URI_CREDENTIALS.sub(r"\1****@", record["message"])

    # Mask known secrets if they appear in the message verbatim
    if settings.supabase_key and settings.supabase_key in record["message"]:
        record["message"] = record["message"].replace(settings.supabase_key, "********")

    return True  # Keep the record after masking


def setup_logging(level: Optional[str] = None) -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()  # Remove default handler

    # Line-oriented operator output
    logger.add(
        sys.stdout,
        level=(level or settings.log_level).upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "--(LOG)> <level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,  # Better tracebacks
        diagnose=False,  # Tracebacks would otherwise show connection strings
        filter=sensitive_data_filter,
    )

    # Intercept standard logging messages (pymongo, httpx)
    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            # Get corresponding Loguru level if it exists
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Find caller from where originated the logged message
            frame, depth = logging.currentframe(), 2
            while frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(
                level, record.getMessage()
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=logging.WARNING, force=True)
    logger.debug(f"Logging initialized with level: {level or settings.log_level}")
