# =============================================
# File: stylerec/utils/logging.py
# Purpose: Logging configuration
# =============================================

from loguru import logger

from stylerec.utils import slog

def setup_logging(settings) -> None:
    slog.set_level(settings.log_level)
    if settings.log_file:
        logger.add(settings.log_file, rotation="10 MB", level=settings.log_level)
