# app/core/logger.py
from loguru import logger
import sys
import os
from app.config import settings

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

os.makedirs(settings.log_dir, exist_ok=True)

def _is_audit(record) -> bool:
    return record["extra"].get("audit", False)

def _file_sink(filename: str, level: str, **options):
    logger.add(
        os.path.join(settings.log_dir, filename),
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        format=FILE_FORMAT,
        level=level,
        **options
    )

logger.remove()

# 콘솔 (개발용)
logger.add(
    sys.stdout,
    colorize=True,
    format=CONSOLE_FORMAT,
    level="DEBUG" if settings.debug else "INFO"
)

# 전체 / 에러 전용 / 감사 (투표, 심사 기록만)
_file_sink("awards.log", "DEBUG")
_file_sink("error.log", "ERROR")
_file_sink("audit.log", "INFO", filter=_is_audit)

# 투표 / 심사처럼 사후 추적이 필요한 이벤트용
audit_logger = logger.bind(audit=True)
