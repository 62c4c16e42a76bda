# app/core/logging_middleware.py
from fastapi import Request
from app.config import settings
from app.core.logger import logger
import time

# 헬스체크 / 정적 파일은 DEBUG로만 남김
QUIET_PREFIXES = ("/health", settings.media_url_prefix)

async def log_requests(request: Request, call_next):
    """요청/응답 로깅 + X-Process-Time 헤더"""
    started = time.perf_counter()
    path = request.url.path
    client = request.client.host if request.client else "unknown"
    level = "DEBUG" if path.startswith(QUIET_PREFIXES) else "INFO"

    logger.log(level, f"➡️  {request.method} {path} from {client}")

    try:
        response = await call_next(request)
    except Exception as e:
        elapsed = (time.perf_counter() - started) * 1000
        logger.opt(exception=e).error(
            f"❌ {request.method} {path} - Error: {e} - Time: {elapsed:.2f}ms"
        )
        raise

    elapsed = (time.perf_counter() - started) * 1000
    logger.log(
        level,
        f"⬅️  {request.method} {path} - Status: {response.status_code} - Time: {elapsed:.2f}ms"
    )
    response.headers["X-Process-Time"] = f"{elapsed:.2f}"
    return response
