# main.py
import os
from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.api.routes import auth, categories, nominees, media, votes
from app.core.exceptions import AwardsError
from app.core.logging_middleware import log_requests
from app.core.logger import logger
from app.database import init_db, close_db

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug
)

# ===== 로깅 미들웨어 추가 (가장 먼저) =====
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    return await log_requests(request, call_next)
# ==========================================

# 요청 크기 제한 미들웨어 (영상 최대 크기 + 여유분)
MAX_REQUEST_SIZE = (settings.max_video_size_mb + 10) * 1024 * 1024

@app.middleware("http")
async def limit_upload_size(request: Request, call_next):
    """요청 크기 제한"""
    if request.method in ["POST", "PUT", "PATCH"]:
        content_length = request.headers.get("content-length")
        if content_length and int(content_length) > MAX_REQUEST_SIZE:
            return JSONResponse(
                status_code=413,
                content={"detail": f"요청 크기가 너무 큽니다. 최대: {MAX_REQUEST_SIZE // 1024 // 1024}MB"}
            )
    return await call_next(request)

# ===== 도메인 예외 → HTTP 응답 =====
@app.exception_handler(AwardsError)
async def awards_error_handler(request: Request, exc: AwardsError):
    logger.info(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": type(exc).__name__}
    )

@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    # 내부 정보는 로그에만 남기고 응답은 불투명하게
    logger.opt(exception=exc).error(f"처리되지 않은 예외: {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "서버 오류가 발생했습니다"}
    )
# ===================================

# CORS 설정
origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(nominees.router)
app.include_router(media.router)
app.include_router(votes.router)

# 정적 파일 서빙
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount(
    settings.media_url_prefix.rstrip("/"),
    StaticFiles(directory=settings.upload_dir),
    name="media"
)

@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info(f"{settings.app_name} 서버 시작")

@app.on_event("shutdown")
async def shutdown_event():
    close_db()
    logger.info(f"{settings.app_name} 서버 종료")

@app.get("/health")
def health_check():
    """헬스체크"""
    return {
        "status": "healthy",
        "service": settings.app_name
    }
