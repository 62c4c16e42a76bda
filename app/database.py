# app/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings
from app.core.logger import logger

def _engine_options(url: str) -> dict:
    """SQLite는 스레드 공유 허용, 인메모리면 단일 커넥션 유지"""
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    options = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        options["poolclass"] = StaticPool
    return options

# 데이터베이스 엔진 생성
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # SQL 쿼리 로그 출력
    **_engine_options(settings.database_url)
)

# 세션 팩토리
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base 클래스 (모든 모델의 부모)
Base = declarative_base()

# DB 세션 의존성 (FastAPI에서 사용)
def get_db():
    """DB 세션 생성 및 종료"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    """테이블 생성 + 관리자 계정 보장 (서버 시작 시 1회)"""
    # 모델 등록을 위해 import
    from app.models import user, category, nominee, media, vote  # noqa: F401
    from app.services import user_service

    Base.metadata.create_all(bind=engine)
    logger.info("데이터베이스 연결 완료")

    db = SessionLocal()
    try:
        user_service.ensure_admin_user(db)
    finally:
        db.close()

def close_db() -> None:
    """커넥션 풀 정리 (서버 종료 시)"""
    engine.dispose()
    logger.info("데이터베이스 커넥션 종료")
