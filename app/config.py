# app/config.py
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """환경변수 설정"""
    
    # API 기본 설정
    app_name: str = "Awards API"
    debug: bool = False
    
    # Database
    database_url: str
    
    # JWT
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    
    # 업로드
    upload_dir: str = "uploads/media"
    media_url_prefix: str = "/uploads/media"
    max_photo_size_mb: int = 20
    max_video_size_mb: int = 200
    
    # 시작 시 생성되는 관리자 계정
    admin_username: str = "admin"
    admin_email: str = "admin@awards.local"
    admin_password: str = "admin12345"
    
    # 로그
    log_dir: str = "logs"
    
    @field_validator('secret_key')
    def validate_secret_key(cls, v):
        if len(v) < 32:
            raise ValueError('SECRET_KEY는 최소 32자 이상이어야 합니다')
        return v
    
    class Config:
        env_file = ".env"
        case_sensitive = False

# 싱글톤 인스턴스
settings = Settings()
