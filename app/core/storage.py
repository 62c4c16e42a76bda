# app/core/storage.py
import os
import uuid
from fastapi import UploadFile
from app.config import settings
from app.core.logger import logger

# 업로드 폴더 생성
os.makedirs(settings.upload_dir, exist_ok=True)

def public_path(filename: str) -> str:
    """저장된 파일의 공개 경로 (/uploads 정적 마운트 기준)"""
    return f"{settings.media_url_prefix.rstrip('/')}/{filename}"

async def save_upload(file: UploadFile, safe_filename: str) -> tuple[str, int]:
    """업로드 파일 저장 → (저장 파일명, 크기)"""
    _, ext = os.path.splitext(safe_filename)
    filename = f"{uuid.uuid4()}{ext}"
    file_path = os.path.join(settings.upload_dir, filename)
    
    content = await file.read()
    with open(file_path, "wb") as buffer:
        buffer.write(content)
    
    return filename, len(content)

def delete_stored_file(filename: str) -> bool:
    """저장 파일 삭제 (best-effort: 실패해도 예외를 올리지 않음)"""
    file_path = os.path.join(settings.upload_dir, os.path.basename(filename))
    if not os.path.exists(file_path):
        return False
    try:
        os.remove(file_path)
    except OSError as e:
        logger.warning(f"파일 삭제 실패: {file_path} - {e}")
        return False
    logger.debug(f"파일 삭제: {file_path}")
    return True
