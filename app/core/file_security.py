# app/core/file_security.py
import os
from fastapi import UploadFile, HTTPException, status
from app.config import settings

# 설정
PHOTO_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
VIDEO_EXTENSIONS = {".mp4", ".mov", ".avi", ".wmv", ".webm"}
ALLOWED_EXTENSIONS = PHOTO_EXTENSIONS | VIDEO_EXTENSIONS
ALLOWED_MIME_TYPES = {
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "video/mp4",
    "video/quicktime",
    "video/x-msvideo",
    "video/x-ms-wmv",
    "video/webm",
}

def media_type_for(content_type: str) -> str:
    """MIME 타입 → 미디어 종류 (photo / video)"""
    return "photo" if content_type.startswith("image/") else "video"

def validate_file_extension(filename: str) -> None:
    """파일 확장자 검증"""
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"허용되지 않은 파일 형식입니다. 허용: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
        )

def validate_file_size(file: UploadFile) -> None:
    """파일 크기 검증 (사진/영상 별도 제한)"""
    file.file.seek(0, 2)  # 파일 끝으로 이동
    size = file.file.tell()  # 현재 위치 = 파일 크기
    file.file.seek(0)  # 다시 처음으로

    if media_type_for(file.content_type) == "photo":
        limit_mb = settings.max_photo_size_mb
    else:
        limit_mb = settings.max_video_size_mb

    if size > limit_mb * 1024 * 1024:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"파일 크기가 너무 큽니다. 최대: {limit_mb}MB"
        )

def validate_mime_type(file: UploadFile) -> None:
    """MIME 타입 검증 (간단 버전)"""
    if file.content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"허용되지 않은 파일 형식입니다. 업로드한 타입: {file.content_type}"
        )

def sanitize_filename(filename: str) -> str:
    """파일명 안전하게 변환"""
    filename = os.path.basename(filename)  # 경로 제거
    filename = filename.replace(" ", "_")  # 공백 → 언더스코어

    name, ext = os.path.splitext(filename)

    # 알파벳, 숫자, 언더스코어, 하이픈만 허용
    safe_name = "".join(c for c in name if c.isalnum() or c in "_-")

    if len(safe_name) > 50:
        safe_name = safe_name[:50]

    return f"{safe_name}{ext.lower()}"

def validate_uploaded_file(file: UploadFile) -> None:
    """전체 파일 검증 (MIME 먼저: 크기 제한이 종류에 따라 다름)"""
    validate_file_extension(file.filename)
    validate_mime_type(file)
    validate_file_size(file)
