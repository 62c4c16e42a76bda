# app/api/routes/media.py
from fastapi import APIRouter, Depends, UploadFile, File, Form, Query, status
from sqlalchemy.orm import Session
from typing import List, Literal, Optional

from app.database import get_db
from app.models.user import User
from app.schemas.media import MediaResponse, MediaReviewRequest
from app.schemas.common import MessageResponse
from app.api.deps import get_current_user, get_current_admin
from app.core import storage
from app.core.file_security import validate_uploaded_file, sanitize_filename, media_type_for
from app.services import media_service

router = APIRouter(prefix="/api/v1/media", tags=["미디어"])

StatusFilter = Optional[Literal["pending", "approved", "rejected"]]

@router.post("/upload", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    file: UploadFile = File(...),
    description: str = Form(""),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """미디어 업로드 (심사 대기 상태로 저장)"""

    # 보안 검증
    validate_uploaded_file(file)
    safe_filename = sanitize_filename(file.filename)

    # 파일 저장
    filename, size = await storage.save_upload(file, safe_filename)

    return media_service.create_media_upload(
        db,
        user_id=current_user.id,
        filename=filename,
        original_filename=safe_filename,
        media_type=media_type_for(file.content_type),
        file_size=size,
        description=description
    )

@router.post("/review", response_model=MediaResponse)
def review_media(
    data: MediaReviewRequest,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """미디어 심사 (관리자)"""
    return media_service.review_media(
        db,
        media_id=data.media_id,
        decision=data.status,
        reviewer_id=current_user.id,
        notes=data.admin_notes
    )

@router.get("/pending", response_model=List[MediaResponse])
def get_pending_media(
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """심사 대기열 (관리자)"""
    return media_service.list_pending_media(db)

@router.get("/my", response_model=List[MediaResponse])
def get_my_media(
    status_filter: StatusFilter = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """내 업로드 목록"""
    return media_service.list_media_for_user(db, current_user.id, status_filter)

@router.get("", response_model=List[MediaResponse])
def get_media_list(
    status_filter: StatusFilter = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """업로드 목록 (관리자는 전체, 일반 유저는 본인 것)"""
    return media_service.list_media(db, current_user, status_filter)

@router.delete("/admin/{media_id}", response_model=MessageResponse)
def admin_delete_media(
    media_id: str,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """업로드 삭제 (관리자)"""
    media_service.delete_media(db, media_id, current_user)
    return {"message": "업로드가 삭제되었습니다"}

@router.delete("/{media_id}", response_model=MessageResponse)
def delete_media(
    media_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """업로드 삭제 (본인 또는 관리자)"""
    media_service.delete_media(db, media_id, current_user)
    return {"message": "업로드가 삭제되었습니다"}
