# app/api/routes/nominees.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.user import User
from app.schemas.nominee import NomineeCreate, NomineeUpdate, NomineeResponse, NomineeDetail
from app.schemas.common import MessageResponse
from app.api.deps import get_current_admin
from app.services import nominee_service

router = APIRouter(prefix="/api/v1/nominees", tags=["후보"])

# null이 의미 있는 필드 (미디어 해제 / 설명 삭제)
NULLABLE_FIELDS = {"description", "image_url", "video_url", "approved_media_id"}

@router.get("", response_model=List[NomineeResponse])
def get_nominees(
    category_id: Optional[str] = Query(None, description="카테고리 필터"),
    active_only: bool = Query(True, description="활성 후보만"),
    db: Session = Depends(get_db)
):
    """후보 목록 (득표수 포함)"""
    return nominee_service.list_nominees(db, category_id=category_id, active_only=active_only)

@router.get("/{nominee_id}", response_model=NomineeDetail)
def get_nominee(nominee_id: str, db: Session = Depends(get_db)):
    """후보 상세"""
    return nominee_service.get_nominee_detail(db, nominee_id)

@router.post("", response_model=NomineeResponse, status_code=status.HTTP_201_CREATED)
def create_nominee(
    data: NomineeCreate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """후보 생성 (관리자)"""
    fields = data.model_dump(exclude={"category_id", "approved_media_id"})
    return nominee_service.create_nominee(
        db,
        category_id=data.category_id,
        fields=fields,
        approved_media_id=data.approved_media_id,
        actor_id=current_user.id
    )

@router.put("/{nominee_id}", response_model=NomineeResponse)
def update_nominee(
    nominee_id: str,
    data: NomineeUpdate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """후보 수정 (관리자)"""
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    return nominee_service.update_nominee(db, nominee_id, changes)

@router.delete("/{nominee_id}", response_model=MessageResponse)
def delete_nominee(
    nominee_id: str,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """후보 삭제 (관리자, 해당 후보의 투표도 삭제)"""
    removed_votes = nominee_service.delete_nominee(db, nominee_id)
    return {"message": f"후보가 삭제되었습니다 (투표 {removed_votes}건 삭제)"}
