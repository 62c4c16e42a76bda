# app/api/routes/categories.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse, CategoryWithNominees
from app.schemas.common import MessageResponse
from app.api.deps import get_current_admin
from app.services import category_service

router = APIRouter(prefix="/api/v1/categories", tags=["카테고리"])

# null로 보내도 지울 수 있는 필드
NULLABLE_FIELDS = {"description"}

@router.get("", response_model=List[CategoryResponse])
def get_categories(
    active_only: bool = Query(False, description="활성 카테고리만"),
    db: Session = Depends(get_db)
):
    """카테고리 목록"""
    return category_service.list_categories(db, active_only=active_only)

@router.get("/with-nominees", response_model=List[CategoryWithNominees])
def get_categories_with_nominees(
    active_only: bool = Query(True, description="활성 카테고리만"),
    db: Session = Depends(get_db)
):
    """투표 화면 (카테고리 + 활성 후보 + 득표수)"""
    return category_service.list_categories_with_nominees(db, active_only=active_only)

@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: str, db: Session = Depends(get_db)):
    """카테고리 조회"""
    return category_service.get_category(db, category_id)

@router.get("/{category_id}/nominees", response_model=CategoryWithNominees)
def get_category_nominees(category_id: str, db: Session = Depends(get_db)):
    """카테고리 + 활성 후보"""
    return category_service.get_category_with_nominees(db, category_id)

@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """카테고리 생성 (관리자)"""
    return category_service.create_category(db, data.model_dump(), created_by=current_user.id)

@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """카테고리 수정 (관리자, 보낸 필드만 변경)"""
    changes = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    return category_service.update_category(db, category_id, changes)

@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """카테고리 삭제 (관리자, 활성 후보가 있으면 409)"""
    category_service.delete_category(db, category_id)
    return {"message": "카테고리가 삭제되었습니다"}
