# app/schemas/category.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional
from app.schemas.user import UserSummary
from app.schemas.nominee import NomineeResponse

class CategoryCreate(BaseModel):
    """카테고리 생성 요청"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_active: bool = True
    voting_enabled: bool = True
    allow_multiple_votes: bool = False
    max_nominees: int = Field(10, ge=1, le=100)
    display_order: int = Field(0, ge=0)
    year: Optional[int] = Field(None, ge=2000, le=2100)  # None이면 올해

class CategoryUpdate(BaseModel):
    """카테고리 수정 요청 (보낸 필드만 변경)"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None
    voting_enabled: Optional[bool] = None
    allow_multiple_votes: Optional[bool] = None
    max_nominees: Optional[int] = Field(None, ge=1, le=100)
    display_order: Optional[int] = Field(None, ge=0)
    year: Optional[int] = Field(None, ge=2000, le=2100)

class CategoryResponse(BaseModel):
    """카테고리 응답"""
    id: str
    name: str
    description: Optional[str] = None
    is_active: bool
    voting_enabled: bool
    allow_multiple_votes: bool
    max_nominees: int
    display_order: int
    year: int
    creator: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class CategoryWithNominees(CategoryResponse):
    """투표 화면용 카테고리 (활성 후보 + 득표수)"""
    nominees: List[NomineeResponse] = []
