# app/schemas/nominee.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.schemas.user import UserSummary
from app.models.media import MediaKind

class LinkedMediaSummary(BaseModel):
    """후보에 연결된 승인 미디어"""
    id: str
    filename: str
    file_path: str
    media_type: MediaKind
    
    class Config:
        from_attributes = True

class NomineeCreate(BaseModel):
    """후보 생성 요청"""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    category_id: str
    display_order: int = Field(0, ge=0)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    approved_media_id: Optional[str] = None

class NomineeUpdate(BaseModel):
    """후보 수정 요청 (보낸 필드만 변경, approved_media_id=null이면 미디어 해제)"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    category_id: Optional[str] = None
    is_active: Optional[bool] = None
    display_order: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    approved_media_id: Optional[str] = None

class NomineeResponse(BaseModel):
    """후보 응답"""
    id: str
    name: str
    description: Optional[str] = None
    category_id: str
    is_active: bool
    display_order: int
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    media_type: str
    linked_media_id: Optional[str] = None
    linked_media: Optional[LinkedMediaSummary] = None
    vote_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class NomineeDetail(NomineeResponse):
    """후보 상세 (카테고리 정보 포함)"""
    category_name: Optional[str] = None
    category_description: Optional[str] = None
    creator: Optional[UserSummary] = None
