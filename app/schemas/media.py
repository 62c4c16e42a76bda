# app/schemas/media.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional
from app.schemas.user import UserSummary
from app.models.media import MediaKind, MediaStatus

class MediaReviewRequest(BaseModel):
    """관리자 심사 요청"""
    media_id: str
    status: Literal["approved", "rejected"]
    admin_notes: Optional[str] = Field(None, max_length=1000)

class MediaResponse(BaseModel):
    """업로드 미디어 응답"""
    id: str
    user_id: str
    filename: str
    original_filename: str
    file_path: str
    media_type: MediaKind
    file_size: int
    description: str
    status: MediaStatus
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    reviewer: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True
