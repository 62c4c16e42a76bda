# app/models/nominee.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from datetime import datetime, timezone
import uuid

class NomineeMediaType:
    """후보 대표 미디어 종류"""
    IMAGE = "image"
    VIDEO = "video"
    NONE = "none"

class Nominee(Base):
    """후보 모델"""
    __tablename__ = "nominees"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)
    
    # 상태 / 순서
    is_active = Column(Boolean, nullable=False, default=True)
    display_order = Column(Integer, nullable=False, default=0)
    
    # 대표 미디어 (직접 URL 또는 승인된 업로드에서 파생)
    image_url = Column(String, nullable=True)
    video_url = Column(String, nullable=True)
    media_type = Column(String, nullable=False, default=NomineeMediaType.NONE)
    
    # 승인된 업로드 참조 (업로드 삭제 시 자동 해제하지 않음 → FK 없음)
    linked_media_id = Column(String, nullable=True, index=True)
    
    # 파일 메타데이터
    original_filename = Column(String, nullable=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String, nullable=True)
    uploaded_at = Column(DateTime(timezone=True), nullable=True)
    
    created_by = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # 관계
    category = relationship("Category", back_populates="nominees")
    creator = relationship("User")
    linked_media = relationship(
        "MediaUpload",
        primaryjoin="foreign(Nominee.linked_media_id) == MediaUpload.id",
        viewonly=True
    )
    
    # 조회 시 채워지는 득표수 (컬럼 아님)
    vote_count = 0
    
    def __repr__(self):
        return f"<Nominee {self.name}>"
