# app/models/media.py
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from datetime import datetime, timezone
import uuid
import enum

class MediaStatus(str, enum.Enum):
    """심사 상태"""
    PENDING = "pending"    # 심사 대기
    APPROVED = "approved"  # 승인
    REJECTED = "rejected"  # 반려

class MediaKind(str, enum.Enum):
    """업로드 종류"""
    PHOTO = "photo"
    VIDEO = "video"

class MediaUpload(Base):
    """유저 업로드 미디어 (관리자 심사 대상)"""
    __tablename__ = "media_uploads"
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # 파일 정보
    filename = Column(String, nullable=False)  # 저장 파일명
    original_filename = Column(String, nullable=False)  # 원본 파일명
    file_path = Column(String, nullable=False)  # 공개 경로
    media_type = Column(SQLEnum(MediaKind, values_callable=lambda e: [m.value for m in e]), nullable=False)
    file_size = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=False, default="")
    
    # 심사
    status = Column(
        SQLEnum(MediaStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=MediaStatus.PENDING,
        index=True
    )
    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # 관계
    user = relationship("User", foreign_keys=[user_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by])
    
    def __repr__(self):
        return f"<MediaUpload {self.original_filename} - {self.status}>"
