# app/models/category.py
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from datetime import datetime, timezone
import uuid

DEFAULT_MAX_NOMINEES = 10

def current_year() -> int:
    return datetime.now(timezone.utc).year

class Category(Base):
    """카테고리 모델 (투표 단위)"""
    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("max_nominees >= 1", name="ck_categories_max_nominees_positive"),
    )
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    
    # 투표 설정
    is_active = Column(Boolean, nullable=False, default=True)  # 투표자에게 노출
    voting_enabled = Column(Boolean, nullable=False, default=True)  # 투표 접수
    allow_multiple_votes = Column(Boolean, nullable=False, default=False)
    max_nominees = Column(Integer, nullable=False, default=DEFAULT_MAX_NOMINEES)
    
    # 노출 순서
    display_order = Column(Integer, nullable=False, default=0)
    year = Column(Integer, nullable=False, default=current_year)
    
    created_by = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    
    # 타임스탬프 (정렬 타이브레이크에 쓰이므로 앱에서 채움)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # 관계
    creator = relationship("User")
    nominees = relationship("Nominee", back_populates="category")
    
    def __repr__(self):
        return f"<Category {self.name} ({self.year})>"
