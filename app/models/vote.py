# app/models/vote.py
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from datetime import datetime, timezone
import uuid

# 1인 1표 카테고리의 중복 투표를 막는 부분 유니크 인덱스
EXCLUSIVE_VOTE_INDEX = "uq_votes_user_category_exclusive"

class Vote(Base):
    """투표 모델"""
    __tablename__ = "votes"
    __table_args__ = (
        Index(
            EXCLUSIVE_VOTE_INDEX,
            "user_id",
            "category_id",
            unique=True,
            postgresql_where=text("is_exclusive"),
            sqlite_where=text("is_exclusive = 1"),
        ),
        Index("idx_votes_category_nominee", "category_id", "nominee_id"),
    )
    
    # 기본 필드
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False)
    nominee_id = Column(String, ForeignKey("nominees.id"), nullable=False, index=True)
    
    # 복수 투표 비허용 카테고리에서 생성된 표인지 (유니크 인덱스 대상)
    is_exclusive = Column(Boolean, nullable=False, default=True)
    
    # 감사용 클라이언트 정보 (집계에 사용하지 않음)
    ip_address = Column(String, nullable=False, default="unknown")
    user_agent = Column(String, nullable=False, default="unknown")
    
    # 타임스탬프
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now())
    
    # 관계
    user = relationship("User")
    category = relationship("Category")
    nominee = relationship("Nominee")
    
    def __repr__(self):
        return f"<Vote {self.id} for Nominee {self.nominee_id}>"
