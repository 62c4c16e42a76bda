# app/schemas/vote.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

class VoteCreate(BaseModel):
    """투표 요청"""
    category_id: str
    nominee_id: str

class VoteResponse(BaseModel):
    """투표 응답"""
    id: str
    user_id: str
    category_id: str
    nominee_id: str
    ip_address: str
    user_agent: str
    created_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

class VoteTarget(BaseModel):
    """투표 대상 요약 (카테고리 / 후보)"""
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    
    class Config:
        from_attributes = True

class VoteWithContext(VoteResponse):
    """내 투표 목록 항목"""
    category: Optional[VoteTarget] = None
    nominee: Optional[VoteTarget] = None

class NomineeResult(BaseModel):
    """후보별 득표"""
    id: str
    name: str
    description: Optional[str] = None
    vote_count: int

class CategoryResult(BaseModel):
    """카테고리별 집계 결과"""
    category_id: str
    category_name: str
    category_description: Optional[str] = None
    total_votes: int
    nominees: List[NomineeResult]

class WithdrawResponse(BaseModel):
    """투표 취소 응답"""
    message: str
    removed: int
