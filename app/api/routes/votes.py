# app/api/routes/votes.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.user import User
from app.schemas.vote import VoteCreate, VoteResponse, VoteWithContext, CategoryResult, WithdrawResponse
from app.schemas.common import MessageResponse
from app.api.deps import get_current_user, get_client_meta
from app.services import vote_service, results_service
from app.services.vote_service import ClientMeta

router = APIRouter(prefix="/api/v1/votes", tags=["투표"])

@router.post("", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
def cast_vote(
    data: VoteCreate,
    client_meta: ClientMeta = Depends(get_client_meta),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """투표"""
    return vote_service.cast_vote(
        db,
        user_id=current_user.id,
        category_id=data.category_id,
        nominee_id=data.nominee_id,
        client_meta=client_meta
    )

@router.get("/my", response_model=List[VoteWithContext])
def get_my_votes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """내 투표 목록"""
    return vote_service.list_votes_for_user(db, current_user.id)

@router.get("/results", response_model=List[CategoryResult])
def get_results(
    category_id: Optional[str] = Query(None, description="카테고리 필터"),
    db: Session = Depends(get_db)
):
    """투표 결과 (인증 불필요)"""
    return results_service.compute_results(db, category_id=category_id)

@router.delete("/my/{category_id}", response_model=WithdrawResponse)
def withdraw_vote(
    category_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """카테고리 투표 취소"""
    removed = vote_service.withdraw_vote(db, current_user.id, category_id)
    return {"message": "투표가 취소되었습니다", "removed": removed}

@router.delete("/{vote_id}", response_model=MessageResponse)
def withdraw_vote_by_id(
    vote_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """투표 ID로 취소 (본인 투표만)"""
    vote_service.withdraw_vote_by_id(db, current_user.id, vote_id)
    return {"message": "투표가 취소되었습니다"}
