# app/services/vote_service.py
from dataclasses import dataclass
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from app.core.exceptions import (
    NotFound,
    VotingClosed,
    NomineeInactive,
    CategoryMismatch,
    DuplicateVote,
)
from app.core.logger import logger, audit_logger
from app.models.vote import Vote, EXCLUSIVE_VOTE_INDEX
from app.schemas.vote import VoteWithContext, VoteTarget
from app.services import category_service, nominee_service

@dataclass
class ClientMeta:
    """감사용 클라이언트 정보 (집계에는 쓰지 않음)"""
    ip_address: str = "unknown"
    user_agent: str = "unknown"

def is_duplicate_vote_violation(error: IntegrityError) -> bool:
    """유니크 인덱스 위반이 중복 투표 인덱스에서 났는지 확인"""
    orig = error.orig
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name == EXCLUSIVE_VOTE_INDEX

    message = str(orig)
    # PostgreSQL은 인덱스 이름을, SQLite는 컬럼 목록을 메시지에 담는다
    return EXCLUSIVE_VOTE_INDEX in message or \
        "UNIQUE constraint failed: votes.user_id, votes.category_id" in message

def find_user_vote(db: Session, user_id: str, category_id: str) -> Vote | None:
    """사전 확인용 (실제 보장은 유니크 인덱스)"""
    return db.query(Vote)\
        .filter(Vote.user_id == user_id, Vote.category_id == category_id)\
        .first()

def cast_vote(
    db: Session,
    user_id: str,
    category_id: str,
    nominee_id: str,
    client_meta: ClientMeta | None = None
) -> Vote:
    """
    투표 (검사 순서 고정)
    1. 카테고리 존재 / 활성 + 투표 가능
    2. 후보 존재 / 활성 / 카테고리 소속
    3. 복수 투표 비허용이면 중복 확인 + 인덱스 위반도 DuplicateVote로 변환
    """
    client_meta = client_meta or ClientMeta()

    category = category_service.get_category(db, category_id)
    if not category.is_active or not category.voting_enabled:
        raise VotingClosed()

    nominee = nominee_service.get_nominee(db, nominee_id)
    if not nominee.is_active:
        raise NomineeInactive()
    if nominee.category_id != category.id:
        raise CategoryMismatch()

    exclusive = not category.allow_multiple_votes
    if exclusive and find_user_vote(db, user_id, category.id):
        raise DuplicateVote()

    vote = Vote(
        user_id=user_id,
        category_id=category.id,
        nominee_id=nominee.id,
        is_exclusive=exclusive,
        ip_address=client_meta.ip_address,
        user_agent=client_meta.user_agent
    )
    db.add(vote)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_duplicate_vote_violation(e):
            logger.info(f"동시 중복 투표 차단: user={user_id} category={category.id}")
            raise DuplicateVote() from e
        raise
    db.refresh(vote)

    audit_logger.info(f"투표: user={user_id} category={category.id} nominee={nominee.id}")
    return vote

def withdraw_vote(db: Session, user_id: str, category_id: str) -> int:
    """카테고리 단위 투표 취소 (투표 진행 중일 때만)"""
    category = category_service.get_category(db, category_id)
    if not category.voting_enabled:
        raise VotingClosed("투표가 종료된 카테고리는 취소할 수 없습니다")

    removed = db.query(Vote)\
        .filter(Vote.user_id == user_id, Vote.category_id == category.id)\
        .delete(synchronize_session=False)
    if not removed:
        db.rollback()
        raise NotFound("이 카테고리에 투표한 기록이 없습니다")
    db.commit()

    audit_logger.info(f"투표 취소: user={user_id} category={category.id} ({removed}건)")
    return removed

def withdraw_vote_by_id(db: Session, user_id: str, vote_id: str) -> None:
    """투표 ID로 취소 (남의 투표는 존재 여부를 숨기고 NotFound)"""
    removed = db.query(Vote)\
        .filter(Vote.id == vote_id, Vote.user_id == user_id)\
        .delete(synchronize_session=False)
    if not removed:
        db.rollback()
        raise NotFound("투표를 찾을 수 없습니다")
    db.commit()

    audit_logger.info(f"투표 취소: user={user_id} vote={vote_id}")

def list_votes_for_user(db: Session, user_id: str) -> List[VoteWithContext]:
    """내 투표 목록 (최신순, 카테고리/후보 이름 포함)"""
    votes = db.query(Vote)\
        .options(joinedload(Vote.category), joinedload(Vote.nominee))\
        .filter(Vote.user_id == user_id)\
        .order_by(Vote.created_at.desc())\
        .all()

    return [
        VoteWithContext(
            id=vote.id,
            user_id=vote.user_id,
            category_id=vote.category_id,
            nominee_id=vote.nominee_id,
            ip_address=vote.ip_address,
            user_agent=vote.user_agent,
            created_at=vote.created_at,
            category=VoteTarget.model_validate(vote.category) if vote.category else None,
            nominee=VoteTarget.model_validate(vote.nominee) if vote.nominee else None
        )
        for vote in votes
    ]
