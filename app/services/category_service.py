# app/services/category_service.py
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, Conflict
from app.core.logger import logger
from app.models.category import Category, current_year
from app.models.nominee import Nominee
from app.models.vote import Vote
from app.schemas.category import CategoryResponse, CategoryWithNominees
from app.schemas.nominee import NomineeResponse

def get_category(db: Session, category_id: str) -> Category:
    """카테고리 조회 (없으면 NotFound)"""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFound("카테고리를 찾을 수 없습니다")
    return category

def list_categories(db: Session, active_only: bool = False) -> List[Category]:
    """카테고리 목록 (투표 화면 순서)"""
    query = db.query(Category)
    if active_only:
        query = query.filter(Category.is_active == True)
    
    return query\
        .order_by(Category.display_order, Category.created_at)\
        .all()

def create_category(db: Session, data: dict, created_by: str | None = None) -> Category:
    """카테고리 생성 (미지정 필드는 기본값)"""
    fields = {key: value for key, value in data.items() if value is not None}
    fields.setdefault("year", current_year())
    
    category = Category(**fields, created_by=created_by)
    db.add(category)
    db.commit()
    db.refresh(category)
    
    logger.info(f"카테고리 생성: {category.id} ({category.name}, {category.year})")
    return category

def update_category(db: Session, category_id: str, changes: dict) -> Category:
    """카테고리 부분 수정 (changes에 있는 필드만 반영)"""
    category = get_category(db, category_id)
    
    for field, value in changes.items():
        setattr(category, field, value)
    
    if changes:
        db.commit()
        db.refresh(category)
        logger.info(f"카테고리 수정: {category.id} - {sorted(changes)}")
    
    return category

def count_active_nominees(db: Session, category_id: str) -> int:
    return db.query(Nominee)\
        .filter(Nominee.category_id == category_id, Nominee.is_active == True)\
        .count()

def delete_category(db: Session, category_id: str) -> None:
    """
    카테고리 삭제
    - 활성 후보가 하나라도 있으면 Conflict (후보 먼저 정리)
    - 남은 비활성 후보와 그 투표는 함께 삭제
    """
    category = get_category(db, category_id)
    
    active_count = count_active_nominees(db, category_id)
    if active_count > 0:
        raise Conflict("후보가 남아 있는 카테고리는 삭제할 수 없습니다. 후보를 먼저 삭제하세요")
    
    db.query(Vote)\
        .filter(Vote.category_id == category_id)\
        .delete(synchronize_session=False)
    db.query(Nominee)\
        .filter(Nominee.category_id == category_id)\
        .delete(synchronize_session=False)
    db.delete(category)
    db.commit()
    
    logger.info(f"카테고리 삭제: {category_id}")

def vote_counts_by_nominee(db: Session, nominee_ids: List[str]) -> dict:
    """후보 ID → 현재 득표수"""
    if not nominee_ids:
        return {}
    
    rows = db.query(Vote.nominee_id, func.count(Vote.id))\
        .filter(Vote.nominee_id.in_(nominee_ids))\
        .group_by(Vote.nominee_id)\
        .all()
    return {nominee_id: count for nominee_id, count in rows}

def _ballot_entry(category: Category, nominees: List[Nominee], counts: dict) -> CategoryWithNominees:
    payload = CategoryResponse.model_validate(category).model_dump()
    payload["nominees"] = [
        NomineeResponse.model_validate(nominee).model_copy(
            update={"vote_count": counts.get(nominee.id, 0)}
        )
        for nominee in nominees
    ]
    return CategoryWithNominees(**payload)

def _active_nominees_by_category(db: Session, category_ids: List[str]) -> dict:
    nominees = db.query(Nominee)\
        .filter(Nominee.category_id.in_(category_ids), Nominee.is_active == True)\
        .order_by(Nominee.display_order, Nominee.created_at)\
        .all()
    
    grouped = {category_id: [] for category_id in category_ids}
    for nominee in nominees:
        grouped[nominee.category_id].append(nominee)
    return grouped

def list_categories_with_nominees(db: Session, active_only: bool = False) -> List[CategoryWithNominees]:
    """투표 화면: 카테고리별 활성 후보 + 실시간 득표수"""
    categories = list_categories(db, active_only=active_only)
    if not categories:
        return []
    
    grouped = _active_nominees_by_category(db, [c.id for c in categories])
    counts = vote_counts_by_nominee(db, [n.id for nominees in grouped.values() for n in nominees])
    
    result = [_ballot_entry(c, grouped[c.id], counts) for c in categories]
    logger.debug(f"투표 화면 카테고리 {len(result)}개 조회")
    return result

def get_category_with_nominees(db: Session, category_id: str) -> CategoryWithNominees:
    category = get_category(db, category_id)
    grouped = _active_nominees_by_category(db, [category.id])
    counts = vote_counts_by_nominee(db, [n.id for n in grouped[category.id]])
    return _ballot_entry(category, grouped[category.id], counts)
