# app/services/results_service.py
from typing import List
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.category import Category
from app.models.nominee import Nominee
from app.models.vote import Vote
from app.schemas.vote import CategoryResult, NomineeResult

def compute_results(db: Session, category_id: str | None = None) -> List[CategoryResult]:
    """
    투표 집계
    - (카테고리, 후보)별 COUNT, 득표 0인 후보는 결과에 없음
    - 카테고리: 이름순 / 후보: 득표 내림차순
      동점은 display_order → 이름 → id 순으로 고정
    """
    vote_count = func.count(Vote.id).label("vote_count")

    query = db.query(
        Category.id,
        Category.name,
        Category.description,
        Nominee.id,
        Nominee.name,
        Nominee.description,
        vote_count
    )\
        .select_from(Vote)\
        .join(Category, Category.id == Vote.category_id)\
        .join(Nominee, Nominee.id == Vote.nominee_id)

    if category_id:
        query = query.filter(Vote.category_id == category_id)

    rows = query\
        .group_by(
            Category.id, Category.name, Category.description,
            Nominee.id, Nominee.name, Nominee.description, Nominee.display_order
        )\
        .order_by(
            Category.name,
            Category.id,
            vote_count.desc(),
            Nominee.display_order,
            Nominee.name,
            Nominee.id
        )\
        .all()

    # 정렬된 행을 카테고리별로 묶기 (dict는 삽입 순서 유지)
    results = {}
    for cat_id, cat_name, cat_description, nom_id, nom_name, nom_description, count in rows:
        if cat_id not in results:
            results[cat_id] = CategoryResult(
                category_id=cat_id,
                category_name=cat_name,
                category_description=cat_description,
                total_votes=0,
                nominees=[]
            )
        result = results[cat_id]
        result.nominees.append(
            NomineeResult(id=nom_id, name=nom_name, description=nom_description, vote_count=count)
        )
        result.total_votes += count

    return list(results.values())
