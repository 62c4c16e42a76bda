# app/services/nominee_service.py
from typing import List
from sqlalchemy.orm import Session
from app.core.exceptions import NotFound, Conflict, CapacityExceeded, InvalidState
from app.core.logger import logger
from app.models.media import MediaUpload, MediaStatus, MediaKind
from app.models.nominee import Nominee, NomineeMediaType
from app.models.vote import Vote
from app.schemas.nominee import NomineeResponse, NomineeDetail
from app.schemas.user import UserSummary
from app.services import category_service, media_service

# 후보 미디어 관련 필드 (링크 해제 시 함께 초기화)
MEDIA_FIELDS = ("image_url", "video_url", "media_type", "linked_media_id",
                "original_filename", "file_size", "mime_type", "uploaded_at")

def get_approved_media(db: Session, media_id: str) -> MediaUpload:
    """승인된 업로드만 허용 (없으면 NotFound, 미승인이면 InvalidState)"""
    media = media_service.get_media(db, media_id)
    if media.status != MediaStatus.APPROVED:
        raise InvalidState("승인되지 않은 미디어는 후보에 연결할 수 없습니다")
    return media

def media_fields_from_upload(media: MediaUpload) -> dict:
    """승인 업로드 → 후보 미디어 필드 (photo→image, video→video)"""
    is_photo = media.media_type == MediaKind.PHOTO
    return {
        "linked_media_id": media.id,
        "media_type": NomineeMediaType.IMAGE if is_photo else NomineeMediaType.VIDEO,
        "image_url": media.file_path if is_photo else None,
        "video_url": None if is_photo else media.file_path,
        "original_filename": media.original_filename,
        "file_size": media.file_size,
        "mime_type": None,
        "uploaded_at": media.created_at,
    }

def media_fields_from_urls(image_url: str | None, video_url: str | None) -> dict:
    """직접 입력 URL은 그대로 사용, 타입은 image > video > none 순으로 추론"""
    if image_url:
        media_type = NomineeMediaType.IMAGE
    elif video_url:
        media_type = NomineeMediaType.VIDEO
    else:
        media_type = NomineeMediaType.NONE

    fields = dict.fromkeys(MEDIA_FIELDS)
    fields.update(image_url=image_url, video_url=video_url, media_type=media_type)
    return fields

def get_nominee(db: Session, nominee_id: str) -> Nominee:
    """후보 조회 (없으면 NotFound)"""
    nominee = db.query(Nominee).filter(Nominee.id == nominee_id).first()
    if not nominee:
        raise NotFound("후보를 찾을 수 없습니다")
    return nominee

def _with_vote_count(db: Session, nominee: Nominee) -> Nominee:
    counts = category_service.vote_counts_by_nominee(db, [nominee.id])
    nominee.vote_count = counts.get(nominee.id, 0)
    return nominee

def get_nominee_detail(db: Session, nominee_id: str) -> NomineeDetail:
    """후보 상세 (카테고리 이름/설명 + 득표수)"""
    nominee = _with_vote_count(db, get_nominee(db, nominee_id))
    payload = NomineeResponse.model_validate(nominee).model_dump()
    return NomineeDetail(
        **payload,
        category_name=nominee.category.name if nominee.category else None,
        category_description=nominee.category.description if nominee.category else None,
        creator=UserSummary.model_validate(nominee.creator) if nominee.creator else None
    )

def list_nominees(
    db: Session,
    category_id: str | None = None,
    active_only: bool = True
) -> List[Nominee]:
    """후보 목록 (투표 화면 순서, 득표수 포함)"""
    query = db.query(Nominee)
    if category_id:
        query = query.filter(Nominee.category_id == category_id)
    if active_only:
        query = query.filter(Nominee.is_active == True)

    nominees = query\
        .order_by(Nominee.display_order, Nominee.created_at)\
        .all()

    counts = category_service.vote_counts_by_nominee(db, [n.id for n in nominees])
    for nominee in nominees:
        nominee.vote_count = counts.get(nominee.id, 0)
    return nominees

def create_nominee(
    db: Session,
    category_id: str,
    fields: dict,
    approved_media_id: str | None = None,
    actor_id: str | None = None
) -> Nominee:
    """
    후보 생성
    - 카테고리 존재 확인 (NotFound)
    - 활성 후보 수 < max_nominees (CapacityExceeded)
      확인 후 삽입이라 동시 생성 시 초과될 수 있음
    - approved_media_id가 있으면 승인 업로드에서 미디어 파생 (InvalidState)
    """
    category = category_service.get_category(db, category_id)

    active_count = category_service.count_active_nominees(db, category.id)
    if active_count >= category.max_nominees:
        raise CapacityExceeded(
            f"이 카테고리의 최대 후보 수({category.max_nominees})에 도달했습니다"
        )

    if approved_media_id:
        media_fields = media_fields_from_upload(get_approved_media(db, approved_media_id))
    else:
        media_fields = media_fields_from_urls(fields.get("image_url"), fields.get("video_url"))

    nominee = Nominee(
        name=fields["name"],
        description=fields.get("description"),
        category_id=category.id,
        display_order=fields.get("display_order") or 0,
        is_active=True,
        created_by=actor_id,
        **media_fields
    )
    db.add(nominee)
    db.commit()
    db.refresh(nominee)

    logger.info(f"후보 생성: {nominee.id} ({nominee.name}) in {category.id}, media={nominee.media_type}")
    return nominee

def _url_changes(nominee: Nominee, changes: dict, clear_link: bool) -> dict:
    """보내지 않은 URL은 현재 값 유지 (링크에서 파생된 URL은 유지하지 않음)"""
    keep_current = not clear_link and nominee.linked_media_id is None
    image_url = changes.pop("image_url", nominee.image_url if keep_current else None)
    video_url = changes.pop("video_url", nominee.video_url if keep_current else None)
    return media_fields_from_urls(image_url, video_url)

def update_nominee(db: Session, nominee_id: str, changes: dict) -> Nominee:
    """
    후보 부분 수정
    - approved_media_id: 값이면 승인 업로드로 교체, null이면 링크/URL 해제
    - 링크 없이 image_url / video_url만 오면 보낸 필드만 교체 (null이면 해당 URL 삭제)
    - 투표가 있는 후보는 다른 카테고리로 옮길 수 없음 (Conflict)
    """
    nominee = get_nominee(db, nominee_id)
    changes = dict(changes)

    new_category_id = changes.get("category_id")
    if new_category_id and new_category_id != nominee.category_id:
        category_service.get_category(db, new_category_id)
        has_votes = db.query(Vote.id).filter(Vote.nominee_id == nominee.id).first() is not None
        if has_votes:
            raise Conflict("투표가 있는 후보는 다른 카테고리로 옮길 수 없습니다")
    elif "category_id" in changes:
        del changes["category_id"]

    has_media_ref = "approved_media_id" in changes
    media_ref = changes.pop("approved_media_id", None)

    if media_ref:
        changes.pop("image_url", None)
        changes.pop("video_url", None)
        changes.update(media_fields_from_upload(get_approved_media(db, media_ref)))
    elif has_media_ref or "image_url" in changes or "video_url" in changes:
        changes.update(_url_changes(nominee, changes, clear_link=has_media_ref))

    for field, value in changes.items():
        setattr(nominee, field, value)

    db.commit()
    db.refresh(nominee)

    logger.info(f"후보 수정: {nominee.id} - {sorted(changes)}")
    return _with_vote_count(db, nominee)

def delete_nominee(db: Session, nominee_id: str) -> int:
    """후보 삭제 (해당 후보의 투표 먼저 삭제, 하나의 트랜잭션)"""
    nominee = get_nominee(db, nominee_id)

    removed_votes = db.query(Vote)\
        .filter(Vote.nominee_id == nominee.id)\
        .delete(synchronize_session=False)
    db.delete(nominee)
    db.commit()

    logger.info(f"후보 삭제: {nominee_id} (투표 {removed_votes}건 함께 삭제)")
    return removed_votes
