# app/services/media_service.py
from datetime import datetime, timezone
from typing import List
from sqlalchemy.orm import Session
from app.core import storage
from app.core.exceptions import NotFound, Forbidden, InvalidDecision
from app.core.logger import logger, audit_logger
from app.models.media import MediaUpload, MediaStatus, MediaKind
from app.models.user import User

# 심사로 전이 가능한 상태 (pending은 초기 상태 전용)
REVIEW_DECISIONS = {MediaStatus.APPROVED, MediaStatus.REJECTED}

def create_media_upload(
    db: Session,
    user_id: str,
    filename: str,
    original_filename: str,
    media_type: MediaKind,
    file_size: int,
    description: str = ""
) -> MediaUpload:
    """업로드 기록 생성 (항상 pending으로 시작)"""
    media = MediaUpload(
        user_id=user_id,
        filename=filename,
        original_filename=original_filename,
        file_path=storage.public_path(filename),
        media_type=MediaKind(media_type),
        file_size=file_size,
        description=description or "",
        status=MediaStatus.PENDING
    )
    db.add(media)
    db.commit()
    db.refresh(media)

    logger.info(f"미디어 업로드: {media.id} ({media.media_type.value}, {file_size} bytes) by {user_id}")
    return media

def get_media(db: Session, media_id: str) -> MediaUpload:
    """업로드 조회 (없으면 NotFound)"""
    media = db.query(MediaUpload).filter(MediaUpload.id == media_id).first()
    if not media:
        raise NotFound("업로드된 미디어를 찾을 수 없습니다")
    return media

def _parse_decision(decision) -> MediaStatus:
    try:
        status = MediaStatus(decision)
    except ValueError:
        raise InvalidDecision() from None
    if status not in REVIEW_DECISIONS:
        raise InvalidDecision()
    return status

def review_media(
    db: Session,
    media_id: str,
    decision: str,
    reviewer_id: str,
    notes: str | None = None
) -> MediaUpload:
    """
    관리자 심사
    - 상태 / 심사자 / 심사 시각 / 메모를 한 번에 커밋
    - 이미 심사된 업로드도 다시 심사 가능 (이전 메모는 덮어씀)
    - 반려 시 원본 파일 삭제 (실패해도 심사는 성공)
    """
    status = _parse_decision(decision)
    media = get_media(db, media_id)

    previous = media.status
    if previous != MediaStatus.PENDING:
        logger.warning(f"이미 심사된 미디어 재심사: {media.id} ({previous.value} → {status.value})")

    media.status = status
    media.admin_notes = notes or ""
    media.reviewed_by = reviewer_id
    media.reviewed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(media)

    audit_logger.info(f"미디어 심사: {media.id} → {status.value} by {reviewer_id}")

    if status == MediaStatus.REJECTED:
        storage.delete_stored_file(media.filename)

    return media

def list_pending_media(db: Session) -> List[MediaUpload]:
    """심사 대기열 (최신순)"""
    return db.query(MediaUpload)\
        .filter(MediaUpload.status == MediaStatus.PENDING)\
        .order_by(MediaUpload.created_at.desc())\
        .all()

def list_media_for_user(db: Session, user_id: str, status: str | None = None) -> List[MediaUpload]:
    """내 업로드 (최신순, 모든 상태)"""
    query = db.query(MediaUpload).filter(MediaUpload.user_id == user_id)
    if status:
        query = query.filter(MediaUpload.status == MediaStatus(status))

    return query.order_by(MediaUpload.created_at.desc()).all()

def list_media(db: Session, actor: User, status: str | None = None) -> List[MediaUpload]:
    """전체 목록 (관리자는 전부, 일반 유저는 본인 것만)"""
    if not actor.is_admin:
        return list_media_for_user(db, actor.id, status)

    query = db.query(MediaUpload)
    if status:
        query = query.filter(MediaUpload.status == MediaStatus(status))

    return query.order_by(MediaUpload.created_at.desc()).all()

def delete_media(db: Session, media_id: str, actor: User) -> None:
    """
    업로드 삭제 (본인 또는 관리자)
    연결된 후보의 linked_media_id는 그대로 남는다
    """
    media = get_media(db, media_id)

    if not actor.is_admin and media.user_id != actor.id:
        raise Forbidden("이 미디어를 삭제할 권한이 없습니다")

    storage.delete_stored_file(media.filename)

    db.delete(media)
    db.commit()

    audit_logger.info(f"미디어 삭제: {media_id} by {actor.id} ({actor.role})")
