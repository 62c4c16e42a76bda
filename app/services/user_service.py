# app/services/user_service.py
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.config import settings
from app.core.exceptions import Conflict
from app.core.logger import logger
from app.core.security import hash_password, verify_password
from app.models.user import User, UserRole

def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()

def find_by_identifier(db: Session, identifier: str) -> User | None:
    """아이디 또는 이메일로 조회"""
    return db.query(User)\
        .filter(or_(User.username == identifier, User.email == identifier))\
        .first()

def create_user(
    db: Session,
    username: str,
    email: str,
    password: str,
    role: str = UserRole.USER
) -> User:
    """회원 생성 (아이디/이메일 중복 시 Conflict)"""
    existing = db.query(User)\
        .filter(or_(User.username == username, User.email == email))\
        .first()
    if existing:
        raise Conflict("이미 사용 중인 아이디 또는 이메일입니다")
    
    user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
        role=role
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    
    logger.info(f"회원 생성: {user.username} ({user.role})")
    return user

def authenticate(db: Session, identifier: str, password: str) -> User | None:
    """로그인 검증 (실패 시 None)"""
    user = find_by_identifier(db, identifier)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user

def ensure_admin_user(db: Session) -> User:
    """설정된 관리자 계정이 없으면 생성"""
    admin = db.query(User)\
        .filter(or_(User.username == settings.admin_username, User.email == settings.admin_email))\
        .first()
    
    if admin and admin.hashed_password:
        if admin.role != UserRole.ADMIN:
            logger.error(f"관리자 아이디/이메일을 일반 계정이 사용 중: {admin.username}")
            raise Conflict("설정된 관리자 아이디 또는 이메일을 일반 계정이 사용 중입니다")
        logger.info("관리자 계정이 이미 존재합니다")
        return admin
    
    # 비밀번호 없는 깨진 계정은 지우고 새로 만든다
    if admin:
        db.delete(admin)
        db.commit()
    
    admin = User(
        username=settings.admin_username,
        email=settings.admin_email,
        hashed_password=hash_password(settings.admin_password),
        role=UserRole.ADMIN,
        is_active=True
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    
    logger.info(f"관리자 계정 생성: {admin.username}")
    return admin
