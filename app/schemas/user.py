# app/schemas/user.py
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime

class UserCreate(BaseModel):
    """회원가입 요청"""
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)

class UserLogin(BaseModel):
    """로그인 요청 (아이디 또는 이메일)"""
    identifier: str = Field(..., min_length=1)
    password: str

class UserResponse(BaseModel):
    """유저 응답"""
    id: str
    username: str
    email: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    
    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    """다른 응답에 포함되는 유저 요약"""
    id: str
    username: str
    email: str
    
    class Config:
        from_attributes = True

class Token(BaseModel):
    """JWT 토큰 응답"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse
