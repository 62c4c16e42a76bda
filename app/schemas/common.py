# app/schemas/common.py
from pydantic import BaseModel

class MessageResponse(BaseModel):
    """단순 메시지 응답"""
    message: str
