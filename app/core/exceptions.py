# app/core/exceptions.py
from fastapi import status

class AwardsError(Exception):
    """도메인 예외 베이스 (HTTP 레이어에서 detail + status_code로 변환)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "요청을 처리할 수 없습니다"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

class NotFound(AwardsError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "대상을 찾을 수 없습니다"

class Conflict(AwardsError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "현재 상태에서 처리할 수 없는 요청입니다"

class DuplicateVote(Conflict):
    default_detail = "이미 이 카테고리에 투표했습니다"

class InvalidState(AwardsError):
    default_detail = "대상의 상태가 올바르지 않습니다"

class CapacityExceeded(AwardsError):
    default_detail = "후보 수가 최대치에 도달했습니다"

class VotingClosed(AwardsError):
    default_detail = "이 카테고리는 투표가 진행 중이지 않습니다"

class NomineeInactive(AwardsError):
    default_detail = "비활성화된 후보입니다"

class CategoryMismatch(AwardsError):
    default_detail = "후보가 해당 카테고리에 속하지 않습니다"

class InvalidDecision(AwardsError):
    default_detail = "심사 결과는 approved 또는 rejected 여야 합니다"

class Forbidden(AwardsError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "권한이 없습니다"
