from __future__ import annotations

from typing import Any, Dict, Optional


class LmsError(Exception):
    """LMS 서비스 계층 공통 예외."""

    pass


class AccountError(LmsError):
    """회원가입/로그인 실패."""

    pass


class CourseError(LmsError):
    """강의 정보 검증 실패."""

    pass


class CourseNotFoundError(CourseError):
    """존재하지 않는 강의 조회."""

    pass


class CoursePermissionError(CourseError):
    """강의 담당 튜터가 아닌 사용자의 수정 시도."""

    pass


class RoadmapNotFoundError(LmsError):
    """존재하지 않는 로드맵 또는 노드/엣지 조회."""

    pass


class RoadmapIntegrityError(LmsError, ValueError):
    """
    로드맵 참조 무결성 위반.

    @param {str} message - 오류 메시지.
    @param {Optional[Dict[str, Any]]} canvas - 오류 슬롯이 채워진 캔버스 구성 (있을 때만).
    """

    def __init__(self, message: str, canvas: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.canvas = canvas
