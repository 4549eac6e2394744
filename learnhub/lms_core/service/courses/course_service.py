from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from learnhub.lms_core.common.errors import CourseError, CourseNotFoundError, CoursePermissionError
from learnhub.lms_core.models import Course

logger = logging.getLogger(__name__)

COURSE_CATEGORIES = [
    "Development",
    "Business",
    "Design",
    "Marketing",
    "Data Science",
    "Music",
]


class CourseService:
    """튜터 강의 편집 서비스."""

    def categories(self) -> List[str]:
        return list(COURSE_CATEGORIES)

    def list_courses(self, tutor) -> List[Course]:
        return list(Course.objects.filter(tutor=tutor))

    def get_course(self, course_id: str) -> Course:
        try:
            return Course.objects.get(course_id=course_id)
        except Course.DoesNotExist:
            raise CourseNotFoundError(f"강의를 찾을 수 없습니다: {course_id}")

    def create_course(self, tutor, form: Mapping[str, Any]) -> Course:
        """
        @param {User} tutor - 담당 튜터.
        @param {Mapping[str, Any]} form - 검증된 강의 폼 값.
        @returns {Course} 생성된 강의.
        """
        course = Course.objects.create(tutor=tutor, **_clean_form(form))
        logger.info("강의 생성", extra={"course_id": course.course_id})
        return course

    def update_course(self, course_id: str, tutor, form: Mapping[str, Any]) -> Course:
        """
        담당 튜터만 강의를 수정할 수 있습니다.

        @param {str} course_id - 강의 ID.
        @param {User} tutor - 요청한 사용자.
        @param {Mapping[str, Any]} form - 검증된 강의 폼 값.
        @returns {Course} 수정된 강의.
        """
        course = self.get_course(course_id)
        if course.tutor_id != tutor.pk:
            raise CoursePermissionError("강의를 수정할 권한이 없습니다.")
        for field_name, value in _clean_form(form).items():
            setattr(course, field_name, value)
        course.save()
        logger.info("강의 수정", extra={"course_id": course.course_id})
        return course


def split_lines(text: str) -> List[str]:
    """
    줄바꿈으로 구분된 입력을 공백을 제거한 항목 목록으로 바꿉니다.

    @param {str} text - 여러 줄 텍스트.
    @returns {List[str]} 비어 있지 않은 줄 목록.
    """
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def _clean_form(form: Mapping[str, Any]) -> Dict[str, Any]:
    category = str(form.get("category", "")).strip().lower()
    if category not in {name.lower() for name in COURSE_CATEGORIES}:
        raise CourseError(f"알 수 없는 카테고리입니다: {category}")
    price = Decimal(str(form["price"]))
    if price < 0:
        raise CourseError("가격은 0 이상이어야 합니다.")
    return {
        "title": form["title"].strip(),
        "category": category,
        "price": price,
        "level": form["level"],
        "description": form["description"],
        "prerequisites": split_lines(form.get("prerequisites", "")),
        "outcomes": split_lines(form.get("outcomes", "")),
    }
