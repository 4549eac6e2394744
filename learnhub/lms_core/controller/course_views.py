from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from learnhub.lms_core.common.errors import CourseError, CourseNotFoundError, CoursePermissionError
from learnhub.lms_core.controller.common import _error, _serialize
from learnhub.lms_core.controller.serializers import CourseFormSerializer, CourseSerializer
from learnhub.lms_core.service.courses.course_service import CourseService


class CourseListAPIView(APIView):
    """내가 담당하는 강의 목록/생성."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="담당 강의 목록", responses={200: CourseSerializer(many=True)})
    def get(self, request) -> Response:
        return _serialize(CourseSerializer, CourseService().list_courses(request.user), many=True)

    @extend_schema(summary="강의 생성", request=CourseFormSerializer, responses={201: CourseSerializer})
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (강의 폼).
        @returns 생성된 강의 JSON.
        """
        serializer = CourseFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            course = CourseService().create_course(request.user, serializer.validated_data)
        except CourseError as exc:
            return _error(str(exc))
        return _serialize(CourseSerializer, course, status_code=status.HTTP_201_CREATED)


class CourseDetailAPIView(APIView):
    """튜터 강의 편집기."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="강의 조회", responses={200: CourseSerializer})
    def get(self, request, course_id: str) -> Response:
        try:
            course = CourseService().get_course(course_id)
        except CourseNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(CourseSerializer, course)

    @extend_schema(summary="강의 수정", request=CourseFormSerializer, responses={200: CourseSerializer})
    def put(self, request, course_id: str) -> Response:
        """
        @param request DRF 요청 객체 (강의 폼, 선수 조건/성과는 줄바꿈 구분).
        @param course_id 강의 ID.
        @returns 수정된 강의 JSON.
        """
        serializer = CourseFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            course = CourseService().update_course(course_id, request.user, serializer.validated_data)
        except CourseNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except CoursePermissionError as exc:
            return _error(str(exc), status.HTTP_403_FORBIDDEN)
        except CourseError as exc:
            return _error(str(exc))
        return _serialize(CourseSerializer, course)
