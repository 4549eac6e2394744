from __future__ import annotations

import logging

from django.db import DatabaseError, connection
from django.utils import timezone
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from learnhub.lms_core.controller.common import _serialize
from learnhub.lms_core.controller.serializers import DashboardSerializer, HealthCheckSerializer
from learnhub.lms_core.service.dashboard.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


class DashboardAPIView(APIView):
    """대시보드 요약."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="대시보드", responses={200: DashboardSerializer})
    def get(self, request) -> Response:
        return _serialize(DashboardSerializer, DashboardService().summary(request.user))


class HealthCheckAPIView(APIView):
    """
    API 헬스체크 엔드포인트.

    서버와 데이터베이스 연결 상태를 확인합니다.
    Docker 헬스체크 및 모니터링에 사용됩니다.
    """

    permission_classes = [AllowAny]

    @extend_schema(
        summary="헬스체크",
        description="서버 상태 및 데이터베이스 연결 여부를 확인합니다.",
        responses={200: HealthCheckSerializer},
    )
    def get(self, request) -> Response:
        """
        헬스체크 정보를 반환합니다.

        @param {Request} request - DRF 요청 객체.
        @returns {Response} 서비스 상태를 담은 직렬화된 응답.
        """
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            database_available = True
        except DatabaseError:
            logger.error("데이터베이스 연결 실패", exc_info=True)
            database_available = False

        payload = {
            "status": "ok" if database_available else "degraded",
            "version": "1.0.0",
            "services": {"database": database_available},
            "timestamp": timezone.now().isoformat(),
        }
        return _serialize(HealthCheckSerializer, payload)
