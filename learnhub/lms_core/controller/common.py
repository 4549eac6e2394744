from __future__ import annotations

from rest_framework import status
from rest_framework.response import Response


def _serialize(serializer_class, payload, many: bool = False, status_code: int = status.HTTP_200_OK) -> Response:
    """
    @param serializer_class 사용할 DRF Serializer 클래스.
    @param payload 응답 데이터.
    @param many 리스트 여부.
    @param status_code HTTP 상태 코드.
    @returns 직렬화된 DRF Response.
    """
    serializer = serializer_class(payload, many=many)
    return Response(serializer.data, status=status_code)


def _error(message: str, status_code: int = status.HTTP_400_BAD_REQUEST, **extra) -> Response:
    """
    @param message 사용자에게 보여줄 오류 메시지.
    @param status_code HTTP 상태 코드.
    @param extra 응답에 함께 담을 추가 필드.
    @returns {"error": message, ...} 형태의 Response.
    """
    return Response({"error": message, **extra}, status=status_code)
