from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from learnhub.lms_core.common.errors import AccountError
from learnhub.lms_core.controller.common import _error, _serialize
from learnhub.lms_core.controller.serializers import LoginSerializer, RegisterSerializer, UserSerializer
from learnhub.lms_core.service.accounts.account_service import AccountService


class RegisterAPIView(APIView):
    """회원가입."""

    permission_classes = [AllowAny]

    @extend_schema(summary="회원가입", request=RegisterSerializer, responses={201: UserSerializer})
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (first_name/last_name/email/password).
        @returns 생성된 사용자 JSON.
        """
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = AccountService().register(**serializer.validated_data)
        except AccountError as exc:
            return _error(str(exc))
        return _serialize(UserSerializer, user, status_code=status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    """세션 로그인."""

    permission_classes = [AllowAny]

    @extend_schema(summary="로그인", request=LoginSerializer, responses={200: UserSerializer})
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (email/password).
        @returns 로그인한 사용자 JSON (실패 시 401).
        """
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = AccountService().login(request, **serializer.validated_data)
        except AccountError as exc:
            return _error(str(exc), status.HTTP_401_UNAUTHORIZED)
        return _serialize(UserSerializer, user)


class LogoutAPIView(APIView):
    """세션 로그아웃."""

    permission_classes = [AllowAny]

    @extend_schema(summary="로그아웃", request=None, responses={204: None})
    def post(self, request) -> Response:
        AccountService().logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserListAPIView(APIView):
    """전체 사용자 목록."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="사용자 목록", responses={200: UserSerializer(many=True)})
    def get(self, request) -> Response:
        return _serialize(UserSerializer, AccountService().list_users(), many=True)
