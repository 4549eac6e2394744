from __future__ import annotations

import logging
from typing import List

from django.contrib.auth import authenticate, get_user_model, login, logout

from learnhub.lms_core.common.errors import AccountError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "자격 증명이 올바르지 않습니다."
INVALID_EMAIL_OR_PASSWORD = "이메일 또는 비밀번호가 올바르지 않습니다."


class AccountService:
    """회원가입/로그인을 Django 인증 프레임워크에 위임하는 서비스."""

    def register(self, first_name: str, last_name: str, email: str, password: str):
        """
        새 사용자를 등록합니다. 비밀번호 해싱은 Django가 처리합니다.

        @param {str} first_name - 이름.
        @param {str} last_name - 성.
        @param {str} email - 로그인 이메일.
        @param {str} password - 평문 비밀번호.
        @returns {User} 생성된 사용자.
        """
        if not first_name or not last_name or not email or not password:
            raise AccountError("모든 항목을 입력해 주세요.")

        user_model = get_user_model()
        email = user_model.objects.normalize_email(email.strip())
        if user_model.objects.filter(email__iexact=email).exists():
            raise AccountError("이미 존재하는 사용자입니다.")

        user = user_model.objects.create_user(
            username=email,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        logger.info("사용자 생성 완료", extra={"user_id": user.pk})
        return user

    def login(self, request, email: str, password: str):
        """
        자격 증명을 확인하고 세션에 로그인합니다.

        이메일은 대소문자를 구분하지 않고 찾은 뒤, 해당 사용자의 username으로 인증합니다.

        @param {HttpRequest} request - 세션을 가진 요청 객체.
        @param {str} email - 로그인 이메일.
        @param {str} password - 비밀번호.
        @returns {User} 로그인한 사용자.
        """
        if not email or not password:
            raise AccountError(INVALID_CREDENTIALS)
        account = get_user_model().objects.filter(email__iexact=email.strip()).order_by("id").first()
        user = None
        if account is not None:
            user = authenticate(request, username=account.get_username(), password=password)
        if user is None:
            logger.info("로그인 실패")
            raise AccountError(INVALID_EMAIL_OR_PASSWORD)
        login(request, user)
        return user

    def logout(self, request) -> None:
        logout(request)

    def list_users(self) -> List:
        return list(get_user_model().objects.order_by("id"))
