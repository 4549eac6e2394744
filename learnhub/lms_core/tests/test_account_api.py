from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase


class AccountAPITests(APITestCase):
    def test_register_and_login(self) -> None:
        """
        회원가입 후 같은 자격 증명으로 로그인할 수 있는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = self.client.post("/api/auth/register", {
            "first_name": "Minji",
            "last_name": "Park",
            "email": "minji@example.com",
            "password": "s3cure-pass!",
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["email"], "minji@example.com")
        self.assertNotIn("password", response.data)

        user = get_user_model().objects.get(email="minji@example.com")
        self.assertNotEqual(user.password, "s3cure-pass!")

        response = self.client.post("/api/auth/login", {"email": "minji@example.com", "password": "s3cure-pass!"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get("/api/users").status_code, status.HTTP_200_OK)

    def test_register_requires_all_fields(self) -> None:
        response = self.client.post("/api/auth/register", {"email": "a@example.com", "password": "x"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "모든 항목을 입력해 주세요.")

    def test_register_duplicate_email(self) -> None:
        get_user_model().objects.create_user(username="dup@example.com", email="dup@example.com", password="pw-12345678")
        response = self.client.post("/api/auth/register", {
            "first_name": "A",
            "last_name": "B",
            "email": "dup@example.com",
            "password": "another-pass",
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "이미 존재하는 사용자입니다.")

    def test_login_failure(self) -> None:
        response = self.client.post("/api/auth/login", {"email": "nobody@example.com", "password": "wrong"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "이메일 또는 비밀번호가 올바르지 않습니다.")

    def test_login_with_mixed_case_email(self) -> None:
        """
        대소문자가 섞인 이메일로 가입한 사용자가 같은 문자열로 로그인할 수 있는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = self.client.post("/api/auth/register", {
            "first_name": "Minji",
            "last_name": "Park",
            "email": "Minji@Example.COM",
            "password": "s3cure-pass!",
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.post("/api/auth/login", {"email": "Minji@Example.COM", "password": "s3cure-pass!"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.client.post("/api/auth/logout")

        response = self.client.post("/api/auth/login", {"email": "minji@example.com", "password": "s3cure-pass!"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_login_without_credentials(self) -> None:
        response = self.client.post("/api/auth/login", {"email": "", "password": ""})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["error"], "자격 증명이 올바르지 않습니다.")


    def test_logout(self) -> None:
        user = get_user_model().objects.create_user(username="out@example.com", email="out@example.com", password="pw-12345678")
        self.client.force_login(user)
        self.assertEqual(self.client.post("/api/auth/logout").status_code, status.HTTP_204_NO_CONTENT)
        self.assertIn(self.client.get("/api/users").status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

    def test_health_check(self) -> None:
        response = self.client.get("/api/health/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["services"]["database"])
