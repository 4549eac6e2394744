from django.conf import settings
from django.db import models
import uuid


def generate_roadmap_id():
    return f"rm_{uuid.uuid4().hex[:8]}"


def generate_course_id():
    return f"course_{uuid.uuid4().hex[:8]}"


class Roadmap(models.Model):
    """사용자 학습 로드맵 (노드/엣지 배열을 JSON으로 보관)."""

    roadmap_id = models.CharField(
        max_length=50,
        primary_key=True,
        default=generate_roadmap_id,
        editable=False
    )
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="roadmaps",
        help_text="로드맵 소유자"
    )
    title = models.CharField(max_length=200, help_text="로드맵 제목")
    description = models.TextField(blank=True, default="", help_text="로드맵 설명")
    nodes = models.JSONField(default=list, help_text="도메인 노드 배열")
    edges = models.JSONField(default=list, help_text="도메인 엣지 배열")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "lms_roadmap"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["owner"], name="lms_roadmap_owner_i_8b7d4e_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.roadmap_id})"


class Course(models.Model):
    """튜터가 편집하는 강의 정보."""

    LEVEL_CHOICES = [
        ("beginner", "Beginner"),
        ("intermediate", "Intermediate"),
        ("advanced", "Advanced"),
    ]

    course_id = models.CharField(
        max_length=50,
        primary_key=True,
        default=generate_course_id,
        editable=False
    )
    tutor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="courses",
        help_text="담당 튜터"
    )
    title = models.CharField(max_length=200, help_text="강의 제목")
    category = models.CharField(max_length=50, help_text="카테고리 (소문자)")
    price = models.DecimalField(max_digits=8, decimal_places=2, default=0, help_text="가격 (USD)")
    level = models.CharField(max_length=20, choices=LEVEL_CHOICES, default="beginner")
    description = models.TextField(help_text="강의 설명")
    prerequisites = models.JSONField(default=list, help_text="선수 조건 목록")
    outcomes = models.JSONField(default=list, help_text="학습 성과 목록")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "lms_course"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["tutor"], name="lms_course_tutor_i_3f1c2a_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.course_id})"
