import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import learnhub.lms_core.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("course_id", models.CharField(default=learnhub.lms_core.models.generate_course_id, editable=False, max_length=50, primary_key=True, serialize=False)),
                ("title", models.CharField(help_text="강의 제목", max_length=200)),
                ("category", models.CharField(help_text="카테고리 (소문자)", max_length=50)),
                ("price", models.DecimalField(decimal_places=2, default=0, help_text="가격 (USD)", max_digits=8)),
                ("level", models.CharField(choices=[("beginner", "Beginner"), ("intermediate", "Intermediate"), ("advanced", "Advanced")], default="beginner", max_length=20)),
                ("description", models.TextField(help_text="강의 설명")),
                ("prerequisites", models.JSONField(default=list, help_text="선수 조건 목록")),
                ("outcomes", models.JSONField(default=list, help_text="학습 성과 목록")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tutor", models.ForeignKey(help_text="담당 튜터", on_delete=django.db.models.deletion.CASCADE, related_name="courses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "lms_course",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["tutor"], name="lms_course_tutor_i_3f1c2a_idx")],
            },
        ),
        migrations.CreateModel(
            name="Roadmap",
            fields=[
                ("roadmap_id", models.CharField(default=learnhub.lms_core.models.generate_roadmap_id, editable=False, max_length=50, primary_key=True, serialize=False)),
                ("title", models.CharField(help_text="로드맵 제목", max_length=200)),
                ("description", models.TextField(blank=True, default="", help_text="로드맵 설명")),
                ("nodes", models.JSONField(default=list, help_text="도메인 노드 배열")),
                ("edges", models.JSONField(default=list, help_text="도메인 엣지 배열")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(help_text="로드맵 소유자", on_delete=django.db.models.deletion.CASCADE, related_name="roadmaps", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "lms_roadmap",
                "ordering": ["-updated_at"],
                "indexes": [models.Index(fields=["owner"], name="lms_roadmap_owner_i_8b7d4e_idx")],
            },
        ),
    ]
