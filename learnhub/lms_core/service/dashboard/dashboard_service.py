from __future__ import annotations

from typing import Any, Dict

from django.utils import timezone

from learnhub.lms_core.models import Course, Roadmap
from learnhub.lms_core.service.roadmap.roadmap_service import load_nodes


class DashboardService:
    """대시보드 화면에 필요한 로드맵/강의 요약을 만듭니다."""

    def summary(self, user) -> Dict[str, Any]:
        """
        @param {User} user - 로그인 사용자.
        @returns {Dict[str, Any]} 로드맵별 진행 요약과 담당 강의 목록.
        """
        roadmaps = []
        for roadmap in Roadmap.objects.filter(owner=user):
            nodes = load_nodes(roadmap.nodes)
            roadmaps.append({
                "roadmap_id": roadmap.roadmap_id,
                "title": roadmap.title,
                "node_count": len(nodes),
                "completed_count": sum(1 for node in nodes if node.completed),
                "hours_needed": round(sum(node.time_needed for node in nodes), 2),
                "hours_consumed": round(sum(node.time_consumed for node in nodes), 2),
            })
        return {
            "user": user,
            "roadmaps": roadmaps,
            "courses": list(Course.objects.filter(tutor=user)),
            "generated_at": timezone.now().isoformat(),
        }
