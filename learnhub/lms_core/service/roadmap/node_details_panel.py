from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from django.utils import timezone

from learnhub.lms_core.controller.serializers import NodeDetailsFormSerializer
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.service.roadmap.canvas_controller import RoadmapCanvasController


class NodeDetailsPanel:
    """선택된 노드의 상세 정보를 보여주고 편집 내용을 캔버스에 반영하는 패널."""

    def __init__(self, canvas: RoadmapCanvasController) -> None:
        self._canvas = canvas

    @property
    def is_open(self) -> bool:
        return self._canvas.selected_node is not None

    def render(self, now: Optional[datetime] = None) -> Optional[Dict[str, Any]]:
        """
        선택된 노드의 표시 정보를 만듭니다.

        @param {Optional[datetime]} now - 마감 초과 판단 기준 시각.
        @returns {Optional[Dict[str, Any]]} 선택된 노드가 없으면 None.
        """
        node = self._canvas.selected_node
        if node is None:
            return None
        now = now or timezone.now()
        progress_ratio = None
        if node.time_needed > 0:
            progress_ratio = round(min(node.time_consumed / node.time_needed, 1.0), 4)
        return {
            "node": node,
            "layout": "sheet" if self._canvas.is_mobile else "sidebar",
            "progress_ratio": progress_ratio,
            "overdue": bool(node.deadline and not node.completed and node.deadline < now),
        }

    def submit(self, form: Mapping[str, Any]) -> RoadmapNode:
        """
        편집 폼을 검증하고 수정된 노드를 캔버스에 넘깁니다.

        @param {Mapping[str, Any]} form - 편집된 필드 (일부만 전달 가능).
        @returns {RoadmapNode} 반영된 노드.
        """
        node = self._canvas.selected_node
        if node is None:
            raise LookupError("선택된 노드가 없습니다.")
        serializer = NodeDetailsFormSerializer(data=form, partial=True)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        if changes.get("completed") and not node.completed and "completion_time" not in changes:
            changes["completion_time"] = timezone.now()
        updated = replace(node, **changes)
        self._canvas.apply_node_update(updated)
        return updated

    def close(self) -> None:
        self._canvas.close_details()
