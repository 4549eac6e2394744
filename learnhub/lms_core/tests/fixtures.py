from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode


def sample_nodes() -> List[RoadmapNode]:
    """
    테스트용 프론트엔드 로드맵 노드를 만듭니다.

    @returns {List[RoadmapNode]} HTML → CSS → JS 순서의 노드 목록.
    """
    return [
        RoadmapNode(
            id="node_html",
            title="HTML 기초",
            description="시맨틱 태그와 문서 구조",
            completed=True,
            completion_time=datetime(2025, 1, 3, 9, 0, tzinfo=timezone.utc),
            deadline=datetime(2025, 1, 5, tzinfo=timezone.utc),
            time_needed=4,
            time_consumed=3.5,
            children=["node_css"],
            position=NodePosition(x=0, y=0),
        ),
        RoadmapNode(
            id="node_css",
            title="CSS 레이아웃",
            description="Flexbox와 Grid",
            time_needed=6,
            children=["node_js"],
            position=NodePosition(x=0, y=120),
        ),
        RoadmapNode(
            id="node_js",
            title="JavaScript",
            deadline=datetime(2025, 2, 1, tzinfo=timezone.utc),
            time_needed=12.5,
            position=NodePosition(x=0, y=240),
        ),
    ]


def sample_edges() -> List[RoadmapEdge]:
    return [
        RoadmapEdge(id="e_html_css", source="node_html", target="node_css", type="default", animated=False),
        RoadmapEdge(id="e_css_js", source="node_css", target="node_js", type="smoothstep", animated=True, label="다음"),
    ]


class CallbackRecorder:
    """컨트롤러 콜백 호출을 기록하는 테스트 더블."""

    def __init__(self) -> None:
        self.node_calls: list = []
        self.edge_calls: list = []

    def on_nodes(self, nodes) -> None:
        self.node_calls.append(nodes)

    def on_edges(self, edges) -> None:
        self.edge_calls.append(edges)
