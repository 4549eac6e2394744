from __future__ import annotations

from typing import Any, Dict, List, Optional

from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.domain.widget_edge import WidgetEdge
from learnhub.lms_core.domain.widget_node import WidgetNode


def to_widget_nodes(nodes: List[RoadmapNode]) -> List[WidgetNode]:
    """
    도메인 노드를 위젯 노드로 변환합니다.

    @param {List[RoadmapNode]} nodes - 도메인 노드 목록.
    @returns {List[WidgetNode]} 같은 순서의 위젯 노드 목록.
    """
    return [
        WidgetNode(
            id=node.id,
            position=NodePosition(x=node.position.x, y=node.position.y),
            data=node_payload(node),
        )
        for node in nodes
    ]


def from_widget_nodes(widget_nodes: List[WidgetNode]) -> List[RoadmapNode]:
    """
    위젯 노드의 페이로드에서 도메인 노드를 복원합니다.

    @param {List[WidgetNode]} widget_nodes - 위젯 노드 목록.
    @returns {List[RoadmapNode]} 같은 순서의 도메인 노드 목록.
    """
    nodes: List[RoadmapNode] = []
    for widget_node in widget_nodes:
        data = widget_node.data
        nodes.append(
            RoadmapNode(
                id=widget_node.id,
                title=data.get("label", ""),
                description=data.get("description", ""),
                completed=data.get("completed", False),
                completion_time=data.get("completionTime"),
                deadline=data.get("deadline"),
                time_needed=data.get("timeNeeded", 0.0),
                time_consumed=data.get("timeConsumed", 0.0),
                children=list(data.get("children") or []),
                position=NodePosition(x=widget_node.position.x, y=widget_node.position.y),
            )
        )
    return nodes


def to_widget_edges(edges: List[RoadmapEdge]) -> List[WidgetEdge]:
    """
    @param {List[RoadmapEdge]} edges - 도메인 엣지 목록.
    @returns {List[WidgetEdge]} 라벨이 문자열로 정규화된 위젯 엣지 목록.
    """
    return [
        WidgetEdge(
            id=edge.id,
            source=edge.source,
            target=edge.target,
            type=edge.type,
            animated=edge.animated,
            label=_stringify(edge.label),
        )
        for edge in edges
    ]


def from_widget_edges(widget_edges: List[WidgetEdge]) -> List[RoadmapEdge]:
    """
    @param {List[WidgetEdge]} widget_edges - 위젯 엣지 목록.
    @returns {List[RoadmapEdge]} 문자열이 아닌 라벨은 버린 도메인 엣지 목록.
    """
    return [
        RoadmapEdge(
            id=edge.id,
            source=edge.source,
            target=edge.target,
            type=edge.type,
            animated=edge.animated,
            label=edge.label if isinstance(edge.label, str) else None,
        )
        for edge in widget_edges
    ]


def node_payload(node: RoadmapNode) -> Dict[str, Any]:
    """
    도메인 노드의 필드를 위젯 페이로드 형태로 만듭니다.

    @param {RoadmapNode} node - 도메인 노드.
    @returns {Dict[str, Any]} 위젯 `data` 슬롯에 들어갈 딕셔너리.
    """
    return {
        "label": node.title,
        "description": node.description,
        "completed": node.completed,
        "completionTime": node.completion_time,
        "deadline": node.deadline,
        "timeNeeded": node.time_needed,
        "timeConsumed": node.time_consumed,
        "children": list(node.children),
    }


def _stringify(label: Optional[object]) -> Optional[str]:
    if label is None:
        return None
    return str(label)
