from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional

from learnhub.lms_core.domain.canvas_stats import CanvasStats
from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.domain.widget_edge import WidgetEdge
from learnhub.lms_core.domain.widget_node import WidgetNode
from learnhub.lms_core.service.roadmap.roadmap_mapper import (
    from_widget_edges,
    from_widget_nodes,
    node_payload,
    to_widget_edges,
    to_widget_nodes,
)

logger = logging.getLogger(__name__)

MOBILE_BREAKPOINT = 768

NODE_STYLE: Dict[str, Any] = {
    "padding": "8px",
    "borderRadius": "8px",
    "border": "2px solid #e2e8f0",
    "background": "white",
    "boxShadow": "0 2px 4px rgba(0,0,0,0.1)",
    "width": 140,
    "fontSize": "11px",
    "textAlign": "center",
}

EDGE_STYLE: Dict[str, Any] = {
    "stroke": "#94a3b8",
    "strokeWidth": 2,
    "markerEnd": {"type": "arrowclosed", "width": 15, "height": 15, "color": "#94a3b8"},
}

DEFAULT_EDGE_OPTIONS: Dict[str, Any] = {
    "type": "default",
    "style": EDGE_STYLE,
    "animated": True,
    "curvature": 0.5,
}

VIEWPORT_OPTIONS: Dict[str, Any] = {
    "fitView": True,
    "fitViewOptions": {"padding": 0.3, "minZoom": 0.4, "maxZoom": 1.2},
    "minZoom": 0.2,
    "maxZoom": 1.5,
}

NodesCallback = Callable[[List[RoadmapNode]], None]
EdgesCallback = Callable[[List[RoadmapEdge]], None]


class RoadmapCanvasController:
    """
    로드맵 캔버스의 위젯 상태를 관리하는 컨트롤러.

    위젯 노드/엣지 목록은 이 객체 안에서만 교체되며,
    교체될 때마다 전체 도메인 배열을 다시 만들어 소유자 콜백에 넘깁니다.
    노드 알림과 엣지 알림은 서로 독립적으로 발생합니다.
    """

    def __init__(
        self,
        nodes: List[RoadmapNode],
        edges: List[RoadmapEdge],
        on_update_nodes: NodesCallback,
        on_update_edges: EdgesCallback,
        viewport_width: Optional[int] = None,
        mobile_breakpoint: int = MOBILE_BREAKPOINT,
    ) -> None:
        """
        도메인 배열을 위젯 형식으로 한 번 변환하고 표시용 메타데이터를 붙입니다.

        @param {List[RoadmapNode]} nodes - 소유자가 가진 도메인 노드 배열.
        @param {List[RoadmapEdge]} edges - 소유자가 가진 도메인 엣지 배열.
        @param {NodesCallback} on_update_nodes - 노드 배열 변경 알림 콜백.
        @param {EdgesCallback} on_update_edges - 엣지 배열 변경 알림 콜백.
        @param {Optional[int]} viewport_width - 클라이언트 화면 너비(px).
        @param {int} mobile_breakpoint - 모바일로 간주할 최대 너비.
        @returns {None} 초기 상태를 만들고 첫 알림을 보냅니다.
        """
        self._on_update_nodes = on_update_nodes
        self._on_update_edges = on_update_edges
        self.selected_node: Optional[RoadmapNode] = None
        self.error: Optional[str] = None
        self.is_mobile = viewport_width is not None and viewport_width <= mobile_breakpoint

        self._nodes: List[WidgetNode] = [_decorate(node) for node in to_widget_nodes(nodes)]
        self._edges: List[WidgetEdge] = to_widget_edges(edges)
        self._propagate_nodes()
        self._propagate_edges()

    # -------------------------------------------------------------------------
    # 상태 조회
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> List[WidgetNode]:
        return list(self._nodes)

    @property
    def edges(self) -> List[WidgetEdge]:
        return list(self._edges)

    def domain_nodes(self) -> List[RoadmapNode]:
        """
        @returns {List[RoadmapNode]} 현재 위젯 상태에서 복원한 도메인 노드 배열.
        """
        return from_widget_nodes(self._nodes)

    def domain_edges(self) -> List[RoadmapEdge]:
        """
        @returns {List[RoadmapEdge]} 현재 위젯 상태에서 복원한 도메인 엣지 배열.
        """
        return from_widget_edges(self._edges)

    def stats(self) -> CanvasStats:
        """
        @returns {CanvasStats} 전체/완료 노드 수.
        """
        completed = sum(1 for node in self._nodes if node.data.get("completed"))
        return CanvasStats(node_count=len(self._nodes), completed_count=completed)

    def render(self) -> Dict[str, Any]:
        """
        위젯에 그대로 넘길 수 있는 캔버스 구성을 반환합니다.

        @returns {Dict[str, Any]} 노드/엣지/기본 옵션/통계를 담은 딕셔너리.
        """
        return {
            "nodes": self.nodes,
            "edges": self.edges,
            "default_edge_options": DEFAULT_EDGE_OPTIONS,
            "viewport": VIEWPORT_OPTIONS,
            "stats": self.stats(),
            "selected_node_id": self.selected_node.id if self.selected_node else None,
            "is_mobile": self.is_mobile,
            "error": self.error,
        }

    # -------------------------------------------------------------------------
    # 사용자 상호작용
    # -------------------------------------------------------------------------

    def connect(
        self,
        source: str,
        target: str,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ) -> WidgetEdge:
        """
        두 노드를 잇는 애니메이션 엣지를 추가합니다.

        중복/순환 여부는 검사하지 않으므로 같은 연결을 두 번 하면 엣지가 두 개 생깁니다.

        @param {str} source - 시작 노드 ID.
        @param {str} target - 도착 노드 ID.
        @param {Optional[str]} source_handle - 시작 핸들 ID.
        @param {Optional[str]} target_handle - 도착 핸들 ID.
        @returns {WidgetEdge} 새로 추가된 엣지.
        """
        edge = WidgetEdge(
            id=f"edge_{uuid.uuid4().hex[:8]}",
            source=source,
            target=target,
            type=DEFAULT_EDGE_OPTIONS["type"],
            animated=True,
            source_handle=source_handle,
            target_handle=target_handle,
        )
        logger.debug("엣지 연결", extra={"edge_id": edge.id, "source": source, "target": target})
        self._set_edges(self._edges + [edge])
        return edge

    def node_click(self, node_id: str) -> Optional[RoadmapNode]:
        """
        클릭된 노드를 도메인 노드로 되찾아 선택합니다.

        @param {str} node_id - 클릭된 위젯 노드 ID.
        @returns {Optional[RoadmapNode]} 선택된 노드 (없는 ID면 None, 기존 선택 유지).
        """
        for node in self.domain_nodes():
            if node.id == node_id:
                self.selected_node = node
                return node
        return None

    def node_drag_stop(self, node_id: str, position: NodePosition) -> None:
        """
        드래그가 끝난 노드의 위치만 갱신합니다.

        @param {str} node_id - 이동한 노드 ID.
        @param {NodePosition} position - 새 좌표.
        @returns {None} 위치 변경을 반영합니다.
        """
        if not any(node.id == node_id for node in self._nodes):
            return
        self._set_nodes([
            replace(node, position=NodePosition(x=position.x, y=position.y)) if node.id == node_id else node
            for node in self._nodes
        ])

    def apply_node_update(self, updated: RoadmapNode) -> bool:
        """
        상세 패널에서 수정된 노드를 위젯 페이로드에 덮어씁니다. 위치는 유지됩니다.

        @param {RoadmapNode} updated - 수정된 도메인 노드.
        @returns {bool} 일치하는 노드가 있어 반영했는지 여부.
        """
        if not any(node.id == updated.id for node in self._nodes):
            logger.warning("수정 대상 노드를 찾을 수 없습니다", extra={"node_id": updated.id})
            return False

        def _overwrite(node: WidgetNode) -> WidgetNode:
            data = {**node.data, **node_payload(updated)}
            return replace(node, data=data, view=_view_fragment(data))

        self._set_nodes([_overwrite(node) if node.id == updated.id else node for node in self._nodes])
        for node in self.domain_nodes():
            if node.id == updated.id:
                self.selected_node = node
        return True

    def close_details(self) -> None:
        self.selected_node = None

    def apply_node_changes(self, changes: Iterable[Dict[str, Any]]) -> None:
        """
        위젯이 내보낸 노드 변경 이벤트(position/remove/select)를 반영합니다.

        @param {Iterable[Dict[str, Any]]} changes - 변경 이벤트 목록.
        @returns {None} 알 수 없는 타입은 무시합니다.
        """
        nodes = list(self._nodes)
        for change in changes:
            change_type = change.get("type")
            node_id = change.get("id")
            if change_type == "remove":
                nodes = [node for node in nodes if node.id != node_id]
                if self.selected_node and self.selected_node.id == node_id:
                    self.selected_node = None
            elif change_type == "position" and change.get("position") is not None:
                position = change["position"]
                nodes = [
                    replace(node, position=NodePosition(x=position["x"], y=position["y"]))
                    if node.id == node_id
                    else node
                    for node in nodes
                ]
            elif change_type == "select":
                nodes = [
                    replace(node, selected=bool(change.get("selected"))) if node.id == node_id else node
                    for node in nodes
                ]
        self._set_nodes(nodes)

    def apply_edge_changes(self, changes: Iterable[Dict[str, Any]]) -> None:
        """
        위젯이 내보낸 엣지 제거 이벤트를 반영합니다.

        @param {Iterable[Dict[str, Any]]} changes - 변경 이벤트 목록.
        @returns {None} remove 외의 타입은 무시합니다.
        """
        removed = {change.get("id") for change in changes if change.get("type") == "remove"}
        if not removed:
            return
        self._set_edges([edge for edge in self._edges if edge.id not in removed])

    # -------------------------------------------------------------------------
    # 오류 슬롯
    # -------------------------------------------------------------------------

    def report_error(self, message: str) -> None:
        logger.warning("캔버스 오류", extra={"error": message})
        self.error = message

    def dismiss_error(self) -> None:
        self.error = None

    def retry(self) -> None:
        """
        오류를 지우고 현재 상태를 소유자에게 다시 알립니다.

        @returns {None} 두 콜백을 모두 다시 호출합니다.
        """
        self.error = None
        self._propagate_nodes()
        self._propagate_edges()

    # -------------------------------------------------------------------------
    # 내부 상태 교체 및 전파
    # -------------------------------------------------------------------------

    def _set_nodes(self, nodes: List[WidgetNode]) -> None:
        self._nodes = nodes
        self._propagate_nodes()

    def _set_edges(self, edges: List[WidgetEdge]) -> None:
        self._edges = edges
        self._propagate_edges()

    def _propagate_nodes(self) -> None:
        self._on_update_nodes(self.domain_nodes())

    def _propagate_edges(self) -> None:
        self._on_update_edges(self.domain_edges())


def _decorate(node: WidgetNode) -> WidgetNode:
    """
    위젯 노드에 표시 전용 스타일/앵커/요약 조각을 붙입니다.

    @param {WidgetNode} node - 매퍼가 만든 위젯 노드.
    @returns {WidgetNode} 페이로드는 그대로 둔 새 위젯 노드.
    """
    return replace(
        node,
        style=dict(NODE_STYLE),
        source_position="bottom",
        target_position="top",
        view=_view_fragment(node.data),
    )


def _view_fragment(data: Dict[str, Any]) -> Dict[str, Any]:
    hours = data.get("timeNeeded") or 0
    return {"title": data.get("label", ""), "caption": f"{hours:g}h"}
