from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from django.conf import settings
from django.db import transaction

from learnhub.lms_core.common.errors import RoadmapIntegrityError, RoadmapNotFoundError
from learnhub.lms_core.controller.serializers import (
    RoadmapEdgeSerializer,
    RoadmapNodeSerializer,
    build_edges,
    build_nodes,
)
from learnhub.lms_core.domain.integrity_report import IntegrityReport
from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.domain.widget_edge import WidgetEdge
from learnhub.lms_core.models import Roadmap
from learnhub.lms_core.service.roadmap.canvas_controller import RoadmapCanvasController
from learnhub.lms_core.service.roadmap.node_details_panel import NodeDetailsPanel
from learnhub.lms_core.service.roadmap.roadmap_integrity import RoadmapIntegrityService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RoadmapService:
    """
    저장된 로드맵과 캔버스 컨트롤러를 잇는 서비스.

    요청마다 로드맵 행을 읽어 컨트롤러를 만들고, 상호작용 한 번을 수행한 뒤
    컨트롤러 콜백이 넘겨준 배열만을 다시 저장합니다.
    """

    def __init__(self, integrity: Optional[RoadmapIntegrityService] = None) -> None:
        self._integrity = integrity or RoadmapIntegrityService()

    # -------------------------------------------------------------------------
    # 조회/생성
    # -------------------------------------------------------------------------

    def list_roadmaps(self, owner) -> List[Roadmap]:
        return list(Roadmap.objects.filter(owner=owner))

    def get_roadmap(self, roadmap_id: str, owner) -> Roadmap:
        """
        @param {str} roadmap_id - 로드맵 ID.
        @param {User} owner - 소유자.
        @returns {Roadmap} 로드맵 행.
        """
        try:
            return Roadmap.objects.get(roadmap_id=roadmap_id, owner=owner)
        except Roadmap.DoesNotExist:
            raise RoadmapNotFoundError(f"로드맵을 찾을 수 없습니다: {roadmap_id}")

    def create_roadmap(
        self,
        owner,
        title: str,
        description: str = "",
        nodes: Optional[List[RoadmapNode]] = None,
        edges: Optional[List[RoadmapEdge]] = None,
    ) -> Roadmap:
        """
        새 로드맵을 만듭니다. 참조 무결성 오류가 있으면 저장하지 않습니다.

        @param {User} owner - 소유자.
        @param {str} title - 제목.
        @param {str} description - 설명.
        @param {Optional[List[RoadmapNode]]} nodes - 초기 노드.
        @param {Optional[List[RoadmapEdge]]} edges - 초기 엣지.
        @returns {Roadmap} 생성된 로드맵 행.
        """
        nodes = nodes or []
        edges = edges or []
        self._integrity.ensure_valid(nodes, edges)
        roadmap = Roadmap.objects.create(
            owner=owner,
            title=title,
            description=description,
            nodes=dump_nodes(nodes),
            edges=dump_edges(edges),
        )
        logger.info("로드맵 생성", extra={"roadmap_id": roadmap.roadmap_id, "nodes": len(nodes)})
        return roadmap

    def load_graph(self, roadmap: Roadmap) -> tuple[List[RoadmapNode], List[RoadmapEdge]]:
        return load_nodes(roadmap.nodes), load_edges(roadmap.edges)

    def integrity_report(self, roadmap_id: str, owner) -> IntegrityReport:
        nodes, edges = self.load_graph(self.get_roadmap(roadmap_id, owner))
        return self._integrity.check(nodes, edges)

    def widget_view(self, roadmap_id: str, owner, viewport_width: Optional[int] = None) -> Dict[str, Any]:
        """
        @param {str} roadmap_id - 로드맵 ID.
        @param {User} owner - 소유자.
        @param {Optional[int]} viewport_width - 클라이언트 화면 너비.
        @returns {Dict[str, Any]} 위젯 렌더링 구성.
        """
        roadmap = self.get_roadmap(roadmap_id, owner)
        nodes, edges = self.load_graph(roadmap)
        canvas = self._preview(nodes, edges, viewport_width)
        return canvas.render()

    # -------------------------------------------------------------------------
    # 캔버스 상호작용
    # -------------------------------------------------------------------------

    def replace_graph(
        self,
        roadmap_id: str,
        owner,
        nodes: List[RoadmapNode],
        edges: List[RoadmapEdge],
    ) -> Roadmap:
        """
        위젯에서 편집된 전체 배열로 로드맵을 교체합니다.

        @returns {Roadmap} 저장된 로드맵 행.
        """
        self._integrity.ensure_valid(nodes, edges)
        with self._canvas(roadmap_id, owner, nodes=nodes, edges=edges) as (roadmap, _canvas):
            pass
        return roadmap

    def connect(
        self,
        roadmap_id: str,
        owner,
        source: str,
        target: str,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ) -> WidgetEdge:
        """
        두 노드를 연결합니다. 존재하지 않는 노드로의 연결은 거부합니다.

        @returns {WidgetEdge} 추가된 엣지.
        """
        with self._canvas(roadmap_id, owner) as (_roadmap, canvas):
            known = {node.id for node in canvas.domain_nodes()}
            missing = [node_id for node_id in (source, target) if node_id not in known]
            if missing:
                message = f"존재하지 않는 노드입니다: {', '.join(missing)}"
                canvas.report_error(message)
                raise RoadmapIntegrityError(message, canvas=canvas.render())
            return canvas.connect(source, target, source_handle, target_handle)

    def move_node(self, roadmap_id: str, owner, node_id: str, position: NodePosition) -> RoadmapNode:
        with self._canvas(roadmap_id, owner) as (_roadmap, canvas):
            canvas.node_drag_stop(node_id, position)
            return _find_node(canvas, node_id)

    def select_node(self, roadmap_id: str, owner, node_id: str, viewport_width: Optional[int] = None) -> Dict[str, Any]:
        """
        노드를 선택하고 상세 패널 표시 정보를 반환합니다.

        @returns {Dict[str, Any]} 상세 패널 표시 정보.
        """
        roadmap = self.get_roadmap(roadmap_id, owner)
        nodes, edges = self.load_graph(roadmap)
        canvas = self._preview(nodes, edges, viewport_width)
        if canvas.node_click(node_id) is None:
            raise RoadmapNotFoundError(f"노드를 찾을 수 없습니다: {node_id}")
        return NodeDetailsPanel(canvas).render()

    def update_node(self, roadmap_id: str, owner, node_id: str, form: Dict[str, Any]) -> RoadmapNode:
        """
        상세 패널 편집 내용을 노드에 반영합니다.

        @param {Dict[str, Any]} form - 편집 폼 값.
        @returns {RoadmapNode} 수정된 노드.
        """
        with self._canvas(roadmap_id, owner) as (_roadmap, canvas):
            if canvas.node_click(node_id) is None:
                raise RoadmapNotFoundError(f"노드를 찾을 수 없습니다: {node_id}")
            return NodeDetailsPanel(canvas).submit(form)

    def remove_node(self, roadmap_id: str, owner, node_id: str) -> None:
        """
        노드와 그 노드에 연결된 엣지를 함께 제거하고, 다른 노드의 자식 목록에서도 지웁니다.

        @returns {None} 제거 결과를 저장합니다.
        """
        with self._canvas(roadmap_id, owner) as (_roadmap, canvas):
            _find_node(canvas, node_id)
            connected = [edge.id for edge in canvas.edges if node_id in (edge.source, edge.target)]
            canvas.apply_edge_changes([{"type": "remove", "id": edge_id} for edge_id in connected])
            for parent in canvas.domain_nodes():
                if parent.id != node_id and node_id in parent.children:
                    canvas.apply_node_update(
                        replace(parent, children=[child for child in parent.children if child != node_id])
                    )
            canvas.apply_node_changes([{"type": "remove", "id": node_id}])

    def remove_edge(self, roadmap_id: str, owner, edge_id: str) -> None:
        with self._canvas(roadmap_id, owner) as (_roadmap, canvas):
            if not any(edge.id == edge_id for edge in canvas.edges):
                raise RoadmapNotFoundError(f"엣지를 찾을 수 없습니다: {edge_id}")
            canvas.apply_edge_changes([{"type": "remove", "id": edge_id}])

    # -------------------------------------------------------------------------
    # 내부 유틸
    # -------------------------------------------------------------------------

    def _preview(self, nodes, edges, viewport_width: Optional[int]) -> RoadmapCanvasController:
        """
        저장하지 않는 조회용 컨트롤러를 만듭니다.

        @returns {RoadmapCanvasController} 콜백이 아무것도 하지 않는 컨트롤러.
        """
        return RoadmapCanvasController(
            nodes,
            edges,
            _ignore,
            _ignore,
            viewport_width=viewport_width,
            mobile_breakpoint=settings.CANVAS_MOBILE_BREAKPOINT,
        )

    @contextmanager
    def _canvas(
        self,
        roadmap_id: str,
        owner,
        nodes: Optional[List[RoadmapNode]] = None,
        edges: Optional[List[RoadmapEdge]] = None,
    ) -> Iterator[tuple[Roadmap, RoadmapCanvasController]]:
        """
        로드맵 행을 잠그고 컨트롤러를 만든 뒤, 블록이 정상 종료되면 전파된 배열을 저장합니다.

        @returns {Iterator} (로드맵 행, 컨트롤러) 튜플.
        """
        with transaction.atomic():
            try:
                roadmap = Roadmap.objects.select_for_update().get(roadmap_id=roadmap_id, owner=owner)
            except Roadmap.DoesNotExist:
                raise RoadmapNotFoundError(f"로드맵을 찾을 수 없습니다: {roadmap_id}")

            if nodes is None or edges is None:
                stored_nodes, stored_edges = self.load_graph(roadmap)
                nodes = stored_nodes if nodes is None else nodes
                edges = stored_edges if edges is None else edges

            canvas = RoadmapCanvasController(
                nodes,
                edges,
                on_update_nodes=_writer(roadmap, "nodes", dump_nodes),
                on_update_edges=_writer(roadmap, "edges", dump_edges),
            )
            yield roadmap, canvas
            roadmap.save(update_fields=["nodes", "edges", "updated_at"])
            logger.debug(
                "로드맵 저장",
                extra={"roadmap_id": roadmap.roadmap_id, "nodes": len(roadmap.nodes), "edges": len(roadmap.edges)},
            )


def load_nodes(items: List[Dict[str, Any]]) -> List[RoadmapNode]:
    """
    JSON 저장 형식에서 도메인 노드를 복원합니다.

    @param {List[Dict[str, Any]]} items - 저장된 노드 목록.
    @returns {List[RoadmapNode]} 도메인 노드 목록.
    """
    serializer = RoadmapNodeSerializer(data=items, many=True)
    serializer.is_valid(raise_exception=True)
    return build_nodes(serializer.validated_data)


def load_edges(items: List[Dict[str, Any]]) -> List[RoadmapEdge]:
    serializer = RoadmapEdgeSerializer(data=items, many=True)
    serializer.is_valid(raise_exception=True)
    return build_edges(serializer.validated_data)


def dump_nodes(nodes: List[RoadmapNode]) -> List[Dict[str, Any]]:
    return [dict(item) for item in RoadmapNodeSerializer(nodes, many=True).data]


def dump_edges(edges: List[RoadmapEdge]) -> List[Dict[str, Any]]:
    return [dict(item) for item in RoadmapEdgeSerializer(edges, many=True).data]


def _writer(roadmap: Roadmap, field_name: str, dump: Callable[[List[T]], List[Dict[str, Any]]]) -> Callable[[List[T]], None]:
    def _write(items: List[T]) -> None:
        setattr(roadmap, field_name, dump(items))

    return _write


def _find_node(canvas: RoadmapCanvasController, node_id: str) -> RoadmapNode:
    for node in canvas.domain_nodes():
        if node.id == node_id:
            return node
    raise RoadmapNotFoundError(f"노드를 찾을 수 없습니다: {node_id}")


def _ignore(_items) -> None:
    return None
