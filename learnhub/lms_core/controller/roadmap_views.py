from __future__ import annotations

from typing import Optional

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema

from learnhub.lms_core.common.errors import RoadmapIntegrityError, RoadmapNotFoundError
from learnhub.lms_core.controller.common import _error, _serialize
from learnhub.lms_core.controller.serializers import (
    CanvasSerializer,
    ConnectSerializer,
    IntegrityReportSerializer,
    NodeDetailsFormSerializer,
    NodeDetailsSerializer,
    PositionSerializer,
    RoadmapCreateSerializer,
    RoadmapGraphSerializer,
    RoadmapNodeSerializer,
    RoadmapSerializer,
    WidgetEdgeSerializer,
    build_edges,
    build_nodes,
)
from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.service.roadmap.roadmap_service import RoadmapService

VIEWPORT_PARAMETER = OpenApiParameter(
    "viewport_width",
    OpenApiTypes.INT,
    required=False,
    description="클라이언트 화면 너비(px). 768 이하이면 모바일 레이아웃",
)


class RoadmapListAPIView(APIView):
    """내 로드맵 목록/생성."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="로드맵 목록", responses={200: RoadmapSerializer(many=True)})
    def get(self, request) -> Response:
        service = RoadmapService()
        payload = [_roadmap_payload(service, roadmap) for roadmap in service.list_roadmaps(request.user)]
        return _serialize(RoadmapSerializer, payload, many=True)

    @extend_schema(summary="로드맵 생성", request=RoadmapCreateSerializer, responses={201: RoadmapSerializer})
    def post(self, request) -> Response:
        """
        @param request DRF 요청 객체 (title/description/nodes/edges).
        @returns 생성된 로드맵 JSON.
        """
        serializer = RoadmapCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = RoadmapService()
        try:
            roadmap = service.create_roadmap(
                request.user,
                title=data["title"],
                description=data["description"],
                nodes=build_nodes(data["nodes"]),
                edges=build_edges(data["edges"]),
            )
        except RoadmapIntegrityError as exc:
            return _error(str(exc))
        return _serialize(RoadmapSerializer, _roadmap_payload(service, roadmap), status_code=status.HTTP_201_CREATED)


class RoadmapDetailAPIView(APIView):
    """로드맵 조회 및 전체 배열 교체."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="로드맵 조회", responses={200: RoadmapSerializer})
    def get(self, request, roadmap_id: str) -> Response:
        service = RoadmapService()
        try:
            roadmap = service.get_roadmap(roadmap_id, request.user)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(RoadmapSerializer, _roadmap_payload(service, roadmap))

    @extend_schema(summary="로드맵 노드/엣지 교체", request=RoadmapGraphSerializer, responses={200: RoadmapSerializer})
    def put(self, request, roadmap_id: str) -> Response:
        """
        @param request DRF 요청 객체 (nodes/edges 전체 배열).
        @param roadmap_id 로드맵 ID.
        @returns 저장된 로드맵 JSON.
        """
        serializer = RoadmapGraphSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        service = RoadmapService()
        try:
            roadmap = service.replace_graph(
                roadmap_id,
                request.user,
                nodes=build_nodes(serializer.validated_data["nodes"]),
                edges=build_edges(serializer.validated_data["edges"]),
            )
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except RoadmapIntegrityError as exc:
            return _error(str(exc))
        return _serialize(RoadmapSerializer, _roadmap_payload(service, roadmap))


class RoadmapWidgetAPIView(APIView):
    """다이어그램 위젯용 캔버스 구성."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="위젯 캔버스 구성", parameters=[VIEWPORT_PARAMETER], responses={200: CanvasSerializer})
    def get(self, request, roadmap_id: str) -> Response:
        try:
            payload = RoadmapService().widget_view(roadmap_id, request.user, _viewport_width(request))
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(CanvasSerializer, payload)


class RoadmapIntegrityAPIView(APIView):
    """참조 무결성 검사."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="무결성 검사", responses={200: IntegrityReportSerializer})
    def get(self, request, roadmap_id: str) -> Response:
        try:
            report = RoadmapService().integrity_report(roadmap_id, request.user)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(IntegrityReportSerializer, report)


class RoadmapConnectAPIView(APIView):
    """두 노드를 엣지로 연결."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="노드 연결", request=ConnectSerializer, responses={201: WidgetEdgeSerializer})
    def post(self, request, roadmap_id: str) -> Response:
        """
        @param request DRF 요청 객체 (source/target).
        @param roadmap_id 로드맵 ID.
        @returns 추가된 엣지 JSON. 거부되면 오류 슬롯이 채워진 캔버스 구성을 함께 반환합니다.
        """
        serializer = ConnectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            edge = RoadmapService().connect(roadmap_id, request.user, **serializer.validated_data)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        except RoadmapIntegrityError as exc:
            return _error(str(exc), canvas=CanvasSerializer(exc.canvas).data)
        return _serialize(WidgetEdgeSerializer, edge, status_code=status.HTTP_201_CREATED)


class RoadmapEdgeAPIView(APIView):
    """엣지 제거."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="엣지 제거", responses={204: None})
    def delete(self, request, roadmap_id: str, edge_id: str) -> Response:
        try:
            RoadmapService().remove_edge(roadmap_id, request.user, edge_id)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoadmapNodeAPIView(APIView):
    """상세 패널 편집 및 노드 제거."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="노드 상세 수정", request=NodeDetailsFormSerializer, responses={200: RoadmapNodeSerializer})
    def patch(self, request, roadmap_id: str, node_id: str) -> Response:
        """
        @param request DRF 요청 객체 (수정할 필드만 전달).
        @param roadmap_id 로드맵 ID.
        @param node_id 노드 ID.
        @returns 수정된 노드 JSON.
        """
        try:
            node = RoadmapService().update_node(roadmap_id, request.user, node_id, request.data)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(RoadmapNodeSerializer, node)

    @extend_schema(summary="노드 제거 (연결된 엣지 포함)", responses={204: None})
    def delete(self, request, roadmap_id: str, node_id: str) -> Response:
        try:
            RoadmapService().remove_node(roadmap_id, request.user, node_id)
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RoadmapNodeMoveAPIView(APIView):
    """노드 드래그 종료 위치 반영."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="노드 이동", request=PositionSerializer, responses={200: RoadmapNodeSerializer})
    def post(self, request, roadmap_id: str, node_id: str) -> Response:
        serializer = PositionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            node = RoadmapService().move_node(
                roadmap_id, request.user, node_id, NodePosition(**serializer.validated_data)
            )
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(RoadmapNodeSerializer, node)


class RoadmapNodeSelectAPIView(APIView):
    """노드 클릭 시 상세 패널 정보."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="노드 선택", parameters=[VIEWPORT_PARAMETER], responses={200: NodeDetailsSerializer})
    def get(self, request, roadmap_id: str, node_id: str) -> Response:
        try:
            payload = RoadmapService().select_node(roadmap_id, request.user, node_id, _viewport_width(request))
        except RoadmapNotFoundError as exc:
            return _error(str(exc), status.HTTP_404_NOT_FOUND)
        return _serialize(NodeDetailsSerializer, payload)


def _roadmap_payload(service: RoadmapService, roadmap) -> dict:
    """
    @param service 로드맵 서비스.
    @param roadmap 로드맵 행.
    @returns RoadmapSerializer 입력용 딕셔너리.
    """
    nodes, edges = service.load_graph(roadmap)
    return {
        "roadmap_id": roadmap.roadmap_id,
        "owner_id": roadmap.owner_id,
        "title": roadmap.title,
        "description": roadmap.description,
        "nodes": nodes,
        "edges": edges,
        "stats": {
            "node_count": len(nodes),
            "completed_count": sum(1 for node in nodes if node.completed),
        },
        "updated_at": roadmap.updated_at,
    }


def _viewport_width(request) -> Optional[int]:
    value = request.GET.get("viewport_width")
    if value is None or not value.isdigit():
        return None
    return int(value)
