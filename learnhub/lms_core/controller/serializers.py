from __future__ import annotations

from rest_framework import serializers

from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode


class PositionSerializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()

    def create(self, validated_data) -> NodePosition:
        return NodePosition(**validated_data)


class RoadmapNodeSerializer(serializers.Serializer):
    """도메인 노드 입출력 및 JSON 저장 형식."""

    id = serializers.CharField(max_length=100)
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_blank=True, default="")
    completed = serializers.BooleanField(default=False)
    completion_time = serializers.DateTimeField(allow_null=True, default=None)
    deadline = serializers.DateTimeField(allow_null=True, default=None)
    time_needed = serializers.FloatField(min_value=0, default=0.0)
    time_consumed = serializers.FloatField(min_value=0, default=0.0)
    children = serializers.ListField(child=serializers.CharField(), default=list)
    position = PositionSerializer(required=False)

    def create(self, validated_data) -> RoadmapNode:
        """
        @param validated_data 검증된 노드 필드.
        @returns 도메인 노드 객체.
        """
        position = validated_data.pop("position", None) or {}
        return RoadmapNode(position=NodePosition(**position), **validated_data)


class RoadmapEdgeSerializer(serializers.Serializer):
    """도메인 엣지 입출력 및 JSON 저장 형식."""

    id = serializers.CharField(max_length=100)
    source = serializers.CharField(max_length=100)
    target = serializers.CharField(max_length=100)
    type = serializers.CharField(allow_null=True, allow_blank=True, default="default")
    animated = serializers.BooleanField(default=False)
    label = serializers.CharField(allow_null=True, allow_blank=True, default=None)

    def create(self, validated_data) -> RoadmapEdge:
        return RoadmapEdge(**validated_data)


class NodeDetailsFormSerializer(serializers.Serializer):
    """상세 패널 편집 폼. 전달되지 않은 필드는 기존 값을 유지합니다."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_blank=True)
    completed = serializers.BooleanField()
    completion_time = serializers.DateTimeField(allow_null=True)
    deadline = serializers.DateTimeField(allow_null=True)
    time_needed = serializers.FloatField(min_value=0)
    time_consumed = serializers.FloatField(min_value=0)
    children = serializers.ListField(child=serializers.CharField())


class RoadmapCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(allow_blank=True, default="")
    nodes = RoadmapNodeSerializer(many=True, default=list)
    edges = RoadmapEdgeSerializer(many=True, default=list)


class RoadmapGraphSerializer(serializers.Serializer):
    nodes = RoadmapNodeSerializer(many=True)
    edges = RoadmapEdgeSerializer(many=True)


class ConnectSerializer(serializers.Serializer):
    source = serializers.CharField(max_length=100)
    target = serializers.CharField(max_length=100)
    source_handle = serializers.CharField(allow_null=True, default=None)
    target_handle = serializers.CharField(allow_null=True, default=None)


class CanvasStatsSerializer(serializers.Serializer):
    node_count = serializers.IntegerField()
    completed_count = serializers.IntegerField()


class RoadmapSerializer(serializers.Serializer):
    roadmap_id = serializers.CharField()
    owner_id = serializers.IntegerField()
    title = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    nodes = RoadmapNodeSerializer(many=True)
    edges = RoadmapEdgeSerializer(many=True)
    stats = CanvasStatsSerializer()
    updated_at = serializers.DateTimeField()


class WidgetNodeSerializer(serializers.Serializer):
    id = serializers.CharField()
    position = PositionSerializer()
    data = serializers.JSONField()
    view = serializers.JSONField()
    style = serializers.JSONField()
    sourcePosition = serializers.CharField(source="source_position", allow_null=True)
    targetPosition = serializers.CharField(source="target_position", allow_null=True)
    selected = serializers.BooleanField()


class WidgetEdgeSerializer(serializers.Serializer):
    id = serializers.CharField()
    source = serializers.CharField()
    target = serializers.CharField()
    type = serializers.CharField(allow_null=True)
    animated = serializers.BooleanField()
    label = serializers.CharField(allow_null=True)
    sourceHandle = serializers.CharField(source="source_handle", allow_null=True)
    targetHandle = serializers.CharField(source="target_handle", allow_null=True)


class CanvasSerializer(serializers.Serializer):
    nodes = WidgetNodeSerializer(many=True)
    edges = WidgetEdgeSerializer(many=True)
    default_edge_options = serializers.JSONField()
    viewport = serializers.JSONField()
    stats = CanvasStatsSerializer()
    selected_node_id = serializers.CharField(allow_null=True)
    is_mobile = serializers.BooleanField()
    error = serializers.CharField(allow_null=True)


class NodeDetailsSerializer(serializers.Serializer):
    node = RoadmapNodeSerializer()
    layout = serializers.CharField()
    progress_ratio = serializers.FloatField(allow_null=True)
    overdue = serializers.BooleanField()


class IntegrityReportSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    duplicate_node_ids = serializers.ListField(child=serializers.CharField())
    dangling_edges = serializers.ListField(child=serializers.CharField())
    dangling_children = serializers.ListField(child=serializers.CharField())
    duplicate_edges = serializers.ListField(child=serializers.CharField())
    cycles = serializers.ListField(child=serializers.ListField(child=serializers.CharField()))
    warnings = serializers.ListField(child=serializers.CharField())


class RegisterSerializer(serializers.Serializer):
    first_name = serializers.CharField(allow_blank=True, default="")
    last_name = serializers.CharField(allow_blank=True, default="")
    email = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", write_only=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", write_only=True)


class UserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    first_name = serializers.CharField(allow_blank=True)
    last_name = serializers.CharField(allow_blank=True)
    date_joined = serializers.DateTimeField()


class CourseFormSerializer(serializers.Serializer):
    """튜터 강의 편집 폼."""

    title = serializers.CharField(max_length=200)
    category = serializers.CharField(max_length=50)
    price = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=0)
    level = serializers.ChoiceField(choices=["beginner", "intermediate", "advanced"])
    description = serializers.CharField()
    prerequisites = serializers.CharField(allow_blank=True, default="")
    outcomes = serializers.CharField(allow_blank=True, default="")


class CourseSerializer(serializers.Serializer):
    course_id = serializers.CharField()
    tutor_id = serializers.IntegerField()
    title = serializers.CharField()
    category = serializers.CharField()
    price = serializers.DecimalField(max_digits=8, decimal_places=2)
    level = serializers.CharField()
    description = serializers.CharField()
    prerequisites = serializers.ListField(child=serializers.CharField())
    outcomes = serializers.ListField(child=serializers.CharField())
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class DashboardRoadmapSerializer(serializers.Serializer):
    roadmap_id = serializers.CharField()
    title = serializers.CharField()
    node_count = serializers.IntegerField()
    completed_count = serializers.IntegerField()
    hours_needed = serializers.FloatField()
    hours_consumed = serializers.FloatField()


class DashboardSerializer(serializers.Serializer):
    user = UserSerializer()
    roadmaps = DashboardRoadmapSerializer(many=True)
    courses = CourseSerializer(many=True)
    generated_at = serializers.CharField()


class HealthCheckSerializer(serializers.Serializer):
    status = serializers.CharField()
    version = serializers.CharField()
    services = serializers.DictField(child=serializers.BooleanField())
    timestamp = serializers.CharField()


def build_nodes(items) -> list[RoadmapNode]:
    """
    @param items 검증된 노드 딕셔너리 목록.
    @returns 도메인 노드 목록.
    """
    return [RoadmapNodeSerializer().create(dict(item)) for item in items]


def build_edges(items) -> list[RoadmapEdge]:
    """
    @param items 검증된 엣지 딕셔너리 목록.
    @returns 도메인 엣지 목록.
    """
    return [RoadmapEdgeSerializer().create(dict(item)) for item in items]
