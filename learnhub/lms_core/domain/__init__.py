from learnhub.lms_core.domain.canvas_stats import CanvasStats
from learnhub.lms_core.domain.integrity_report import IntegrityReport
from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.domain.widget_edge import WidgetEdge
from learnhub.lms_core.domain.widget_node import WidgetNode

__all__ = [
    "CanvasStats",
    "IntegrityReport",
    "NodePosition",
    "RoadmapEdge",
    "RoadmapNode",
    "WidgetEdge",
    "WidgetNode",
]
