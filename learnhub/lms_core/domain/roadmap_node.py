from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from learnhub.lms_core.domain.node_position import NodePosition


@dataclass
class RoadmapNode:
    """로드맵을 구성하는 학습 단계 노드."""

    id: str
    title: str
    description: str = ""
    completed: bool = False
    completion_time: Optional[datetime] = None
    deadline: Optional[datetime] = None
    time_needed: float = 0.0
    time_consumed: float = 0.0
    children: List[str] = field(default_factory=list)
    position: NodePosition = field(default_factory=NodePosition)
