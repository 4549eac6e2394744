from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RoadmapEdge:
    """로드맵 노드 사이의 선후 관계 엣지."""

    id: str
    source: str
    target: str
    type: Optional[str] = "default"
    animated: bool = False
    label: Optional[str] = None
