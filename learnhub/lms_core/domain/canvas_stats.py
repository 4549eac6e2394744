from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CanvasStats:
    """캔버스 오버레이에 표시되는 노드 통계."""

    node_count: int
    completed_count: int
