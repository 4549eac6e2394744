from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NodePosition:
    """캔버스 위 노드 좌표."""

    x: float = 0.0
    y: float = 0.0
