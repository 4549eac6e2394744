from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class WidgetEdge:
    """다이어그램 위젯이 사용하는 엣지 표현."""

    id: str
    source: str
    target: str
    type: Optional[str] = None
    animated: bool = False
    label: Optional[object] = None
    source_handle: Optional[str] = None
    target_handle: Optional[str] = None
