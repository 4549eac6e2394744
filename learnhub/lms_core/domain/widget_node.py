from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from learnhub.lms_core.domain.node_position import NodePosition


@dataclass
class WidgetNode:
    """
    다이어그램 위젯이 사용하는 노드 표현.

    `data`는 도메인 필드를 그대로 담는 페이로드이며,
    화면에 그려지는 요약 조각은 `view`에만 둡니다.
    """

    id: str
    position: NodePosition
    data: Dict[str, Any]
    view: Optional[Dict[str, Any]] = None
    style: Dict[str, Any] = field(default_factory=dict)
    source_position: Optional[str] = None
    target_position: Optional[str] = None
    selected: bool = False
