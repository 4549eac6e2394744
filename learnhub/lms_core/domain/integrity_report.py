from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class IntegrityReport:
    """로드맵 참조 무결성 검사 결과."""

    duplicate_node_ids: List[str] = field(default_factory=list)
    dangling_edges: List[str] = field(default_factory=list)
    dangling_children: List[str] = field(default_factory=list)
    duplicate_edges: List[str] = field(default_factory=list)
    cycles: List[List[str]] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """
        저장을 막아야 하는 오류가 없는지 여부를 반환합니다.

        @returns {bool} 중복 노드 ID와 끊어진 엣지가 없으면 True.
        """
        return not self.duplicate_node_ids and not self.dangling_edges

    @property
    def warnings(self) -> List[str]:
        """
        @returns {List[str]} 저장은 허용되지만 알려야 하는 항목 요약.
        """
        messages: List[str] = []
        if self.dangling_children:
            messages.append(f"존재하지 않는 자식 참조: {', '.join(self.dangling_children)}")
        if self.duplicate_edges:
            messages.append(f"중복 엣지: {', '.join(self.duplicate_edges)}")
        for cycle in self.cycles:
            messages.append(f"순환 경로: {' -> '.join(cycle)}")
        return messages
