from __future__ import annotations

import logging
from collections import Counter
from typing import List, Set, Tuple

import networkx as nx

from learnhub.lms_core.common.errors import RoadmapIntegrityError
from learnhub.lms_core.domain.integrity_report import IntegrityReport
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode

logger = logging.getLogger(__name__)


class RoadmapIntegrityService:
    """로드맵 노드/엣지의 참조 무결성을 검사하는 서비스."""

    def check(self, nodes: List[RoadmapNode], edges: List[RoadmapEdge]) -> IntegrityReport:
        """
        참조 무결성 위반 항목을 모두 수집합니다.

        @param {List[RoadmapNode]} nodes - 도메인 노드 배열.
        @param {List[RoadmapEdge]} edges - 도메인 엣지 배열.
        @returns {IntegrityReport} 위반 항목 보고서.
        """
        report = IntegrityReport()
        id_counts = Counter(node.id for node in nodes)
        report.duplicate_node_ids = [node_id for node_id, count in id_counts.items() if count > 1]
        node_ids: Set[str] = set(id_counts)

        graph = nx.DiGraph()
        graph.add_nodes_from(node_ids)
        seen_pairs: Set[Tuple[str, str]] = set()
        for edge in edges:
            if edge.source not in node_ids or edge.target not in node_ids:
                report.dangling_edges.append(edge.id)
                continue
            pair = (edge.source, edge.target)
            if pair in seen_pairs:
                report.duplicate_edges.append(edge.id)
            seen_pairs.add(pair)
            graph.add_edge(edge.source, edge.target)

        for node in nodes:
            for child in node.children:
                if child not in node_ids:
                    report.dangling_children.append(f"{node.id}->{child}")

        report.cycles = [list(cycle) for cycle in nx.simple_cycles(graph)]
        return report

    def ensure_valid(self, nodes: List[RoadmapNode], edges: List[RoadmapEdge]) -> IntegrityReport:
        """
        저장을 막아야 하는 위반이 있으면 예외를 발생시킵니다.

        @param {List[RoadmapNode]} nodes - 도메인 노드 배열.
        @param {List[RoadmapEdge]} edges - 도메인 엣지 배열.
        @returns {IntegrityReport} 경고만 남은 보고서.
        """
        report = self.check(nodes, edges)
        if report.duplicate_node_ids:
            raise RoadmapIntegrityError(f"중복된 노드 ID: {', '.join(report.duplicate_node_ids)}")
        if report.dangling_edges:
            raise RoadmapIntegrityError(f"존재하지 않는 노드를 참조하는 엣지: {', '.join(report.dangling_edges)}")
        if report.warnings:
            logger.info("로드맵 무결성 경고", extra={"warnings": report.warnings})
        return report
