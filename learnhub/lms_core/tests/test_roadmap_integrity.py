import unittest

from learnhub.lms_core.common.errors import RoadmapIntegrityError
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.domain.roadmap_node import RoadmapNode
from learnhub.lms_core.service.roadmap.roadmap_integrity import RoadmapIntegrityService
from learnhub.lms_core.tests.fixtures import sample_edges, sample_nodes


class RoadmapIntegrityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = RoadmapIntegrityService()

    def test_clean_roadmap(self) -> None:
        report = self.service.check(sample_nodes(), sample_edges())
        self.assertTrue(report.is_valid)
        self.assertEqual(report.warnings, [])

    def test_dangling_edge_is_error(self) -> None:
        """
        존재하지 않는 노드를 가리키는 엣지가 저장 불가 오류로 분류되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        edges = sample_edges() + [RoadmapEdge(id="e_bad", source="node_js", target="node_ts")]
        report = self.service.check(sample_nodes(), edges)
        self.assertFalse(report.is_valid)
        self.assertEqual(report.dangling_edges, ["e_bad"])
        with self.assertRaises(RoadmapIntegrityError):
            self.service.ensure_valid(sample_nodes(), edges)

    def test_duplicate_node_ids(self) -> None:
        nodes = sample_nodes() + [RoadmapNode(id="node_html", title="중복")]
        with self.assertRaises(RoadmapIntegrityError):
            self.service.ensure_valid(nodes, [])

    def test_duplicates_and_cycles_are_warnings(self) -> None:
        """
        중복 엣지와 순환은 경고로만 남고 저장은 허용되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        nodes = sample_nodes()
        nodes[2].children = ["node_missing"]
        edges = sample_edges() + [
            RoadmapEdge(id="e_dup", source="node_html", target="node_css"),
            RoadmapEdge(id="e_back", source="node_js", target="node_html"),
        ]
        report = self.service.ensure_valid(nodes, edges)
        self.assertEqual(report.duplicate_edges, ["e_dup"])
        self.assertEqual(report.dangling_children, ["node_js->node_missing"])
        self.assertEqual(len(report.cycles), 1)
        self.assertEqual(set(report.cycles[0]), {"node_html", "node_css", "node_js"})
        self.assertEqual(len(report.warnings), 3)


if __name__ == "__main__":
    unittest.main()
