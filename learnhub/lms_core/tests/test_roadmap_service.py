from django.contrib.auth import get_user_model
from django.test import TestCase

from learnhub.lms_core.common.errors import RoadmapIntegrityError, RoadmapNotFoundError
from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.domain.roadmap_edge import RoadmapEdge
from learnhub.lms_core.models import Roadmap
from learnhub.lms_core.service.roadmap.roadmap_service import RoadmapService
from learnhub.lms_core.tests.fixtures import sample_edges, sample_nodes


class RoadmapServiceTests(TestCase):
    def setUp(self) -> None:
        """
        소유자와 기본 로드맵을 생성합니다.

        @returns {None} 테스트 데이터를 준비합니다.
        """
        self.owner = get_user_model().objects.create_user(username="kim@example.com", email="kim@example.com", password="pw-12345678")
        self.service = RoadmapService()
        self.roadmap = self.service.create_roadmap(
            self.owner, title="프론트엔드", nodes=sample_nodes(), edges=sample_edges()
        )

    def _stored(self):
        return self.service.load_graph(Roadmap.objects.get(pk=self.roadmap.pk))

    def test_create_round_trips_through_json(self) -> None:
        nodes, edges = self._stored()
        self.assertEqual(nodes, sample_nodes())
        self.assertEqual(edges, sample_edges())

    def test_create_rejects_dangling_edges(self) -> None:
        with self.assertRaises(RoadmapIntegrityError):
            self.service.create_roadmap(
                self.owner,
                title="깨진 로드맵",
                nodes=sample_nodes(),
                edges=[RoadmapEdge(id="e1", source="node_html", target="nowhere")],
            )

    def test_move_node_persists_position(self) -> None:
        """
        드래그 종료가 해당 노드 좌표만 저장하는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        moved = self.service.move_node(self.roadmap.roadmap_id, self.owner, "node_js", NodePosition(x=200, y=10))
        self.assertEqual(moved.position, NodePosition(x=200, y=10))
        nodes, _edges = self._stored()
        self.assertEqual(nodes[2].position, NodePosition(x=200, y=10))
        self.assertEqual(nodes[:2], sample_nodes()[:2])

    def test_move_unknown_node_does_not_save(self) -> None:
        with self.assertRaises(RoadmapNotFoundError):
            self.service.move_node(self.roadmap.roadmap_id, self.owner, "ghost", NodePosition(x=1, y=1))

    def test_connect_persists_edge(self) -> None:
        edge = self.service.connect(self.roadmap.roadmap_id, self.owner, "node_html", "node_js")
        _nodes, edges = self._stored()
        self.assertEqual(edges[-1].id, edge.id)
        self.assertTrue(edges[-1].animated)

    def test_connect_rejects_unknown_nodes(self) -> None:
        with self.assertRaises(RoadmapIntegrityError) as ctx:
            self.service.connect(self.roadmap.roadmap_id, self.owner, "node_html", "ghost")
        self.assertEqual(ctx.exception.canvas["error"], str(ctx.exception))
        _nodes, edges = self._stored()
        self.assertEqual(len(edges), 2)

    def test_update_node(self) -> None:
        updated = self.service.update_node(
            self.roadmap.roadmap_id, self.owner, "node_css", {"description": "Grid 중심", "completed": True}
        )
        self.assertTrue(updated.completed)
        nodes, _edges = self._stored()
        self.assertEqual(nodes[1].description, "Grid 중심")
        self.assertIsNotNone(nodes[1].completion_time)
        self.assertEqual(nodes[1].position, NodePosition(x=0, y=120))

    def test_remove_node_drops_connected_edges(self) -> None:
        """
        노드 삭제 시 연결된 엣지와 부모의 자식 참조도 함께 정리되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        self.service.remove_node(self.roadmap.roadmap_id, self.owner, "node_css")
        nodes, edges = self._stored()
        self.assertEqual([node.id for node in nodes], ["node_html", "node_js"])
        self.assertEqual(edges, [])
        self.assertEqual(nodes[0].children, [])
        self.assertEqual(self.service.integrity_report(self.roadmap.roadmap_id, self.owner).dangling_children, [])

    def test_other_owner_cannot_access(self) -> None:
        stranger = get_user_model().objects.create_user(username="lee@example.com", password="pw-12345678")
        with self.assertRaises(RoadmapNotFoundError):
            self.service.get_roadmap(self.roadmap.roadmap_id, stranger)

    def test_select_node_renders_details(self) -> None:
        details = self.service.select_node(self.roadmap.roadmap_id, self.owner, "node_html", viewport_width=500)
        self.assertEqual(details["node"].title, "HTML 기초")
        self.assertEqual(details["layout"], "sheet")
