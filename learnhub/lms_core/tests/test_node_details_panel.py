import unittest
from datetime import datetime, timezone

from rest_framework.exceptions import ValidationError

from learnhub.lms_core.domain.node_position import NodePosition
from learnhub.lms_core.service.roadmap.canvas_controller import RoadmapCanvasController
from learnhub.lms_core.service.roadmap.node_details_panel import NodeDetailsPanel
from learnhub.lms_core.tests.fixtures import CallbackRecorder, sample_edges, sample_nodes


class NodeDetailsPanelTests(unittest.TestCase):
    def _panel(self, viewport_width=None) -> NodeDetailsPanel:
        self.recorder = CallbackRecorder()
        self.canvas = RoadmapCanvasController(
            sample_nodes(),
            sample_edges(),
            self.recorder.on_nodes,
            self.recorder.on_edges,
            viewport_width=viewport_width,
        )
        return NodeDetailsPanel(self.canvas)

    def test_render_without_selection(self) -> None:
        panel = self._panel()
        self.assertFalse(panel.is_open)
        self.assertIsNone(panel.render())

    def test_render_selected_node(self) -> None:
        """
        선택된 노드의 진행률/마감 초과/레이아웃 정보가 계산되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        panel = self._panel(viewport_width=375)
        self.canvas.node_click("node_js")
        view = panel.render(now=datetime(2025, 3, 1, tzinfo=timezone.utc))
        self.assertEqual(view["node"].id, "node_js")
        self.assertEqual(view["layout"], "sheet")
        self.assertEqual(view["progress_ratio"], 0.0)
        self.assertTrue(view["overdue"])

    def test_completed_node_is_never_overdue(self) -> None:
        panel = self._panel()
        self.canvas.node_click("node_html")
        view = panel.render(now=datetime(2026, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(view["layout"], "sidebar")
        self.assertFalse(view["overdue"])
        self.assertEqual(view["progress_ratio"], 0.875)

    def test_submit_updates_only_selected_node(self) -> None:
        """
        상세 패널 제출이 선택된 노드의 페이로드만 바꾸고 위치는 유지하는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        panel = self._panel()
        self.canvas.node_click("node_css")
        updated = panel.submit({"title": "CSS 레이아웃 심화", "time_consumed": "2.5"})
        self.assertEqual(updated.title, "CSS 레이아웃 심화")
        self.assertEqual(updated.time_consumed, 2.5)

        nodes = self.recorder.node_calls[-1]
        self.assertEqual(nodes[1].title, "CSS 레이아웃 심화")
        self.assertEqual(nodes[1].description, "Flexbox와 Grid")
        self.assertEqual(nodes[1].position, NodePosition(x=0, y=120))
        self.assertEqual(nodes[0], sample_nodes()[0])
        self.assertEqual(self.canvas.selected_node.title, "CSS 레이아웃 심화")

    def test_completing_sets_completion_time(self) -> None:
        panel = self._panel()
        self.canvas.node_click("node_css")
        updated = panel.submit({"completed": True})
        self.assertTrue(updated.completed)
        self.assertIsNotNone(updated.completion_time)

    def test_submit_rejects_invalid_values(self) -> None:
        panel = self._panel()
        self.canvas.node_click("node_css")
        with self.assertRaises(ValidationError):
            panel.submit({"title": ""})
        with self.assertRaises(ValidationError):
            panel.submit({"time_needed": -1})
        self.assertEqual(len(self.recorder.node_calls), 1)

    def test_submit_without_selection(self) -> None:
        panel = self._panel()
        with self.assertRaises(LookupError):
            panel.submit({"title": "x"})

    def test_close_clears_selection(self) -> None:
        panel = self._panel()
        self.canvas.node_click("node_css")
        panel.close()
        self.assertFalse(panel.is_open)


if __name__ == "__main__":
    unittest.main()
