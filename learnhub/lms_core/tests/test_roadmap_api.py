from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APITestCase

from learnhub.lms_core.service.roadmap.roadmap_service import RoadmapService
from learnhub.lms_core.tests.fixtures import sample_edges, sample_nodes


class RoadmapAPITests(APITestCase):
    def setUp(self) -> None:
        """
        로그인한 소유자와 기본 로드맵을 준비합니다.

        @returns {None} 테스트 데이터를 생성합니다.
        """
        self.owner = get_user_model().objects.create_user(username="owner@example.com", email="owner@example.com", password="pw-12345678")
        self.roadmap = RoadmapService().create_roadmap(
            self.owner, title="프론트엔드", nodes=sample_nodes(), edges=sample_edges()
        )
        self.base = f"/api/roadmaps/{self.roadmap.roadmap_id}"
        self.client.force_login(self.owner)

    def test_get_roadmap(self) -> None:
        response = self.client.get(self.base)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["stats"], {"node_count": 3, "completed_count": 1})
        self.assertEqual(response.data["nodes"][0]["position"], {"x": 0.0, "y": 0.0})
        self.assertEqual(response.data["edges"][1]["label"], "다음")

    def test_create_roadmap(self) -> None:
        response = self.client.post("/api/roadmaps", {
            "title": "백엔드",
            "nodes": [{"id": "n1", "title": "HTTP"}, {"id": "n2", "title": "Django", "time_needed": 10}],
            "edges": [{"id": "e1", "source": "n1", "target": "n2"}],
        })
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["nodes"][1]["time_needed"], 10.0)
        self.assertEqual(response.data["edges"][0]["type"], "default")

    def test_create_rejects_dangling_edge(self) -> None:
        response = self.client.post("/api/roadmaps", {
            "title": "깨짐",
            "nodes": [{"id": "n1", "title": "HTTP"}],
            "edges": [{"id": "e1", "source": "n1", "target": "n9"}],
        })
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("error", response.data)

    def test_widget_view(self) -> None:
        """
        위젯 구성이 위젯 필드명과 표시 조각을 포함하는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        response = self.client.get(f"{self.base}/widget?viewport_width=600")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        node = response.data["nodes"][0]
        self.assertEqual(node["data"]["label"], "HTML 기초")
        self.assertEqual(node["view"]["caption"], "4h")
        self.assertEqual(node["sourcePosition"], "bottom")
        self.assertTrue(response.data["is_mobile"])
        self.assertEqual(response.json()["nodes"][0]["data"]["completionTime"][:10], "2025-01-03")

    def test_connect_move_and_update(self) -> None:
        response = self.client.post(f"{self.base}/connect", {"source": "node_html", "target": "node_js"})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["animated"])

        response = self.client.post(f"{self.base}/nodes/node_js/move", {"x": 40, "y": 400})
        self.assertEqual(response.data["position"], {"x": 40.0, "y": 400.0})

        response = self.client.patch(f"{self.base}/nodes/node_js", {"title": "JavaScript ES2023"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["position"], {"x": 40.0, "y": 400.0})

        roadmap = self.client.get(self.base).data
        self.assertEqual(len(roadmap["edges"]), 3)
        self.assertEqual(roadmap["nodes"][2]["title"], "JavaScript ES2023")

    def test_connect_unknown_node(self) -> None:
        response = self.client.post(f"{self.base}/connect", {"source": "node_html", "target": "ghost"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["canvas"]["error"], response.data["error"])
        self.assertIn("ghost", response.data["error"])
        self.assertEqual(len(response.data["canvas"]["edges"]), 2)
        self.assertIsNone(self.client.get(f"{self.base}/widget").data["error"])

    def test_update_validation_error(self) -> None:
        response = self.client.patch(f"{self.base}/nodes/node_js", {"time_needed": -3})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_select_and_delete(self) -> None:
        response = self.client.get(f"{self.base}/nodes/node_css/select")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["layout"], "sidebar")
        self.assertEqual(self.client.get(f"{self.base}/nodes/ghost/select").status_code, status.HTTP_404_NOT_FOUND)

        self.assertEqual(self.client.delete(f"{self.base}/edges/e_css_js").status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(self.client.delete(f"{self.base}/nodes/node_html").status_code, status.HTTP_204_NO_CONTENT)
        roadmap = self.client.get(self.base).data
        self.assertEqual([node["id"] for node in roadmap["nodes"]], ["node_css", "node_js"])
        self.assertEqual(roadmap["edges"], [])

    def test_replace_graph_and_integrity(self) -> None:
        """
        전체 배열 교체 후 무결성 보고서에 경고가 반영되는지 검증합니다.

        @returns {None} 테스트만 수행합니다.
        """
        payload = {
            "nodes": [{"id": "a", "title": "A", "children": ["zz"]}, {"id": "b", "title": "B"}],
            "edges": [
                {"id": "e1", "source": "a", "target": "b"},
                {"id": "e2", "source": "b", "target": "a"},
            ],
        }
        self.assertEqual(self.client.put(self.base, payload).status_code, status.HTTP_200_OK)
        report = self.client.get(f"{self.base}/integrity").data
        self.assertTrue(report["is_valid"])
        self.assertEqual(report["dangling_children"], ["a->zz"])
        self.assertEqual(len(report["cycles"]), 1)

    def test_dashboard(self) -> None:
        response = self.client.get("/api/dashboard")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data["roadmaps"][0]
        self.assertEqual(summary["completed_count"], 1)
        self.assertEqual(summary["hours_needed"], 22.5)
        self.assertEqual(summary["hours_consumed"], 3.5)

    def test_other_owner_gets_404(self) -> None:
        stranger = get_user_model().objects.create_user(username="x@example.com", password="pw-12345678")
        self.client.force_login(stranger)
        self.assertEqual(self.client.get(self.base).status_code, status.HTTP_404_NOT_FOUND)
