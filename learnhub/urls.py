from django.urls import path

from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from learnhub.lms_core.controller.account_views import (
    LoginAPIView,
    LogoutAPIView,
    RegisterAPIView,
    UserListAPIView,
)
from learnhub.lms_core.controller.course_views import CourseDetailAPIView, CourseListAPIView
from learnhub.lms_core.controller.roadmap_views import (
    RoadmapConnectAPIView,
    RoadmapDetailAPIView,
    RoadmapEdgeAPIView,
    RoadmapIntegrityAPIView,
    RoadmapListAPIView,
    RoadmapNodeAPIView,
    RoadmapNodeMoveAPIView,
    RoadmapNodeSelectAPIView,
    RoadmapWidgetAPIView,
)
from learnhub.lms_core.controller.system_views import DashboardAPIView, HealthCheckAPIView

prefix = "api"

urlpatterns = [
    # OpenAPI 스키마 및 문서
    path(f"{prefix}/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(f"{prefix}/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path(f"{prefix}/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    # 헬스체크 API
    path(f"{prefix}/health/", HealthCheckAPIView.as_view(), name="health-check"),

    # 인증 API
    path(f"{prefix}/auth/register", RegisterAPIView.as_view(), name="register"),
    path(f"{prefix}/auth/login", LoginAPIView.as_view(), name="login"),
    path(f"{prefix}/auth/logout", LogoutAPIView.as_view(), name="logout"),
    path(f"{prefix}/users", UserListAPIView.as_view(), name="users"),

    # 대시보드 및 강의 편집 API
    path(f"{prefix}/dashboard", DashboardAPIView.as_view(), name="dashboard"),
    path(f"{prefix}/courses", CourseListAPIView.as_view(), name="courses"),
    path(f"{prefix}/courses/<str:course_id>", CourseDetailAPIView.as_view(), name="course-detail"),

    # 로드맵 캔버스 API
    path(f"{prefix}/roadmaps", RoadmapListAPIView.as_view(), name="roadmaps"),
    path(f"{prefix}/roadmaps/<str:roadmap_id>", RoadmapDetailAPIView.as_view(), name="roadmap-detail"),
    path(f"{prefix}/roadmaps/<str:roadmap_id>/widget", RoadmapWidgetAPIView.as_view(), name="roadmap-widget"),
    path(f"{prefix}/roadmaps/<str:roadmap_id>/integrity", RoadmapIntegrityAPIView.as_view(), name="roadmap-integrity"),
    path(f"{prefix}/roadmaps/<str:roadmap_id>/connect", RoadmapConnectAPIView.as_view(), name="roadmap-connect"),
    path(
        f"{prefix}/roadmaps/<str:roadmap_id>/edges/<str:edge_id>",
        RoadmapEdgeAPIView.as_view(),
        name="roadmap-edge",
    ),
    path(
        f"{prefix}/roadmaps/<str:roadmap_id>/nodes/<str:node_id>",
        RoadmapNodeAPIView.as_view(),
        name="roadmap-node",
    ),
    path(
        f"{prefix}/roadmaps/<str:roadmap_id>/nodes/<str:node_id>/move",
        RoadmapNodeMoveAPIView.as_view(),
        name="roadmap-node-move",
    ),
    path(
        f"{prefix}/roadmaps/<str:roadmap_id>/nodes/<str:node_id>/select",
        RoadmapNodeSelectAPIView.as_view(),
        name="roadmap-node-select",
    ),
]
