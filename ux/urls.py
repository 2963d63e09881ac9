from django.urls import path
from ux.views.explorer import (
    UXExplorerListView,
    UXExplorerDetailView,
    UXHallOfFameView,
)
from ux.views.dashboards import (
    UXFacultyDashboardView,
    UXHodDashboardView,
    UXHodAnalyticsView,
    UXAdminDashboardView,
    UXAdminAnalyticsView,
)

urlpatterns = [
    path("explorer/", UXExplorerListView.as_view(), name="ux-explorer"),
    path("explorer/hall-of-fame/", UXHallOfFameView.as_view(), name="ux-hall-of-fame"),
    path("explorer/<uuid:pk>/", UXExplorerDetailView.as_view(), name="ux-explorer-detail"),
    path("faculty/dashboard/", UXFacultyDashboardView.as_view(), name="ux-faculty-dashboard"),
    path("hod/dashboard/", UXHodDashboardView.as_view(), name="ux-hod-dashboard"),
    path("hod/analytics/", UXHodAnalyticsView.as_view(), name="ux-hod-analytics"),
    path("admin/dashboard/", UXAdminDashboardView.as_view(), name="ux-admin-dashboard"),
    path("admin/analytics/", UXAdminAnalyticsView.as_view(), name="ux-admin-analytics"),
]
