# ux/views/dashboards.py

from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.exceptions import AuthorizationError
from projects.actor import ActorContext
from ux.services.faculty import get_faculty_dashboard
from ux.services.hod import get_hod_dashboard, get_hod_analytics
from ux.services.admin import get_admin_dashboard, get_admin_analytics


class RoleDashboardView(APIView):
    """Base for dashboards that belong to exactly one role."""
    permission_classes = [IsAuthenticated]
    role_check = None
    denied_message = "You do not have access to this dashboard"

    def get_actor(self, request):
        actor = ActorContext.from_request(request)
        if not getattr(actor, self.role_check):
            raise AuthorizationError(self.denied_message)
        return actor


class UXFacultyDashboardView(RoleDashboardView):
    role_check = "is_faculty"
    denied_message = "The faculty dashboard is only available to faculty members"

    def get(self, request):
        actor = self.get_actor(request)
        data = get_faculty_dashboard(
            actor,
            tab=request.query_params.get("tab", "drafts"),
            search=request.query_params.get("search"),
        )
        return Response({"meta": {"success": True}, "data": data})


class UXHodDashboardView(RoleDashboardView):
    role_check = "is_hod"
    denied_message = "The HoD dashboard is only available to heads of department"

    def get_actor(self, request):
        actor = super().get_actor(request)
        if not actor.department:
            raise AuthorizationError("Your account has no department assigned")
        return actor

    def get(self, request):
        actor = self.get_actor(request)
        data = get_hod_dashboard(
            actor,
            tab=request.query_params.get("tab", "pending"),
            search=request.query_params.get("search"),
        )
        return Response({"meta": {"success": True}, "data": data})


class UXHodAnalyticsView(UXHodDashboardView):
    def get(self, request):
        actor = self.get_actor(request)
        return Response({"meta": {"success": True}, "data": {"stats": get_hod_analytics(actor)}})


class UXAdminDashboardView(RoleDashboardView):
    role_check = "is_admin"
    denied_message = "The admin dashboard is only available to administrators"

    def get(self, request):
        actor = self.get_actor(request)
        data = get_admin_dashboard(
            actor,
            tab=request.query_params.get("tab", "all"),
            search=request.query_params.get("search"),
        )
        return Response({"meta": {"success": True}, "data": data})


class UXAdminAnalyticsView(UXAdminDashboardView):
    def get(self, request):
        actor = self.get_actor(request)
        return Response({"meta": {"success": True}, "data": {"stats": get_admin_analytics(actor)}})
