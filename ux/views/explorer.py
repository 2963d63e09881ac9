# ux/views/explorer.py

from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from projects.serializers import PublicProjectSerializer
from ux.services.explorer import (
    list_public_projects,
    get_public_project,
    get_hall_of_fame_showcase,
)


class UXExplorerListView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        projects, meta = list_public_projects(
            tech=request.query_params.get("tech"),
            search=request.query_params.get("search"),
            limit=request.query_params.get("limit"),
            offset=request.query_params.get("offset"),
        )
        return Response({
            "meta": {"success": True, **meta},
            "data": {
                "projects": projects,
            },
        })


class UXExplorerDetailView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, pk):
        record = get_public_project(pk)
        return Response({
            "meta": {"success": True},
            "data": {
                "project": PublicProjectSerializer(record).data,
            },
        })


class UXHallOfFameView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        projects = get_hall_of_fame_showcase()
        return Response({
            "meta": {"success": True},
            "data": {
                "projects": projects,
                "count": len(projects),
            },
        })
