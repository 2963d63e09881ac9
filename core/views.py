from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from django.contrib.contenttypes.models import ContentType
from django.db.models import Q
from django.db import connections
from django.db.utils import OperationalError
from django.conf import settings
import time

from projects.actor import ActorContext
from projects.models import ProjectRecord
from .models import DomainActivity
from .serializers import DomainActivitySerializer


class HealthCheckView(APIView):
    """
    Lightweight health endpoint for uptime checks.
    - Checks DB connectivity
    - Returns env and simple latency
    """
    permission_classes = [AllowAny]
    authentication_classes = []  # public endpoint

    def get(self, request, *args, **kwargs):
        start = time.time()

        db_ok = True
        try:
            connections["default"].cursor()
        except OperationalError:
            db_ok = False

        duration_ms = int((time.time() - start) * 1000)

        return Response(
            {
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "env": getattr(settings, "ENV", "unknown"),
                "latency_ms": duration_ms,
            }
        )


class ActivityFeedView(APIView):
    """
    GET /api/core/activity/
    Recent ledger entries the caller may see: public entries, their own
    actions, activity on their own projects, their department's entries
    (HoD) and private entries (admin).
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        actor = ActorContext.from_request(request)

        project_type = ContentType.objects.get_for_model(ProjectRecord)
        own_record_ids = [
            str(pk) for pk in ProjectRecord.objects.filter(faculty_id=actor.user_id).values_list("id", flat=True)
        ]
        scope = (
            Q(visibility=DomainActivity.VISIBILITY_PUBLIC)
            | Q(actor_id=actor.user_id)
            | Q(
                content_type=project_type,
                object_id__in=own_record_ids,
            )
        )
        if actor.is_hod and actor.department:
            scope |= Q(department=actor.department, visibility=DomainActivity.VISIBILITY_DEPARTMENT)
        if actor.is_admin:
            # Account administration entries; private project entries stay with their owner
            scope |= Q(visibility=DomainActivity.VISIBILITY_PRIVATE) & ~Q(content_type=project_type)

        qs = DomainActivity.objects.filter(scope).select_related("actor").order_by("-timestamp")[:50]
        return Response(DomainActivitySerializer(qs, many=True).data)
