from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework import status

from core.exceptions import LifecycleValidationError
from . import queries
from .actor import ActorContext
from .policies import ProjectPolicy
from .serializers import ProjectRecordSerializer, PublicProjectSerializer
from .services import ProjectService
from .throttles import ProjectCreateThrottle

TRUTHY = ("1", "true", "yes")


def _flag(value) -> bool:
    return str(value).lower() in TRUTHY


def _render(record, request, actor):
    """Full record for its owner and department HoD, explorer view for everyone else."""
    if ProjectPolicy.can_view_details(actor, record):
        return ProjectRecordSerializer(record, context={"request": request, "actor": actor}).data
    return PublicProjectSerializer(record).data


class ProjectListCreateView(APIView):
    """
    GET  /api/projects/   records visible to the caller
    POST /api/projects/   create a record (as_draft selects draft vs. review)
    """
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_classes = [ProjectCreateThrottle]
    throttle_scope = ProjectCreateThrottle.scope

    def get(self, request):
        actor = ActorContext.from_request(request)
        qs = ProjectPolicy.visible_queryset(actor)

        visibility = request.query_params.get("visibility")
        if visibility:
            qs = qs.filter(visibility=visibility)

        department = request.query_params.get("department")
        if department:
            qs = qs.filter(department=department)

        mine = request.query_params.get("mine")
        if mine and _flag(mine) and actor.user_id is not None:
            qs = queries.by_faculty(actor.user_id, qs=qs)

        hall_of_fame = request.query_params.get("hall_of_fame")
        if hall_of_fame and _flag(hall_of_fame):
            qs = queries.hall_of_fame(qs=qs)

        tech = request.query_params.get("tech")
        if tech:
            qs = queries.public(tech=tech, qs=qs)

        qs = queries.search_title(qs.order_by("-created_at"), request.query_params.get("search"))

        items, meta = queries.paginate(
            qs.select_related("faculty"),
            limit=request.query_params.get("limit"),
            offset=request.query_params.get("offset"),
        )
        return Response({**meta, "results": [_render(record, request, actor) for record in items]})

    def post(self, request):
        actor = ActorContext.from_request(request)
        payload = dict(request.data.items()) if hasattr(request.data, "items") else {}
        as_draft = _flag(payload.pop("as_draft", False))

        record = ProjectService.create_record(actor, payload, as_draft=as_draft)
        return Response(_render(record, request, actor), status=status.HTTP_201_CREATED)


class ProjectDetailView(APIView):
    """
    GET    /api/projects/<id>/
    PATCH  /api/projects/<id>/   field update (visibility / hall_of_fame select a transition)
    DELETE /api/projects/<id>/   owner only, drafts only
    """
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get(self, request, pk):
        actor = ActorContext.from_request(request)
        record = ProjectService.get_record(actor, pk)
        return Response(_render(record, request, actor))

    def patch(self, request, pk):
        actor = ActorContext.from_request(request)
        if not hasattr(request.data, "items"):
            raise LifecycleValidationError("Expected an object of field updates.")

        record = ProjectService.update_record(actor, pk, dict(request.data.items()))
        return Response(_render(record, request, actor))

    def delete(self, request, pk):
        actor = ActorContext.from_request(request)
        ProjectService.delete_record(actor, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProjectTransitionView(APIView):
    """
    POST /api/projects/<id>/<action>/

    Body:
      fields:   optional content updates (edit / submit / resubmit)
      feedback: required for reject
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk, action):
        actor = ActorContext.from_request(request)
        fields = request.data.get("fields") or {}
        if not isinstance(fields, dict):
            raise LifecycleValidationError({"fields": ["Expected an object of field updates."]})

        record = ProjectService.transition(
            actor,
            pk,
            action,
            fields=fields,
            feedback=request.data.get("feedback"),
        )
        if record is None:
            return Response(status=status.HTTP_204_NO_CONTENT)

        return Response(_render(record, request, actor))
