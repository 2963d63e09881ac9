# ux/services/explorer.py

from projects import queries
from projects.actor import ActorContext
from projects.policies import ProjectPolicy
from projects.services import ProjectService
from ux.services.cards import serialize_project_card


SHOWCASE_LIMIT = 10


def list_public_projects(tech=None, search=None, limit=None, offset=None):
    qs = queries.public(tech=tech, qs=ProjectPolicy.visible_queryset(ActorContext.anonymous()))
    qs = queries.search_title(qs, search)

    items, meta = queries.paginate(qs, limit=limit, offset=offset)
    return [serialize_project_card(r) for r in items], meta


def get_public_project(record_id):
    """Non-public records are reported as not found."""
    return ProjectService.get_record(ActorContext.anonymous(), record_id)


def get_hall_of_fame_showcase(limit=SHOWCASE_LIMIT):
    qs = queries.hall_of_fame(queries.public())[:limit]
    return [serialize_project_card(r) for r in qs]
