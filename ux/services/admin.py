# ux/services/admin.py

from django.db.models import Q

from projects.models import ProjectRecord
from projects.policies import ProjectPolicy
from ux.services.cards import ALL, breakdown, recent_activity, tab_listing


ADMIN_TABS = {
    "all": ALL,
    "approved": Q(visibility=ProjectRecord.VISIBILITY_PUBLIC),
    "hall-of-fame": Q(hall_of_fame=True),
}


def get_admin_dashboard(actor, tab="all", search=None):
    return tab_listing(ProjectPolicy.visible_queryset(actor), ADMIN_TABS, tab, search)


def get_admin_analytics(actor):
    """Cross-department numbers over published and hall-of-fame records only."""
    qs = ProjectPolicy.visible_queryset(actor)

    return {
        "total_projects": qs.count(),
        "approved_count": qs.filter(visibility=ProjectRecord.VISIBILITY_PUBLIC).count(),
        "hall_of_fame_count": qs.filter(hall_of_fame=True).count(),
        "by_department": breakdown(qs, "department"),
        "by_type": breakdown(qs, "project_type"),
        "recent_activity": recent_activity(qs),
    }
