# ux/services/hod.py

from django.db.models import Q

from projects import queries
from projects.models import ProjectRecord
from projects.policies import ProjectPolicy
from ux.services.cards import breakdown, recent_activity, tab_listing


HOD_TABS = {
    "pending": Q(visibility=ProjectRecord.VISIBILITY_PENDING),
    "approved": Q(visibility=ProjectRecord.VISIBILITY_PUBLIC, hall_of_fame=False),
    "hall-of-fame": Q(hall_of_fame=True),
}


def _department_records(actor):
    # Drafts never reach the HoD scope
    return queries.by_department(actor.department, qs=ProjectPolicy.visible_queryset(actor))


def get_hod_dashboard(actor, tab="pending", search=None):
    data = tab_listing(_department_records(actor), HOD_TABS, tab, search)
    data["department"] = actor.department
    return data


def get_hod_analytics(actor):
    qs = _department_records(actor)

    return {
        "department": actor.department,
        "total_projects": qs.count(),
        "pending_count": qs.filter(visibility=ProjectRecord.VISIBILITY_PENDING).count(),
        "approved_count": qs.filter(visibility=ProjectRecord.VISIBILITY_PUBLIC, hall_of_fame=False).count(),
        "hall_of_fame_count": qs.filter(hall_of_fame=True).count(),
        "by_type": breakdown(qs, "project_type"),
        "recent_activity": recent_activity(qs.exclude(visibility=ProjectRecord.VISIBILITY_REJECTED)),
    }
