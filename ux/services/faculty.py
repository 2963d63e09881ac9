# ux/services/faculty.py

from django.db.models import Q

from projects import queries
from projects.models import ProjectRecord
from projects.policies import ProjectPolicy
from ux.services.cards import tab_listing


# Hall-of-fame projects stay under "published"
FACULTY_TABS = {
    "drafts": Q(visibility=ProjectRecord.VISIBILITY_DRAFT),
    "pending": Q(visibility=ProjectRecord.VISIBILITY_PENDING),
    "published": Q(visibility=ProjectRecord.VISIBILITY_PUBLIC),
    "rejected": Q(visibility=ProjectRecord.VISIBILITY_REJECTED),
}


def get_faculty_dashboard(actor, tab="drafts", search=None):
    qs = queries.by_faculty(actor.user_id, qs=ProjectPolicy.visible_queryset(actor))
    return tab_listing(qs, FACULTY_TABS, tab, search)
