# ux/services/cards.py

from collections import Counter

from django.db.models import Q

from projects import queries


# Matches every record
ALL = Q()


def serialize_project_card(record):
    return {
        "id": str(record.id),
        "title": record.title,
        "department": record.department,
        "project_type": record.project_type,
        "academic_year": record.academic_year,
        "technologies": list(record.technologies or []),
        "thumbnail_url": record.thumbnail_url,
        "visibility": record.visibility,
        "hall_of_fame": record.hall_of_fame,
        "faculty_name": record.faculty.get_full_name() or record.faculty.username,
        "created_at": record.created_at,
        "updated_at": record.updated_at,
    }


def tab_listing(qs, tabs, tab, search=None):
    """
    Counts for every tab plus the cards of the selected one.
    `tabs` maps tab name -> Q filter.
    """
    if tab not in tabs:
        tab = next(iter(tabs))

    counts = {name: qs.filter(condition).count() for name, condition in tabs.items()}

    selected = queries.search_title(qs.filter(tabs[tab]).order_by("-created_at"), search)
    projects = [serialize_project_card(r) for r in selected.select_related("faculty")]

    return {
        "tab": tab,
        "counts": counts,
        "projects": projects,
        "count": len(projects),
    }


def breakdown(qs, field):
    return dict(Counter(qs.values_list(field, flat=True)))


def recent_activity(qs, limit=5):
    return [
        serialize_project_card(r)
        for r in qs.select_related("faculty").order_by("-updated_at")[:limit]
    ]

