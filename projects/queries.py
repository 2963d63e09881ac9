# projects/queries.py
"""
Read queries over project records, newest first.

These are the filtered lists the dashboards and the explorer are built
from. Callers scope them with ProjectPolicy.visible_queryset first.
"""
from typing import Optional, Tuple

from django.conf import settings
from django.db.models import Q, QuerySet

from core.exceptions import LifecycleValidationError
from .models import ProjectRecord


def _base(qs: Optional[QuerySet]) -> QuerySet:
    if qs is None:
        qs = ProjectRecord.objects.all()
    return qs.select_related("faculty").order_by("-created_at")


def by_faculty(faculty_id, visibility: Optional[str] = None, qs: Optional[QuerySet] = None) -> QuerySet:
    qs = _base(qs).filter(faculty_id=faculty_id)
    if visibility:
        qs = qs.filter(visibility=visibility)
    return qs


def by_department(department: str, visibility: Optional[str] = None, qs: Optional[QuerySet] = None) -> QuerySet:
    qs = _base(qs).filter(department=department)
    if visibility:
        qs = qs.filter(visibility=visibility)
    return qs


def hall_of_fame(qs: Optional[QuerySet] = None) -> QuerySet:
    return _base(qs).filter(hall_of_fame=True)


def public(tech: Optional[str] = None, qs: Optional[QuerySet] = None) -> QuerySet:
    """
    Public records, optionally restricted to one technology tag.

    Tags are matched in Python; JSON containment lookups are not available
    on every database backend.
    """
    qs = _base(qs).filter(visibility=ProjectRecord.VISIBILITY_PUBLIC)
    if tech:
        wanted = tech.strip().lower()
        ids = [
            pk
            for pk, technologies in qs.values_list("id", "technologies")
            if any(str(tag).strip().lower() == wanted for tag in technologies or [])
        ]
        qs = qs.filter(id__in=ids)
    return qs


def search_title(qs: QuerySet, search: Optional[str]) -> QuerySet:
    if search:
        qs = qs.filter(Q(title__icontains=search) | Q(publication_title__icontains=search))
    return qs


def paginate(qs: QuerySet, limit=None, offset=None, default_limit: Optional[int] = None) -> Tuple[list, dict]:
    """
    Limit/offset slicing. Returns (items, meta) where meta carries the
    total count and the effective limit/offset.
    """
    if default_limit is None:
        default_limit = settings.PORTAL_EXPLORER_PAGE_SIZE

    try:
        limit_val = int(limit) if limit not in (None, "") else default_limit
        offset_val = int(offset) if offset not in (None, "") else 0
    except (TypeError, ValueError):
        raise LifecycleValidationError({"pagination": ["Invalid pagination params"]})

    limit_val = max(1, min(limit_val, settings.PORTAL_MAX_PAGE_SIZE))
    offset_val = max(0, offset_val)

    total_count = qs.count()
    items = list(qs[offset_val : offset_val + limit_val])

    return items, {"count": total_count, "limit": limit_val, "offset": offset_val}
