# core/analytics.py
# Analytics tracking service for Supabase

import logging
from typing import Any

from django.conf import settings
from django.utils import timezone

logger = logging.getLogger("portal")


def _get_client():
    """Get Supabase client lazily."""
    from core.supabase_client import get_supabase_client
    return get_supabase_client()


def track_project_event(
    action: str,
    project_id: str | None = None,
    actor_id: int | str | None = None,
    department: str | None = None,
    metadata: dict[str, Any] | None = None
) -> bool:
    """
    Mirror a project lifecycle event to the Supabase analytics table.

    Tracking is best-effort: a missing client or a failed insert is logged
    and reported as False, never raised into the lifecycle operation.

    Args:
        action: The activity verb (e.g., "project.approved")
        project_id: The project record id
        actor_id: Django id of the acting user
        department: Department of the record
        metadata: Optional additional metadata

    Returns:
        True if tracking succeeded, False otherwise
    """
    client = _get_client()
    if not client:
        logger.debug("Supabase client not available, skipping analytics")
        return False

    try:
        data = {
            "action": action,
            "project_id": str(project_id) if project_id is not None else None,
            "department": department,
            "metadata": {**(metadata or {}), "django_user_id": actor_id},
            "created_at": timezone.now().isoformat(),
        }

        client.table(settings.SUPABASE_ANALYTICS_TABLE).insert(data).execute()
        logger.debug(f"Tracked analytics event: {action}")
        return True
    except Exception as e:
        logger.error(f"Failed to track analytics: {e}")
        return False
