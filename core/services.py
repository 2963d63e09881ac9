from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from .analytics import track_project_event
from .models import DomainActivity


class ActivityService:
    @staticmethod
    def log_activity(actor, verb, target, department=None, visibility=DomainActivity.VISIBILITY_DEPARTMENT, metadata=None):
        """
        Logs a domain activity and triggers side effects (analytics mirror).
        """
        if metadata is None:
            metadata = {}

        actor_id = getattr(actor, "pk", None)

        # Create the immutable record
        activity = DomainActivity.objects.create(
            actor=actor if actor_id else None,
            verb=verb,
            content_type=ContentType.objects.get_for_model(target),
            object_id=str(target.pk),
            department=department,
            visibility=visibility,
            metadata=metadata
        )

        # Mirror to the managed analytics table once the write is committed
        transaction.on_commit(
            lambda: track_project_event(
                verb,
                project_id=activity.object_id,
                actor_id=actor_id,
                department=department,
                metadata=metadata,
            )
        )

        return activity
