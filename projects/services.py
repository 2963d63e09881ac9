# projects/services.py
"""
Project record operations.

Every write goes through ProjectService: authorize with ProjectPolicy,
validate with the lifecycle rules, then apply exactly one transition in a
single atomic write. Nothing is mutated when a check fails.
"""
import logging
from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, transaction

from core import constants
from core.exceptions import (
    AuthorizationError,
    LifecycleValidationError,
    RecordNotFound,
    UpstreamError,
)
from core.models import DomainActivity
from core.sanitizers import sanitize_abstract
from core.services import ActivityService
from . import lifecycle
from .actor import ActorContext
from .models import ProjectRecord
from .policies import ProjectPolicy
from .serializers import ProjectRecordInputSerializer

logger = logging.getLogger("portal.projects")


ACTION_VERBS = {
    lifecycle.ACTION_CREATE_DRAFT: constants.ACTIVITY_PROJECT_CREATED,
    lifecycle.ACTION_CREATE_SUBMISSION: constants.ACTIVITY_PROJECT_CREATED,
    lifecycle.ACTION_EDIT: constants.ACTIVITY_PROJECT_EDITED,
    lifecycle.ACTION_SUBMIT: constants.ACTIVITY_PROJECT_SUBMITTED,
    lifecycle.ACTION_RESUBMIT: constants.ACTIVITY_PROJECT_RESUBMITTED,
    lifecycle.ACTION_APPROVE: constants.ACTIVITY_PROJECT_APPROVED,
    lifecycle.ACTION_REJECT: constants.ACTIVITY_PROJECT_REJECTED,
    lifecycle.ACTION_DELETE: constants.ACTIVITY_PROJECT_DELETED,
    lifecycle.ACTION_REMOVE_HALL_OF_FAME: constants.ACTIVITY_HALL_OF_FAME_REMOVED,
}

# visibility field updates -> named transition
VISIBILITY_ACTIONS = {
    (ProjectRecord.VISIBILITY_DRAFT, ProjectRecord.VISIBILITY_PENDING): lifecycle.ACTION_SUBMIT,
    (ProjectRecord.VISIBILITY_REJECTED, ProjectRecord.VISIBILITY_PENDING): lifecycle.ACTION_RESUBMIT,
    (ProjectRecord.VISIBILITY_PENDING, ProjectRecord.VISIBILITY_PUBLIC): lifecycle.ACTION_APPROVE,
    (ProjectRecord.VISIBILITY_PENDING, ProjectRecord.VISIBILITY_REJECTED): lifecycle.ACTION_REJECT,
}

# Lifecycle fields that are only ever written through transitions
CONTROL_FIELDS = ("visibility", "hod_feedback", "hall_of_fame")


def _verb_for(action: str, record: ProjectRecord) -> str:
    if action == lifecycle.ACTION_TOGGLE_HALL_OF_FAME:
        if record.hall_of_fame:
            return constants.ACTIVITY_HALL_OF_FAME_ADDED
        return constants.ACTIVITY_HALL_OF_FAME_REMOVED
    return ACTION_VERBS[action]


class ProjectService:

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def clean_fields(payload: Optional[dict]) -> dict:
        """Sanitize and type-check content fields; lifecycle fields are dropped."""
        data = {
            key: value
            for key, value in dict(payload or {}).items()
            if key not in CONTROL_FIELDS
        }
        if not data:
            return {}

        serializer = ProjectRecordInputSerializer(data=data, partial=True)
        if not serializer.is_valid():
            raise LifecycleValidationError(serializer.errors)
        return dict(serializer.validated_data)

    @staticmethod
    def clean_feedback(feedback) -> Optional[str]:
        if feedback is None:
            return None
        return sanitize_abstract(feedback)

    @staticmethod
    def _fetch(actor: ActorContext, record_id, lock: bool = False, scoped: bool = True) -> ProjectRecord:
        """
        Load a record. Scoped reads make missing and invisible records
        indistinguishable; writes load unscoped so ProjectPolicy can deny
        with a reason.
        """
        if scoped:
            qs = ProjectPolicy.visible_queryset(actor)
        else:
            qs = ProjectRecord.objects.all()
        if lock:
            qs = qs.select_for_update()
        try:
            record = qs.filter(pk=record_id).first()
        except (DjangoValidationError, ValueError):
            record = None
        except DatabaseError:
            logger.exception(f"Failed to load project record {record_id}")
            raise UpstreamError()

        if record is None:
            raise RecordNotFound()
        return record

    @staticmethod
    def _log(actor: ActorContext, action: str, record: ProjectRecord, metadata=None):
        # Drafts are owner-only, and so is their history
        if record.visibility == ProjectRecord.VISIBILITY_PUBLIC:
            visibility = DomainActivity.VISIBILITY_PUBLIC
        elif record.visibility == ProjectRecord.VISIBILITY_DRAFT:
            visibility = DomainActivity.VISIBILITY_PRIVATE
        else:
            visibility = DomainActivity.VISIBILITY_DEPARTMENT
        ActivityService.log_activity(
            actor=actor.user,
            verb=_verb_for(action, record),
            target=record,
            department=record.department,
            visibility=visibility,
            metadata={
                "title": record.title,
                "action": action,
                "visibility": record.visibility,
                "hall_of_fame": record.hall_of_fame,
                **(metadata or {}),
            },
        )

    @staticmethod
    def _deny(actor: ActorContext, record_id, action: str, reason: str):
        logger.warning(
            f"Denied project action: record={record_id}, action={action}, "
            f"actor={actor.user_id}, role={actor.role}. Reason: {reason}"
        )
        raise AuthorizationError(reason)

    @staticmethod
    def _perform(actor: ActorContext, record: ProjectRecord, action: str, fields=None, feedback=None):
        allowed, reason = ProjectPolicy.is_authorized(actor, record, action)
        if not allowed:
            ProjectService._deny(actor, record.pk, action, reason)

        can, reason = lifecycle.can_transition(record, action)
        if not can:
            raise LifecycleValidationError({"visibility": [reason]})

        errors = lifecycle.validate_for_action(record, action, fields, feedback)
        if errors:
            raise LifecycleValidationError(errors)

        old_state = record.visibility

        if action == lifecycle.ACTION_DELETE:
            # Log first: the instance loses its pk once deleted
            ProjectService._log(actor, action, record)
            lifecycle.apply_transition(record, action, actor=actor)
            return None

        lifecycle.apply_transition(record, action, fields=fields, feedback=feedback, actor=actor)
        ProjectService._log(actor, action, record, metadata={"from": old_state})
        return record

    # ─────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def create_record(actor: ActorContext, payload: Optional[dict], as_draft: bool) -> ProjectRecord:
        """Create a record owned by the actor, as a draft or straight into review."""
        allowed, reason = ProjectPolicy.can_create(actor)
        action = lifecycle.ACTION_CREATE_DRAFT if as_draft else lifecycle.ACTION_CREATE_SUBMISSION
        if not allowed:
            ProjectService._deny(actor, None, action, reason)

        fields = ProjectService.clean_fields(payload)
        record = ProjectRecord()

        errors = lifecycle.validate_for_action(record, action, fields)
        if errors:
            raise LifecycleValidationError(errors)

        try:
            with transaction.atomic():
                lifecycle.apply_transition(record, action, fields=fields, actor=actor)
                ProjectService._log(actor, action, record)
        except DatabaseError:
            logger.exception("Failed to create project record")
            raise UpstreamError()

        return record

    @staticmethod
    def get_record(actor: ActorContext, record_id) -> ProjectRecord:
        return ProjectService._fetch(actor, record_id)

    @staticmethod
    def transition(actor: ActorContext, record_id, action: str, fields=None, feedback=None) -> Optional[ProjectRecord]:
        """
        Run a named lifecycle action. Returns the updated record, or None
        when the action deleted it.
        """
        if action in lifecycle.CREATE_ACTIONS or action not in lifecycle.ALL_ACTIONS:
            raise LifecycleValidationError({"action": [f"Unknown action: {action}"]})

        fields = ProjectService.clean_fields(fields)
        feedback = ProjectService.clean_feedback(feedback)

        try:
            with transaction.atomic():
                record = ProjectService._fetch(actor, record_id, lock=True, scoped=False)
                return ProjectService._perform(actor, record, action, fields, feedback)
        except DatabaseError:
            logger.exception(f"Failed to apply '{action}' to project record {record_id}")
            raise UpstreamError()

    @staticmethod
    def resolve_action(record: ProjectRecord, visibility=None, hall_of_fame=None, has_fields: bool = False) -> Optional[str]:
        """
        Translate a field-update style request into a named transition.

        Returns None when the update asks for nothing to change.
        """
        if visibility is not None and visibility != record.visibility:
            if visibility not in dict(ProjectRecord.VISIBILITY_CHOICES):
                raise LifecycleValidationError({"visibility": [f"Invalid visibility: {visibility}"]})
            action = VISIBILITY_ACTIONS.get((record.visibility, visibility))
            if action is None:
                raise LifecycleValidationError(
                    {"visibility": [f"Cannot move a '{record.visibility}' project to '{visibility}'"]}
                )
            return action

        if hall_of_fame is not None:
            wanted = str(hall_of_fame).lower() in ("1", "true", "yes")
            if wanted != record.hall_of_fame:
                if wanted:
                    return lifecycle.ACTION_TOGGLE_HALL_OF_FAME
                return lifecycle.ACTION_REMOVE_HALL_OF_FAME

        if not has_fields:
            return None

        return lifecycle.ACTION_EDIT

    @staticmethod
    def update_record(actor: ActorContext, record_id, field_updates: Optional[dict]) -> ProjectRecord:
        """
        Apply a field update. `visibility` and `hall_of_fame` entries select
        the matching transition; `hod_feedback` is the reject feedback and is
        refused with any other change. Any other entries are content edits.
        """
        updates = dict(field_updates or {})
        visibility = updates.pop("visibility", None)
        feedback = ProjectService.clean_feedback(updates.pop("hod_feedback", None))
        hall_of_fame = updates.pop("hall_of_fame", None)
        fields = ProjectService.clean_fields(updates)

        try:
            with transaction.atomic():
                record = ProjectService._fetch(actor, record_id, lock=True, scoped=False)
                action = ProjectService.resolve_action(record, visibility, hall_of_fame, has_fields=bool(fields))

                if action is None:
                    allowed, reason = ProjectPolicy.can_view(actor, record)
                else:
                    allowed, reason = ProjectPolicy.is_authorized(actor, record, action)
                if not allowed:
                    ProjectService._deny(actor, record.pk, action or "update", reason)

                # Unchanged feedback may be echoed back
                if action != lifecycle.ACTION_REJECT:
                    if feedback is not None and feedback != record.hod_feedback:
                        raise LifecycleValidationError(
                            {"hod_feedback": ["Feedback can only be given when rejecting a project."]}
                        )
                    feedback = None

                if action is None:
                    return record
                return ProjectService._perform(actor, record, action, fields, feedback)
        except DatabaseError:
            logger.exception(f"Failed to update project record {record_id}")
            raise UpstreamError()

    @staticmethod
    def delete_record(actor: ActorContext, record_id) -> None:
        ProjectService.transition(actor, record_id, lifecycle.ACTION_DELETE)
