# projects/policies.py
"""
Centralized access policy for project records.

Read scoping and write authorization both live here. Views and services
ask this layer instead of checking roles inline.
"""
from typing import List, Optional, Tuple

from django.db.models import Q, QuerySet

from core.constants import ROLE_FACULTY, ROLE_HOD
from . import lifecycle
from .actor import ActorContext
from .models import ProjectRecord


class ProjectPolicy:
    """
    Permission checks for project records.
    All methods return QuerySet, bool or (bool, str) with reason.
    """

    @staticmethod
    def is_owner(actor: ActorContext, record: ProjectRecord) -> bool:
        if actor is None or actor.user_id is None or record is None:
            return False
        return record.faculty_id == actor.user_id

    @staticmethod
    def is_department_hod(actor: ActorContext, record: ProjectRecord) -> bool:
        if actor is None or not actor.is_hod or not actor.department or record is None:
            return False
        return record.department == actor.department

    # ─────────────────────────────────────────────────────────────
    # Reads
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def visible_queryset(actor: ActorContext, qs: Optional[QuerySet] = None) -> QuerySet:
        """
        Records the actor may read.

        - anonymous: public only
        - faculty: own records in every state, plus public
        - HoD: own department except drafts, plus public
        - admin: public or hall-of-fame, every department
        """
        if qs is None:
            qs = ProjectRecord.objects.all()

        public = Q(visibility=ProjectRecord.VISIBILITY_PUBLIC)

        if actor is None or actor.is_anonymous:
            return qs.filter(public)

        if actor.is_admin:
            return qs.filter(public | Q(hall_of_fame=True))

        if actor.is_hod:
            if not actor.department:
                return qs.filter(public)
            department_scope = Q(department=actor.department) & ~Q(
                visibility=ProjectRecord.VISIBILITY_DRAFT
            )
            return qs.filter(public | department_scope)

        return qs.filter(public | Q(faculty_id=actor.user_id))

    @staticmethod
    def can_view(actor: ActorContext, record: ProjectRecord) -> Tuple[bool, str]:
        if record is None:
            return False, "Record not found"

        if record.visibility == ProjectRecord.VISIBILITY_PUBLIC:
            return True, ""

        if ProjectPolicy.is_owner(actor, record):
            return True, ""

        if actor is not None and actor.is_admin and record.hall_of_fame:
            return True, ""

        if ProjectPolicy.is_department_hod(actor, record) and record.visibility != ProjectRecord.VISIBILITY_DRAFT:
            return True, ""

        return False, "You do not have access to this project"

    @staticmethod
    def can_view_details(actor: ActorContext, record: ProjectRecord) -> bool:
        """Student contact details and review feedback: owner and department HoD only."""
        return ProjectPolicy.is_owner(actor, record) or ProjectPolicy.is_department_hod(actor, record)

    # ─────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────

    @staticmethod
    def can_create(actor: ActorContext) -> Tuple[bool, str]:
        if actor is None or actor.is_anonymous:
            return False, "Authentication required"

        if actor.role != ROLE_FACULTY:
            return False, "Only faculty members can submit projects"

        return True, ""

    @staticmethod
    def is_authorized(actor: ActorContext, record: ProjectRecord, action: str) -> Tuple[bool, str]:
        """
        Role, ownership and department checks for an action on an existing
        record. Does not look at the record's state.
        """
        if actor is None or actor.is_anonymous:
            return False, "Authentication required"

        requirement = lifecycle.ACTION_REQUIREMENTS.get(action)
        if requirement is None:
            return False, f"Unknown action: {action}"

        if action in lifecycle.CREATE_ACTIONS:
            return False, "Records are created, not transitioned into existence"

        if actor.is_admin:
            return False, "Administrators have read-only access to projects"

        if requirement.actor_role == ROLE_HOD:
            if not actor.is_hod:
                return False, "Only a head of department can review projects"
            if not ProjectPolicy.is_department_hod(actor, record):
                return False, "You can only review projects from your own department"
            return True, ""

        if requirement.owner_only and not ProjectPolicy.is_owner(actor, record):
            return False, "Only the faculty member who created this project can modify it"

        return True, ""

    @staticmethod
    def can_perform(actor: ActorContext, record: ProjectRecord, action: str) -> Tuple[bool, str]:
        """Authorization plus the state table: can this actor do this now?"""
        allowed, reason = ProjectPolicy.is_authorized(actor, record, action)
        if not allowed:
            return False, reason
        return lifecycle.can_transition(record, action)

    @staticmethod
    def permitted_actions(actor: ActorContext, record: ProjectRecord) -> List[str]:
        return [
            action
            for action in lifecycle.allowed_actions(record.visibility)
            if ProjectPolicy.can_perform(actor, record, action)[0]
        ]
