# projects/lifecycle.py
"""
Project record lifecycle.

    (new) ──create_draft──▶ draft ──submit──▶ pending ──approve──▶ public
    (new) ──create_submission──────────────▶ pending ──reject───▶ rejected
                                        rejected ──resubmit──▶ pending

`hall_of_fame` is a flag on public records, flipped by the HoD actions
toggle_hall_of_fame / remove_hall_of_fame. There is no way back out of
public: a record is never unpublished.

Every legal move is one row in TRANSITIONS. Anything not in the table is
rejected before the record is touched.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging

from django.utils import timezone

from core.constants import ROLE_FACULTY, ROLE_HOD
from .models import ProjectRecord

logger = logging.getLogger("portal.projects")


ACTION_CREATE_DRAFT = "create_draft"
ACTION_CREATE_SUBMISSION = "create_submission"
ACTION_EDIT = "edit"
ACTION_SUBMIT = "submit"
ACTION_DELETE = "delete"
ACTION_APPROVE = "approve"
ACTION_REJECT = "reject"
ACTION_RESUBMIT = "resubmit"
ACTION_TOGGLE_HALL_OF_FAME = "toggle_hall_of_fame"
ACTION_REMOVE_HALL_OF_FAME = "remove_hall_of_fame"

CREATE_ACTIONS = (ACTION_CREATE_DRAFT, ACTION_CREATE_SUBMISSION)
REVIEW_ACTIONS = (
    ACTION_APPROVE,
    ACTION_REJECT,
    ACTION_TOGGLE_HALL_OF_FAME,
    ACTION_REMOVE_HALL_OF_FAME,
)

# Actions that require the full submission checklist
SUBMISSION_ACTIONS = (ACTION_CREATE_SUBMISSION, ACTION_SUBMIT, ACTION_RESUBMIT)

# Content fields a faculty owner may write
EDITABLE_FIELDS = (
    "project_type",
    "title",
    "abstract",
    "academic_year",
    "technologies",
    "students",
    "demo_link",
    "github_link",
    "thumbnail_url",
    "screenshot_urls",
    "report_url",
    "publication_title",
    "publication_type",
    "journal_name",
    "paper_link",
    "is_title_same",
)

SUBMISSION_REQUIRED_FIELDS = (
    "title",
    "department",
    "academic_year",
    "abstract",
    "technologies",
    "project_type",
    "thumbnail_url",
)

PUBLICATION_REQUIRED_FIELDS = (
    "publication_type",
    "journal_name",
    "paper_link",
)


# ─────────────────────────────────────────────────────────────
# Side effects
# ─────────────────────────────────────────────────────────────

def _write_fields(record, fields, feedback, actor):
    for name, value in (fields or {}).items():
        if name in EDITABLE_FIELDS:
            setattr(record, name, value)


def _initialize(record, fields, feedback, actor):
    if actor is not None and actor.user_id is not None:
        record.faculty_id = actor.user_id
    if fields and fields.get("department"):
        record.department = fields["department"]
    _write_fields(record, fields, feedback, actor)


def _set_feedback(record, fields, feedback, actor):
    record.hod_feedback = (feedback or "").strip()


def _flip_hall_of_fame(record, fields, feedback, actor):
    record.hall_of_fame = not record.hall_of_fame


def _clear_hall_of_fame(record, fields, feedback, actor):
    record.hall_of_fame = False


def _no_effect(record, fields, feedback, actor):
    pass


@dataclass(frozen=True)
class Transition:
    action: str
    source: Optional[str]
    target: Optional[str]
    actor_role: str
    effect: Callable
    owner_only: bool = False
    same_department: bool = False
    accepts_fields: bool = False


DRAFT = ProjectRecord.VISIBILITY_DRAFT
PENDING = ProjectRecord.VISIBILITY_PENDING
PUBLIC = ProjectRecord.VISIBILITY_PUBLIC
REJECTED = ProjectRecord.VISIBILITY_REJECTED


_TABLE = [
    Transition(ACTION_CREATE_DRAFT, None, DRAFT, ROLE_FACULTY, _initialize, accepts_fields=True),
    Transition(ACTION_CREATE_SUBMISSION, None, PENDING, ROLE_FACULTY, _initialize, accepts_fields=True),
    Transition(ACTION_EDIT, DRAFT, DRAFT, ROLE_FACULTY, _write_fields, owner_only=True, accepts_fields=True),
    Transition(ACTION_SUBMIT, DRAFT, PENDING, ROLE_FACULTY, _write_fields, owner_only=True, accepts_fields=True),
    Transition(ACTION_DELETE, DRAFT, None, ROLE_FACULTY, _no_effect, owner_only=True),
    Transition(ACTION_EDIT, PENDING, PENDING, ROLE_FACULTY, _write_fields, owner_only=True, accepts_fields=True),
    Transition(ACTION_APPROVE, PENDING, PUBLIC, ROLE_HOD, _no_effect, same_department=True),
    Transition(ACTION_REJECT, PENDING, REJECTED, ROLE_HOD, _set_feedback, same_department=True),
    Transition(ACTION_RESUBMIT, REJECTED, PENDING, ROLE_FACULTY, _write_fields, owner_only=True, accepts_fields=True),
    Transition(ACTION_TOGGLE_HALL_OF_FAME, PUBLIC, PUBLIC, ROLE_HOD, _flip_hall_of_fame, same_department=True),
    Transition(ACTION_REMOVE_HALL_OF_FAME, PUBLIC, PUBLIC, ROLE_HOD, _clear_hall_of_fame, same_department=True),
]

TRANSITIONS: Dict[Tuple[Optional[str], str], Transition] = {
    (t.source, t.action): t for t in _TABLE
}

# Role, ownership and department requirements depend only on the action
ACTION_REQUIREMENTS: Dict[str, Transition] = {t.action: t for t in _TABLE}

ALL_ACTIONS = tuple(ACTION_REQUIREMENTS)


def current_state(record: ProjectRecord) -> Optional[str]:
    """A record that has not been saved yet has no state."""
    if record._state.adding:
        return None
    return record.visibility


def get_transition(state: Optional[str], action: str) -> Optional[Transition]:
    return TRANSITIONS.get((state, action))


def can_transition(record: ProjectRecord, action: str) -> Tuple[bool, str]:
    """
    Check whether `action` is defined for the record's current state.

    Returns (can_transition: bool, reason: str)
    """
    if action not in ACTION_REQUIREMENTS:
        return False, f"Unknown action: {action}"

    state = current_state(record)
    if get_transition(state, action) is None:
        if state is None:
            return False, f"Cannot '{action}' a record that does not exist yet"
        return False, f"Cannot '{action}' a record that is '{state}'"

    return True, ""


def allowed_actions(state: Optional[str]) -> List[str]:
    """Actions defined for a state, regardless of who is asking."""
    return [action for (source, action) in TRANSITIONS if source == state]


def _merged(record: ProjectRecord, fields: Optional[dict]) -> dict:
    fields = fields or {}
    merged = {name: getattr(record, name) for name in EDITABLE_FIELDS}
    merged["department"] = record.department
    merged.update(fields)
    return merged


def _is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def validate_for_action(
    record: ProjectRecord,
    action: str,
    fields: Optional[dict] = None,
    feedback: Optional[str] = None,
) -> Dict[str, List[str]]:
    """
    Field-level checks for an action, evaluated against the record as it
    would look after the update. Returns a field -> messages map; empty
    means valid.
    """
    errors: Dict[str, List[str]] = {}
    fields = fields or {}

    def add(field, message):
        errors.setdefault(field, []).append(message)

    transition = get_transition(current_state(record), action)

    if fields and transition is not None and not transition.accepts_fields:
        add("non_field_errors", f"'{action}' does not accept field updates")
        return errors

    if action == ACTION_REJECT:
        if _is_blank(feedback):
            add("hod_feedback", "Feedback is required when rejecting a project")
        return errors

    if action not in (ACTION_CREATE_DRAFT, ACTION_CREATE_SUBMISSION, ACTION_EDIT, ACTION_SUBMIT, ACTION_RESUBMIT):
        return errors

    if action not in CREATE_ACTIONS and "department" in fields and fields["department"] != record.department:
        add("department", "Department cannot be changed after creation")

    data = _merged(record, fields)

    students = data.get("students") or []
    if len(students) > ProjectRecord.MAX_STUDENTS:
        add("students", f"A project can have at most {ProjectRecord.MAX_STUDENTS} students")

    screenshots = data.get("screenshot_urls") or []
    if len(screenshots) > ProjectRecord.MAX_SCREENSHOTS:
        add("screenshot_urls", f"A project can have at most {ProjectRecord.MAX_SCREENSHOTS} screenshots")

    # Editing a pending record keeps it in the review queue, so it must stay complete
    needs_full_check = action in SUBMISSION_ACTIONS or (
        action == ACTION_EDIT and record.visibility == PENDING and not record._state.adding
    )

    if action in CREATE_ACTIONS and _is_blank(data.get("department")):
        add("department", "Department is required")

    if not needs_full_check:
        if all(_is_blank(data.get(name)) for name in ("title", "abstract", "thumbnail_url")):
            add("non_field_errors", "Add at least a title, abstract or thumbnail before saving a draft")
        return errors

    for name in SUBMISSION_REQUIRED_FIELDS:
        if _is_blank(data.get(name)) and name not in errors:
            add(name, "This field is required for submission")

    if data.get("project_type") == ProjectRecord.TYPE_PUBLICATION:
        if not data.get("is_title_same") and _is_blank(data.get("publication_title")):
            add("publication_title", "Publication title is required")
        for name in PUBLICATION_REQUIRED_FIELDS:
            if _is_blank(data.get(name)):
                add(name, "This field is required for publications")

    for index, student in enumerate(students):
        if not isinstance(student, dict) or _is_blank(student.get("name")) or _is_blank(student.get("regNo")):
            add("students", f"Student {index + 1} needs a name and registration number")

    return errors


def apply_transition(
    record: ProjectRecord,
    action: str,
    fields: Optional[dict] = None,
    feedback: Optional[str] = None,
    actor=None,
    save: bool = True,
) -> Tuple[bool, str]:
    """
    Apply a transition to a record.

    The caller is responsible for authorization (ProjectPolicy) and for
    validate_for_action; this only checks the state table, runs the side
    effect and persists with a single write.

    Args:
        record: The record to transition (unsaved for create actions)
        action: One of ALL_ACTIONS
        fields: Content field updates, for actions that accept them
        feedback: HoD feedback text (reject only)
        actor: ActorContext of the caller (for ownership and logging)
        save: Whether to persist the record

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(record, action)
    actor_id = getattr(actor, "user_id", None)

    if not can:
        logger.warning(
            f"Invalid lifecycle transition attempted: record={record.pk}, "
            f"from={current_state(record)}, action={action}, actor={actor_id}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_state = current_state(record)
    transition = get_transition(old_state, action)
    transition.effect(record, fields, feedback, actor)

    if action == ACTION_DELETE:
        record_id = record.pk
        if save:
            record.delete()
        logger.info(f"Project record deleted: record={record_id}, actor={actor_id}")
        return True, "Record deleted"

    record.visibility = transition.target
    if save:
        # auto_now bumps updated_at on every save
        record.save()
    else:
        record.updated_at = timezone.now()

    logger.info(
        f"Project lifecycle transition: record={record.pk}, action={action}, "
        f"from={old_state}, to={record.visibility}, actor={actor_id}"
    )

    return True, f"Transitioned from '{old_state}' to '{record.visibility}'"
