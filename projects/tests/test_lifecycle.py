# projects/tests/test_lifecycle.py
from django.test import TestCase
from django.contrib.auth import get_user_model

from projects import lifecycle
from projects.actor import ActorContext
from projects.models import ProjectRecord

User = get_user_model()

COMPLETE_FIELDS = {
    "department": "CSE",
    "project_type": ProjectRecord.TYPE_COLLEGE_PROJECT,
    "title": "Smart Irrigation",
    "abstract": "Soil moisture driven irrigation controller.",
    "academic_year": "2024-2025",
    "technologies": ["Python", "IoT"],
    "thumbnail_url": "https://cdn.example.com/thumb.png",
    "students": [{"name": "Asha", "regNo": "21CS001"}],
}


class LifecycleTableTest(TestCase):
    def setUp(self):
        self.faculty = User.objects.create_user(username="fac", password="pass123", role="faculty")
        self.actor = ActorContext.for_user(self.faculty)

    def make_record(self, visibility, **extra):
        data = {k: v for k, v in COMPLETE_FIELDS.items()}
        data.update(extra)
        return ProjectRecord.objects.create(faculty=self.faculty, visibility=visibility, **data)

    def test_allowed_actions_per_state(self):
        self.assertEqual(
            set(lifecycle.allowed_actions(None)),
            {lifecycle.ACTION_CREATE_DRAFT, lifecycle.ACTION_CREATE_SUBMISSION},
        )
        self.assertEqual(
            set(lifecycle.allowed_actions(ProjectRecord.VISIBILITY_DRAFT)),
            {lifecycle.ACTION_EDIT, lifecycle.ACTION_SUBMIT, lifecycle.ACTION_DELETE},
        )
        self.assertEqual(
            set(lifecycle.allowed_actions(ProjectRecord.VISIBILITY_PENDING)),
            {lifecycle.ACTION_EDIT, lifecycle.ACTION_APPROVE, lifecycle.ACTION_REJECT},
        )
        self.assertEqual(
            set(lifecycle.allowed_actions(ProjectRecord.VISIBILITY_REJECTED)),
            {lifecycle.ACTION_RESUBMIT},
        )
        self.assertEqual(
            set(lifecycle.allowed_actions(ProjectRecord.VISIBILITY_PUBLIC)),
            {lifecycle.ACTION_TOGGLE_HALL_OF_FAME, lifecycle.ACTION_REMOVE_HALL_OF_FAME},
        )

    def test_every_target_is_a_valid_visibility(self):
        valid = set(dict(ProjectRecord.VISIBILITY_CHOICES))
        for transition in lifecycle.TRANSITIONS.values():
            if transition.action == lifecycle.ACTION_DELETE:
                self.assertIsNone(transition.target)
            else:
                self.assertIn(transition.target, valid)

    def test_public_record_cannot_go_back(self):
        record = self.make_record(ProjectRecord.VISIBILITY_PUBLIC)
        for action in (lifecycle.ACTION_EDIT, lifecycle.ACTION_SUBMIT, lifecycle.ACTION_RESUBMIT, lifecycle.ACTION_DELETE):
            can, reason = lifecycle.can_transition(record, action)
            self.assertFalse(can)
            self.assertIn("public", reason)

    def test_unknown_action(self):
        record = self.make_record(ProjectRecord.VISIBILITY_DRAFT)
        can, reason = lifecycle.can_transition(record, "publish")
        self.assertFalse(can)
        self.assertIn("Unknown action", reason)

    def test_create_draft_sets_owner_and_department(self):
        record = ProjectRecord()
        ok, _ = lifecycle.apply_transition(
            record,
            lifecycle.ACTION_CREATE_DRAFT,
            fields={"department": "ECE", "title": "Draft idea"},
            actor=self.actor,
        )
        self.assertTrue(ok)
        record.refresh_from_db()
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_DRAFT)
        self.assertEqual(record.faculty_id, self.faculty.id)
        self.assertEqual(record.department, "ECE")

    def test_submit_moves_draft_to_pending_and_bumps_updated_at(self):
        record = self.make_record(ProjectRecord.VISIBILITY_DRAFT)
        before = record.updated_at
        ok, _ = lifecycle.apply_transition(record, lifecycle.ACTION_SUBMIT, actor=self.actor)
        self.assertTrue(ok)
        record.refresh_from_db()
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_PENDING)
        self.assertGreaterEqual(record.updated_at, before)

    def test_approve_keeps_stale_feedback(self):
        record = self.make_record(ProjectRecord.VISIBILITY_PENDING, hod_feedback="old notes")
        lifecycle.apply_transition(record, lifecycle.ACTION_APPROVE)
        record.refresh_from_db()
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_PUBLIC)
        self.assertEqual(record.hod_feedback, "old notes")

    def test_reject_sets_feedback(self):
        record = self.make_record(ProjectRecord.VISIBILITY_PENDING)
        lifecycle.apply_transition(record, lifecycle.ACTION_REJECT, feedback="needs more detail")
        record.refresh_from_db()
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_REJECTED)
        self.assertEqual(record.hod_feedback, "needs more detail")

    def test_hall_of_fame_toggle_only_flips_flag(self):
        record = self.make_record(ProjectRecord.VISIBILITY_PUBLIC)
        lifecycle.apply_transition(record, lifecycle.ACTION_TOGGLE_HALL_OF_FAME)
        record.refresh_from_db()
        self.assertTrue(record.hall_of_fame)
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_PUBLIC)

        lifecycle.apply_transition(record, lifecycle.ACTION_TOGGLE_HALL_OF_FAME)
        record.refresh_from_db()
        self.assertFalse(record.hall_of_fame)

        lifecycle.apply_transition(record, lifecycle.ACTION_REMOVE_HALL_OF_FAME)
        record.refresh_from_db()
        self.assertFalse(record.hall_of_fame)

    def test_delete_removes_draft(self):
        record = self.make_record(ProjectRecord.VISIBILITY_DRAFT)
        record_id = record.pk
        ok, _ = lifecycle.apply_transition(record, lifecycle.ACTION_DELETE, actor=self.actor)
        self.assertTrue(ok)
        self.assertFalse(ProjectRecord.objects.filter(pk=record_id).exists())

    def test_invalid_transition_leaves_record_untouched(self):
        record = self.make_record(ProjectRecord.VISIBILITY_DRAFT)
        ok, _ = lifecycle.apply_transition(record, lifecycle.ACTION_APPROVE)
        self.assertFalse(ok)
        record.refresh_from_db()
        self.assertEqual(record.visibility, ProjectRecord.VISIBILITY_DRAFT)


class ValidationRulesTest(TestCase):
    def setUp(self):
        self.faculty = User.objects.create_user(username="fac", password="pass123", role="faculty")

    def test_empty_draft_is_refused(self):
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_DRAFT, {"department": "CSE"})
        self.assertIn("non_field_errors", errors)

    def test_draft_with_only_a_title_is_fine(self):
        errors = lifecycle.validate_for_action(
            ProjectRecord(), lifecycle.ACTION_CREATE_DRAFT, {"department": "CSE", "title": "Idea"}
        )
        self.assertEqual(errors, {})

    def test_department_required_on_create(self):
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_DRAFT, {"title": "Idea"})
        self.assertIn("department", errors)

    def test_submission_requires_thumbnail(self):
        fields = dict(COMPLETE_FIELDS, thumbnail_url="")
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_SUBMISSION, fields)
        self.assertEqual(list(errors), ["thumbnail_url"])

    def test_complete_submission_passes(self):
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_SUBMISSION, dict(COMPLETE_FIELDS))
        self.assertEqual(errors, {})

    def test_publication_fields_required(self):
        fields = dict(COMPLETE_FIELDS, project_type=ProjectRecord.TYPE_PUBLICATION)
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_SUBMISSION, fields)
        for name in ("publication_title", "publication_type", "journal_name", "paper_link"):
            self.assertIn(name, errors)

        fields.update(
            is_title_same=True,
            publication_type="Journal",
            journal_name="IJERT",
            paper_link="https://papers.example.com/1",
        )
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_SUBMISSION, fields)
        self.assertEqual(errors, {})

    def test_incomplete_student_entry(self):
        fields = dict(COMPLETE_FIELDS, students=[{"name": "Asha", "regNo": ""}])
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_SUBMISSION, fields)
        self.assertIn("students", errors)

    def test_roster_and_screenshot_limits(self):
        fields = dict(
            COMPLETE_FIELDS,
            students=[{"name": f"S{i}", "regNo": f"R{i}"} for i in range(6)],
            screenshot_urls=[f"https://cdn.example.com/{i}.png" for i in range(6)],
        )
        errors = lifecycle.validate_for_action(ProjectRecord(), lifecycle.ACTION_CREATE_DRAFT, fields)
        self.assertIn("students", errors)
        self.assertIn("screenshot_urls", errors)

    def test_reject_requires_non_blank_feedback(self):
        record = ProjectRecord.objects.create(
            faculty=self.faculty, visibility=ProjectRecord.VISIBILITY_PENDING, **COMPLETE_FIELDS
        )
        self.assertIn("hod_feedback", lifecycle.validate_for_action(record, lifecycle.ACTION_REJECT, feedback="   "))
        self.assertIn("hod_feedback", lifecycle.validate_for_action(record, lifecycle.ACTION_REJECT, feedback=None))
        self.assertEqual(lifecycle.validate_for_action(record, lifecycle.ACTION_REJECT, feedback="fix it"), {})

    def test_editing_pending_record_keeps_it_complete(self):
        record = ProjectRecord.objects.create(
            faculty=self.faculty, visibility=ProjectRecord.VISIBILITY_PENDING, **COMPLETE_FIELDS
        )
        errors = lifecycle.validate_for_action(record, lifecycle.ACTION_EDIT, {"abstract": ""})
        self.assertIn("abstract", errors)

    def test_department_is_immutable(self):
        record = ProjectRecord.objects.create(
            faculty=self.faculty, visibility=ProjectRecord.VISIBILITY_DRAFT, **COMPLETE_FIELDS
        )
        errors = lifecycle.validate_for_action(record, lifecycle.ACTION_EDIT, {"department": "IT"})
        self.assertIn("department", errors)

    def test_review_actions_take_no_fields(self):
        record = ProjectRecord.objects.create(
            faculty=self.faculty, visibility=ProjectRecord.VISIBILITY_PUBLIC, **COMPLETE_FIELDS
        )
        errors = lifecycle.validate_for_action(record, lifecycle.ACTION_TOGGLE_HALL_OF_FAME, {"title": "New"})
        self.assertIn("non_field_errors", errors)
