import uuid

from django.db import models
from django.conf import settings

from core.constants import DEPARTMENT_CHOICES


class ProjectRecord(models.Model):
    """
    A student project submitted by a faculty member.

    `visibility` is the lifecycle state; it only changes through
    `projects.lifecycle.apply_transition`. `hall_of_fame` is an independent
    flag that is only meaningful while the record is public.
    """
    VISIBILITY_DRAFT = "draft"
    VISIBILITY_PENDING = "pending"
    VISIBILITY_PUBLIC = "public"
    VISIBILITY_REJECTED = "rejected"

    VISIBILITY_CHOICES = [
        (VISIBILITY_DRAFT, "Draft"),
        (VISIBILITY_PENDING, "Pending Review"),
        (VISIBILITY_PUBLIC, "Public"),
        (VISIBILITY_REJECTED, "Rejected"),
    ]

    TYPE_COLLEGE_PROJECT = "College Project"
    TYPE_PRODUCT = "Product"
    TYPE_PUBLICATION = "Publication"

    TYPE_CHOICES = [
        (TYPE_COLLEGE_PROJECT, "College Project"),
        (TYPE_PRODUCT, "Product"),
        (TYPE_PUBLICATION, "Publication"),
    ]

    MAX_STUDENTS = 5
    MAX_SCREENSHOTS = 5

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    faculty = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="project_records",
    )
    department = models.CharField(max_length=16, choices=DEPARTMENT_CHOICES, db_index=True)
    project_type = models.CharField(
        max_length=32,
        choices=TYPE_CHOICES,
        default=TYPE_COLLEGE_PROJECT,
    )

    # Content
    title = models.CharField(max_length=255, blank=True)
    abstract = models.TextField(blank=True)
    academic_year = models.CharField(max_length=16, blank=True)
    technologies = models.JSONField(default=list, blank=True)
    students = models.JSONField(default=list, blank=True)

    # Links and media references
    demo_link = models.URLField(max_length=500, blank=True)
    github_link = models.URLField(max_length=500, blank=True)
    thumbnail_url = models.URLField(max_length=500, blank=True)
    screenshot_urls = models.JSONField(default=list, blank=True)
    report_url = models.URLField(max_length=500, blank=True)

    # Publication metadata
    publication_title = models.CharField(max_length=255, blank=True)
    publication_type = models.CharField(max_length=64, blank=True)
    journal_name = models.CharField(max_length=255, blank=True)
    paper_link = models.URLField(max_length=500, blank=True)
    is_title_same = models.BooleanField(default=False)

    # Lifecycle
    visibility = models.CharField(
        max_length=16,
        choices=VISIBILITY_CHOICES,
        default=VISIBILITY_DRAFT,
        db_index=True,
    )
    hall_of_fame = models.BooleanField(default=False, db_index=True)
    hod_feedback = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["faculty", "visibility"], name="projects_pr_faculty_8e21ab_idx"),
            models.Index(fields=["department", "visibility"], name="projects_pr_departm_4c7d90_idx"),
        ]

    def __str__(self):
        return f"{self.title or 'Untitled'} ({self.department}, {self.visibility})"

    @property
    def is_public(self) -> bool:
        return self.visibility == self.VISIBILITY_PUBLIC
