#  core/models.py
from django.db import models
from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType

from core.constants import DEPARTMENT_CHOICES


class DomainActivity(models.Model):
    """
    Immutable ledger of all business-significant actions in the system.
    Source of truth for: audit trail, dashboard activity feeds, analytics.
    """
    VISIBILITY_PUBLIC = "public"
    VISIBILITY_DEPARTMENT = "department"
    VISIBILITY_PRIVATE = "private"

    VISIBILITY_CHOICES = [
        (VISIBILITY_PUBLIC, "Public"),
        (VISIBILITY_DEPARTMENT, "Department-Only"),
        (VISIBILITY_PRIVATE, "Private"),
    ]

    # Who did it?
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activities",
    )

    # What happened? (e.g., 'project.approved')
    verb = models.CharField(max_length=64, db_index=True)

    # To what? (Generic Foreign Key; object_id is text so UUID keys fit and
    # the row survives deletion of its target)
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.CharField(max_length=64, db_index=True)
    content_object = GenericForeignKey("content_type", "object_id")

    # context (Where?)
    department = models.CharField(
        max_length=16,
        choices=DEPARTMENT_CHOICES,
        blank=True,
        null=True,
        db_index=True,
    )

    # Scoping
    visibility = models.CharField(
        max_length=16,
        choices=VISIBILITY_CHOICES,
        default=VISIBILITY_DEPARTMENT,
        db_index=True,
    )

    # Extra data (Snapshot logic, e.g., "Project Title" at time of logging)
    metadata = models.JSONField(default=dict, blank=True)

    timestamp = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name_plural = "Domain Activities"
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["department", "-timestamp"], name="core_domain_departm_6f1c2a_idx"),  # Department feed
            models.Index(fields=["actor", "-timestamp"], name="core_domain_actor_i_3b9d4e_idx"),  # Profile feed
        ]

    def __str__(self):
        return f"{self.actor} - {self.verb} - {self.timestamp}"
