# users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.constants import DEPARTMENT_CHOICES, ROLE_CHOICES, ROLE_FACULTY


class User(AbstractUser):
    """
    Portal account. ``role`` and ``department`` mirror the custom claims the
    identity provider attaches to the session; ``department`` only matters
    for HoD accounts.
    """
    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_FACULTY,
    )
    department = models.CharField(
        max_length=16,
        choices=DEPARTMENT_CHOICES,
        blank=True,
        null=True,
        help_text="Department claim (required for HoD accounts)",
    )

    # Supabase auth user id (``sub`` claim), when the account was provisioned by the IdP
    external_id = models.CharField(max_length=64, blank=True, null=True, unique=True)

    phone = models.CharField(max_length=20, blank=True, null=True)

    def __str__(self):
        return self.username
