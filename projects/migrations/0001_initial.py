import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ProjectRecord",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "department",
                    models.CharField(
                        choices=[
                            ("CSE", "Computer Science and Engineering"),
                            ("IT", "Information Technology"),
                            ("ECE", "Electronics and Communication Engineering"),
                            ("EEE", "Electrical and Electronics Engineering"),
                            ("MECH", "Mechanical Engineering"),
                            ("CIVIL", "Civil Engineering"),
                            ("AIDS", "Artificial Intelligence and Data Science"),
                            ("OTHER", "Other"),
                        ],
                        db_index=True,
                        max_length=16,
                    ),
                ),
                (
                    "project_type",
                    models.CharField(
                        choices=[
                            ("College Project", "College Project"),
                            ("Product", "Product"),
                            ("Publication", "Publication"),
                        ],
                        default="College Project",
                        max_length=32,
                    ),
                ),
                ("title", models.CharField(blank=True, max_length=255)),
                ("abstract", models.TextField(blank=True)),
                ("academic_year", models.CharField(blank=True, max_length=16)),
                ("technologies", models.JSONField(blank=True, default=list)),
                ("students", models.JSONField(blank=True, default=list)),
                ("demo_link", models.URLField(blank=True, max_length=500)),
                ("github_link", models.URLField(blank=True, max_length=500)),
                ("thumbnail_url", models.URLField(blank=True, max_length=500)),
                ("screenshot_urls", models.JSONField(blank=True, default=list)),
                ("report_url", models.URLField(blank=True, max_length=500)),
                ("publication_title", models.CharField(blank=True, max_length=255)),
                ("publication_type", models.CharField(blank=True, max_length=64)),
                ("journal_name", models.CharField(blank=True, max_length=255)),
                ("paper_link", models.URLField(blank=True, max_length=500)),
                ("is_title_same", models.BooleanField(default=False)),
                (
                    "visibility",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("pending", "Pending Review"),
                            ("public", "Public"),
                            ("rejected", "Rejected"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=16,
                    ),
                ),
                ("hall_of_fame", models.BooleanField(db_index=True, default=False)),
                ("hod_feedback", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "faculty",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="project_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["faculty", "visibility"], name="projects_pr_faculty_8e21ab_idx"),
                    models.Index(fields=["department", "visibility"], name="projects_pr_departm_4c7d90_idx"),
                ],
            },
        ),
    ]
