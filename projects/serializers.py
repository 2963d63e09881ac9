from rest_framework import serializers

from core.constants import DEPARTMENT_CHOICES
from core.sanitizers import (
    normalize_technologies,
    sanitize_abstract,
    sanitize_text,
    sanitize_title,
)
from .models import ProjectRecord
from .policies import ProjectPolicy


class TechnologiesField(serializers.Field):
    """Accepts a list of tags or a comma-separated string."""

    def to_internal_value(self, data):
        if not isinstance(data, (str, list, tuple)):
            raise serializers.ValidationError("Expected a list of technologies or a comma-separated string.")
        return normalize_technologies(data)

    def to_representation(self, value):
        return list(value or [])


class StudentSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=128, required=False, allow_blank=True)
    regNo = serializers.CharField(max_length=64, required=False, allow_blank=True)
    dept = serializers.CharField(max_length=64, required=False, allow_blank=True)
    year = serializers.CharField(max_length=16, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate(self, attrs):
        return {key: sanitize_text(value, max_length=128) for key, value in attrs.items()}


class ProjectRecordInputSerializer(serializers.Serializer):
    """
    Type checks and sanitization for incoming project fields.

    Always used with partial=True: which fields are required depends on the
    lifecycle action and is decided by projects.lifecycle.
    """
    department = serializers.ChoiceField(choices=DEPARTMENT_CHOICES)
    project_type = serializers.ChoiceField(choices=ProjectRecord.TYPE_CHOICES)
    title = serializers.CharField(allow_blank=True, trim_whitespace=False)
    abstract = serializers.CharField(allow_blank=True, trim_whitespace=False)
    academic_year = serializers.CharField(allow_blank=True, max_length=16)
    technologies = TechnologiesField()
    students = serializers.ListField(child=StudentSerializer())
    demo_link = serializers.URLField(allow_blank=True, max_length=500)
    github_link = serializers.URLField(allow_blank=True, max_length=500)
    thumbnail_url = serializers.URLField(allow_blank=True, max_length=500)
    screenshot_urls = serializers.ListField(child=serializers.URLField(max_length=500))
    report_url = serializers.URLField(allow_blank=True, max_length=500)
    publication_title = serializers.CharField(allow_blank=True, max_length=255)
    publication_type = serializers.CharField(allow_blank=True, max_length=64)
    journal_name = serializers.CharField(allow_blank=True, max_length=255)
    paper_link = serializers.URLField(allow_blank=True, max_length=500)
    is_title_same = serializers.BooleanField()

    def validate_title(self, value):
        return sanitize_title(value)

    def validate_abstract(self, value):
        return sanitize_abstract(value)

    def validate_academic_year(self, value):
        return sanitize_text(value, max_length=16)

    def validate_publication_title(self, value):
        return sanitize_title(value)

    def validate_publication_type(self, value):
        return sanitize_text(value, max_length=64)

    def validate_journal_name(self, value):
        return sanitize_text(value, max_length=255)

    def validate_students(self, value):
        return [dict(student) for student in value]


class ProjectRecordSerializer(serializers.ModelSerializer):
    faculty_name = serializers.SerializerMethodField()
    permitted_actions = serializers.SerializerMethodField()

    class Meta:
        model = ProjectRecord
        fields = [
            "id",
            "faculty",
            "faculty_name",
            "department",
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
            "visibility",
            "hall_of_fame",
            "hod_feedback",
            "permitted_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_faculty_name(self, obj):
        faculty = obj.faculty
        return faculty.get_full_name() or faculty.username

    def get_permitted_actions(self, obj):
        actor = self.context.get("actor")
        if actor is None:
            return []
        return ProjectPolicy.permitted_actions(actor, obj)


class PublicProjectSerializer(serializers.ModelSerializer):
    """
    Explorer view of a public record. Student contact details and review
    feedback stay private.
    """
    faculty_name = serializers.SerializerMethodField()
    students = serializers.SerializerMethodField()

    class Meta:
        model = ProjectRecord
        fields = [
            "id",
            "faculty_name",
            "department",
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
            "visibility",
            "hall_of_fame",
            "created_at",
        ]
        read_only_fields = fields

    def get_faculty_name(self, obj):
        faculty = obj.faculty
        return faculty.get_full_name() or faculty.username

    def get_students(self, obj):
        return [
            {key: student.get(key, "") for key in ("name", "dept", "year")}
            for student in (obj.students or [])
            if isinstance(student, dict)
        ]
