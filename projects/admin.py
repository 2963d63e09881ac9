from django.contrib import admin

from .models import ProjectRecord


@admin.register(ProjectRecord)
class ProjectRecordAdmin(admin.ModelAdmin):
    list_display = ("title", "department", "project_type", "visibility", "hall_of_fame", "faculty", "created_at")
    list_filter = ("visibility", "hall_of_fame", "department", "project_type")
    search_fields = ("title", "abstract", "faculty__username", "faculty__email")
    readonly_fields = ("id", "faculty", "department", "visibility", "hall_of_fame", "hod_feedback", "created_at", "updated_at")
    ordering = ("-created_at",)
