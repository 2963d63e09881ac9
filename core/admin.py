from django.contrib import admin
from .models import DomainActivity

@admin.register(DomainActivity)
class DomainActivityAdmin(admin.ModelAdmin):
    list_display = ('verb', 'actor', 'department', 'object_id', 'visibility', 'timestamp')
    list_filter = ('verb', 'department', 'visibility', 'timestamp')
    search_fields = ('verb', 'object_id', 'actor__username')
    readonly_fields = ('actor', 'verb', 'content_type', 'object_id', 'department', 'visibility', 'metadata', 'timestamp')

    def has_add_permission(self, request):
        # Ledger rows are written by ActivityService only
        return False
