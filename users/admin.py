from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'role', 'department', 'first_name', 'last_name', 'is_staff')
    list_filter = ('role', 'department', 'is_staff', 'is_superuser', 'is_active')
    search_fields = ('username', 'email', 'first_name', 'last_name')
    fieldsets = UserAdmin.fieldsets + (
        ('Portal Claims', {'fields': ('role', 'department', 'external_id', 'phone')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Portal Claims', {'fields': ('role', 'department', 'phone')}),
    )
