from rest_framework import serializers

from core.constants import ROLE_HOD
from .models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'email',
            'first_name',
            'last_name',
            'role',
            'department',
            'phone',
            'date_joined',
        ]
        read_only_fields = ['role', 'department', 'date_joined']


class RoleAssignmentSerializer(serializers.Serializer):
    """
    Admin-only claim assignment: ``{"user_id": 3, "role": "hod", "department": "CSE"}``.
    """
    user_id = serializers.IntegerField()
    role = serializers.ChoiceField(choices=User._meta.get_field('role').choices)
    department = serializers.ChoiceField(
        choices=User._meta.get_field('department').choices,
        required=False,
        allow_null=True,
    )

    def validate(self, attrs):
        if attrs['role'] == ROLE_HOD and not attrs.get('department'):
            raise serializers.ValidationError(
                {"department": "A department is required for HoD accounts."}
            )
        return attrs

    def validate_user_id(self, value):
        if not User.objects.filter(pk=value).exists():
            raise serializers.ValidationError("User not found")
        return value
