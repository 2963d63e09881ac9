from rest_framework import serializers
from .models import DomainActivity


class DomainActivitySerializer(serializers.ModelSerializer):
    actor_name = serializers.CharField(source='actor.username', read_only=True, default=None)

    class Meta:
        model = DomainActivity
        fields = [
            'id',
            'actor_name',
            'verb',
            'object_id',
            'department',
            'metadata',
            'timestamp',
            'visibility'
        ]
