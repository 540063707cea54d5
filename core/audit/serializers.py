from rest_framework import serializers

from core.audit.models import AuditLog
from core.audit.utils import clamp_days


class AuditLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = AuditLog
        fields = [
            "id",
            "action",
            "actor_user_id",
            "target_type",
            "target_id",
            "meta_json",
            "created_at",
        ]


class AuditPurgeSerializer(serializers.Serializer):
    older_than_days = serializers.IntegerField(required=False, default=30)
    action = serializers.CharField(required=False, allow_blank=True, max_length=64)

    def validate_older_than_days(self, value):
        return clamp_days(value)
