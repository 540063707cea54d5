from django.contrib.auth import get_user_model
from rest_framework import serializers

from core.iam import rbac

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    roles = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "is_active",
            "roles",
            "date_joined",
        ]

    def get_roles(self, obj):
        return sorted(ur.role.key for ur in obj.user_roles.all())


def _validate_role_keys(value):
    unknown = sorted({r for r in value if not rbac.is_known_role(r)})
    if unknown:
        raise serializers.ValidationError(f"Unknown roles: {', '.join(unknown)}")
    return sorted(set(value))


class UserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(min_length=8, max_length=128, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    is_active = serializers.BooleanField(required=False, default=True)
    roles = serializers.ListField(child=serializers.CharField(max_length=64), required=False, default=list)

    def validate_username(self, value):
        value = value.strip()
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("Username is already taken")
        return value

    def validate_email(self, value):
        return (value or "").strip().lower()

    def validate_roles(self, value):
        return _validate_role_keys(value)


class UserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, min_length=8, max_length=128, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    last_name = serializers.CharField(required=False, allow_blank=True, max_length=150)
    is_active = serializers.BooleanField(required=False)
    roles = serializers.ListField(child=serializers.CharField(max_length=64), required=False)

    def validate_email(self, value):
        return (value or "").strip().lower()

    def validate_roles(self, value):
        return _validate_role_keys(value)


class CheckActiveSerializer(serializers.Serializer):
    email = serializers.EmailField()
