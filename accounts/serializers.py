from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from core.enums import UserRole
from core.serializers import BaseModelSerializer

User = get_user_model()


class UserSerializer(BaseModelSerializer):
    class Meta(BaseModelSerializer.Meta):
        model = User
        fields = [
            "id",
            "name",
            "email",
            "phone",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["email", "role", "is_active"]


class UserAdminUpdateSerializer(BaseModelSerializer):
    """Fields an admin may change on another account."""

    role = serializers.ChoiceField(choices=UserRole.choices(), required=False)

    class Meta(BaseModelSerializer.Meta):
        model = User
        fields = ["id", "name", "email", "phone", "role", "is_active", "created_at", "updated_at"]
        read_only_fields = ["email"]


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8, style={"input_type": "password"})
    phone = serializers.CharField(max_length=30, required=False, allow_blank=True)

    def validate(self, attrs):
        candidate = User(username=attrs["email"], email=attrs["email"], name=attrs["name"])
        validate_password(attrs["password"], user=candidate)
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class AuthResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    user = UserSerializer()
