from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Administrator profile."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'is_staff',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class AdminSetupSerializer(serializers.Serializer):
    """Input for creating the first administrator."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)


class ChangePasswordSerializer(serializers.Serializer):
    """Input for changing the administrator password."""

    current_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
    new_password = serializers.CharField(write_only=True, style={'input_type': 'password'})
