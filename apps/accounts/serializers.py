from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .choices import UserRole, AdminLevel
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    is_approver = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'role',
            'admin_level',
            'is_approver',
            'is_active',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(choices=UserRole.choices, default=UserRole.STANDARD)
    admin_level = serializers.ChoiceField(
        choices=AdminLevel.choices,
        required=False,
        allow_null=True,
        default=None
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name', 'role', 'admin_level']

    def validate(self, attrs):
        """Validate password confirmation and role/level combination."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })

        if attrs.get('role') == UserRole.ADMIN and attrs.get('admin_level') is None:
            raise serializers.ValidationError({
                'admin_level': 'Admins must have an admin level (1-3)'
            })
        if attrs.get('role') != UserRole.ADMIN and attrs.get('admin_level') is not None:
            raise serializers.ValidationError({
                'admin_level': 'Only admins can have an admin level'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class UserFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for user listing.

    Query Parameters:
        role (str): Filter by role
        admin_level (int): Filter by admin level
    """

    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    admin_level = serializers.ChoiceField(choices=AdminLevel.choices, required=False)
