from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .models import User, UserRole, UserStatus


def validate_username(value):
    value = value.strip()
    if len(value) < 3:
        raise serializers.ValidationError('Username must be at least 3 characters.')
    if '@' in value:
        raise serializers.ValidationError('Username cannot be an email address.')
    return value


class UserSerializer(serializers.ModelSerializer):
    """User representation for profile and admin listings."""

    farmer_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'role',
            'status',
            'farmer_id',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields

    def get_farmer_id(self, obj):
        farmer = getattr(obj, 'farmer_profile', None)
        return str(farmer.id) if farmer else None


class UserCreateSerializer(serializers.Serializer):
    """Admin form for creating an operator or admin account."""

    username = serializers.CharField(max_length=150, validators=[validate_username])
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'},
        error_messages={'min_length': 'Password must be at least 6 characters.'},
    )
    role = serializers.ChoiceField(choices=[UserRole.OPERATOR, UserRole.ADMIN])
    status = serializers.ChoiceField(choices=UserStatus.choices, default=UserStatus.ACTIVE)


class UserUpdateSerializer(serializers.Serializer):
    """Admin form for editing an account. All fields optional."""

    username = serializers.CharField(max_length=150, required=False, validators=[validate_username])
    role = serializers.ChoiceField(choices=[UserRole.OPERATOR, UserRole.ADMIN], required=False)
    status = serializers.ChoiceField(choices=UserStatus.choices, required=False)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login. Farmers use their phone number as username."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class PasswordChangeSerializer(serializers.Serializer):
    """Serializer for changing the current user's password."""

    current_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs


class SetPasswordSerializer(serializers.Serializer):
    """Admin form for setting another account's password."""

    new_password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'},
        error_messages={'min_length': 'Password must be at least 6 characters.'},
    )
