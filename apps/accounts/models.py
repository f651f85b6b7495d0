from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
import uuid


username_validator = RegexValidator(
    regex=r'^[^@]+$',
    message='Username cannot be an email address.',
)


class UserRole(models.TextChoices):
    FARMER = 'farmer', 'Farmer'
    OPERATOR = 'operator', 'Operator'
    ADMIN = 'admin', 'Admin'


class UserStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    INACTIVE = 'inactive', 'Inactive'


class UserManager(BaseUserManager):
    """Manager for username-based accounts."""

    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError('Username is required')

        user = self.model(username=username.strip(), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('role', UserRole.ADMIN)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('role') != UserRole.ADMIN:
            raise ValueError('Superuser must have role=admin')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(username, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Application user.

    Operators and admins log in with a chosen username; farmers log in
    with their phone number, which is stored as the username.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = models.CharField(
        max_length=150,
        unique=True,
        validators=[MinLengthValidator(3), username_validator],
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.OPERATOR,
    )
    status = models.CharField(
        max_length=20,
        choices=UserStatus.choices,
        default=UserStatus.ACTIVE,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        ordering = ['username']
        indexes = [
            models.Index(fields=['role'], name='users_role_idx'),
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.username

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE

    @property
    def is_staff(self):
        """Django admin access is limited to the admin role."""
        return self.role == UserRole.ADMIN

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN

    @property
    def is_operator_or_admin(self):
        return self.role in (UserRole.OPERATOR, UserRole.ADMIN)

    @property
    def is_farmer(self):
        return self.role == UserRole.FARMER
