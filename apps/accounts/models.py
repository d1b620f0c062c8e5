from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid

from .choices import UserRole, AdminLevel


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        role = extra_fields.get('role', UserRole.STANDARD)
        if role != UserRole.ADMIN and extra_fields.get('admin_level') is not None:
            raise ValueError('Only admins can have an admin level')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication and an approval role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    # Approval authority
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.STANDARD
    )
    admin_level = models.PositiveSmallIntegerField(
        choices=AdminLevel.choices,
        null=True,
        blank=True,
        help_text="Approval level (1-3) for admins"
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email'], name='users_email_4b85f2_idx'),
            models.Index(fields=['role', 'admin_level'], name='users_role_8c1d3e_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]

    @property
    def is_approver(self):
        return self.role == UserRole.ADMIN and self.admin_level is not None

    def to_actor(self):
        """Snapshot of this user for the approval core."""
        from apps.orders.approval import Actor

        return Actor(
            id=self.id,
            role=UserRole(self.role),
            admin_level=self.admin_level,
        )
