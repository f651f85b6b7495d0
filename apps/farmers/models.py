from django.conf import settings
from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
from django.utils import timezone
import uuid


phone_validator = RegexValidator(
    regex=r'^\+[1-9]\d{7,14}$',
    message='Phone number must be in E.164 format (e.g., +256771234567).',
)


class Farmer(models.Model):
    """
    A milk supplier.

    The phone number doubles as the farmer's login name, so each farmer
    normally has a linked User with role=farmer and username=phone.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, validators=[MinLengthValidator(2)])
    phone = models.CharField(max_length=16, unique=True, validators=[phone_validator])
    location = models.CharField(max_length=200, validators=[MinLengthValidator(2)])
    join_date = models.DateField(default=timezone.localdate)
    id_number = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='farmer_profile',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'farmers'
        ordering = ['name']
        indexes = [
            models.Index(fields=['name'], name='farmers_name_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.phone})"

    @property
    def id_snippet(self):
        """Short id shown on the farmer dashboard."""
        return str(self.id)[:8]
