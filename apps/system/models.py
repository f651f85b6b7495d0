import logging
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

logger = logging.getLogger(__name__)


class SmsProvider(models.TextChoices):
    AFRICAS_TALKING = 'africas_talking', "Africa's Talking"
    TWILIO = 'twilio', 'Twilio'
    NONE = 'none', 'None (simulate)'


class SystemSettings(models.Model):
    """
    Singleton row with runtime-editable configuration.

    The row is created on first read with defaults taken from Django
    settings (DEFAULT_MILK_PRICE_PER_LITER, DEFAULT_SMS_PROVIDER).
    """

    SINGLETON_PK = 1

    milk_price_per_liter = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
    )
    sms_provider = models.CharField(
        max_length=20,
        choices=SmsProvider.choices,
        default=SmsProvider.NONE,
    )
    sms_api_key = models.CharField(max_length=255, blank=True)
    sms_username = models.CharField(max_length=100, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'system_settings'
        verbose_name = 'system settings'
        verbose_name_plural = 'system settings'

    def __str__(self):
        return f"System settings (UGX {self.milk_price_per_liter}/L, SMS: {self.sms_provider})"

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_PK
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('System settings cannot be deleted.')

    @classmethod
    def load(cls):
        """Return the settings row, creating it with defaults if missing."""
        obj, created = cls.objects.get_or_create(
            pk=cls.SINGLETON_PK,
            defaults={
                'milk_price_per_liter': Decimal(settings.DEFAULT_MILK_PRICE_PER_LITER),
                'sms_provider': settings.DEFAULT_SMS_PROVIDER,
            },
        )
        if created:
            logger.info("Initialised system settings with defaults")
        return obj
