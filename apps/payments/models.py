from datetime import datetime
from decimal import Decimal

from django.db import models
import uuid


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    BANK = 'bank', 'Bank transfer'
    MOBILE_MONEY = 'mobile_money', 'Mobile money'


class Payment(models.Model):
    """
    Monthly ledger entry for one farmer.

    total_liters and amount_due always equal the sums over the farmer's
    deliveries in the period; they are recomputed by the ledger service
    whenever a delivery in the period changes.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    farmer = models.ForeignKey(
        'farmers.Farmer',
        on_delete=models.CASCADE,
        related_name='payments',
    )
    period = models.CharField(max_length=7, help_text='Calendar month, YYYY-MM')
    total_liters = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    amount_due = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    last_payment_date = models.DateField(null=True, blank=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True)
    transaction_id = models.CharField(max_length=100, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-period', 'farmer__name']
        constraints = [
            models.UniqueConstraint(fields=['farmer', 'period'], name='unique_payment_per_farmer_period'),
        ]
        indexes = [
            models.Index(fields=['status'], name='payments_status_idx'),
        ]

    def __str__(self):
        return f"{self.farmer.name} - {self.period_label} ({self.status})"

    @property
    def period_label(self):
        """'2024-05' -> 'May 2024'."""
        return datetime.strptime(self.period, '%Y-%m').strftime('%B %Y')

    @property
    def outstanding_amount(self):
        return max(self.amount_due - self.amount_paid, Decimal('0.00'))
