from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class QualityGrade(models.TextChoices):
    A = 'A', 'Grade A'
    B = 'B', 'Grade B'
    C = 'C', 'Grade C'


# Price multiplier applied per grade
GRADE_MULTIPLIERS = {
    QualityGrade.A: Decimal('1.0'),
    QualityGrade.B: Decimal('0.9'),
    QualityGrade.C: Decimal('0.8'),
}

MIN_QUANTITY = Decimal('0.1')


class Delivery(models.Model):
    """One milk delivery by a farmer at the collection point."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    farmer = models.ForeignKey(
        'farmers.Farmer',
        on_delete=models.CASCADE,
        related_name='deliveries',
    )
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(MIN_QUANTITY)],
        help_text='Liters delivered',
    )
    quality = models.CharField(max_length=1, choices=QualityGrade.choices)
    date = models.DateField()
    time = models.TimeField()
    notes = models.TextField(blank=True)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text='quantity x price per liter x grade multiplier (UGX)',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'deliveries'
        ordering = ['-date', '-time', '-created_at']
        verbose_name_plural = 'deliveries'
        indexes = [
            models.Index(fields=['date'], name='deliveries_date_idx'),
            models.Index(fields=['farmer', 'date'], name='deliveries_farmer_date_idx'),
        ]

    def __str__(self):
        return f"{self.farmer.name}: {self.quantity}L grade {self.quality} on {self.date}"

    @property
    def period(self):
        """Payment period (YYYY-MM) this delivery counts towards."""
        return self.date.strftime('%Y-%m')
