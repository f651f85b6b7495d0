from django.contrib import admin
from django.utils.html import format_html

from .models import Payment, PaymentStatus


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = [
        'farmer',
        'period',
        'total_liters',
        'amount_due',
        'amount_paid',
        'status_badge',
        'last_payment_date',
    ]
    list_filter = ['status', 'period', 'payment_method']
    search_fields = ['farmer__name', 'farmer__phone', 'transaction_id']
    raw_id_fields = ['farmer']
    readonly_fields = ['total_liters', 'amount_due', 'created_at', 'updated_at']

    def status_badge(self, obj):
        """Display payment status as colored badge."""
        if obj.status == PaymentStatus.PAID:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Paid</span>'
            )
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Pending</span>'
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('farmer')
