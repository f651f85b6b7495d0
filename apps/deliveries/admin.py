from django.contrib import admin

from .models import Delivery


@admin.register(Delivery)
class DeliveryAdmin(admin.ModelAdmin):
    """
    Read-mostly admin for deliveries.

    Edits made here bypass the payment ledger, so amounts are read-only;
    use the API to change deliveries.
    """

    list_display = ['date', 'time', 'farmer', 'quantity', 'quality', 'amount']
    list_filter = ['quality', 'date']
    search_fields = ['farmer__name', 'farmer__phone', 'notes']
    date_hierarchy = 'date'
    raw_id_fields = ['farmer']
    readonly_fields = ['amount', 'created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('farmer')
