from django.contrib import admin

from .models import Farmer


@admin.register(Farmer)
class FarmerAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'location', 'join_date', 'user']
    search_fields = ['name', 'phone', 'location', 'id_number']
    list_filter = ['join_date']
    ordering = ['name']
    date_hierarchy = 'join_date'
    raw_id_fields = ['user']
    readonly_fields = ['created_at', 'updated_at']
