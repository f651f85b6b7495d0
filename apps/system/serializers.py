from decimal import Decimal

from rest_framework import serializers

from .models import SystemSettings


class SystemSettingsSerializer(serializers.ModelSerializer):
    """Settings form. The SMS API key is write-only."""

    milk_price_per_liter = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=Decimal('0.00'),
    )
    sms_api_key = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        write_only=True,
    )
    sms_api_key_configured = serializers.SerializerMethodField()

    class Meta:
        model = SystemSettings
        fields = [
            'milk_price_per_liter',
            'sms_provider',
            'sms_api_key',
            'sms_api_key_configured',
            'sms_username',
            'updated_at',
        ]
        read_only_fields = ['updated_at']

    def get_sms_api_key_configured(self, obj) -> bool:
        return bool(obj.sms_api_key)
