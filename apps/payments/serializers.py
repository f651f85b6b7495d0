from rest_framework import serializers

from .models import Payment, PaymentMethod, PaymentStatus


class PaymentSerializer(serializers.ModelSerializer):
    """Ledger row for one farmer and month."""

    farmer_name = serializers.CharField(source='farmer.name', read_only=True)
    farmer_phone = serializers.CharField(source='farmer.phone', read_only=True)
    period_label = serializers.CharField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id',
            'farmer',
            'farmer_name',
            'farmer_phone',
            'period',
            'period_label',
            'total_liters',
            'amount_due',
            'amount_paid',
            'status',
            'last_payment_date',
            'payment_method',
            'transaction_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProcessPaymentInputSerializer(serializers.Serializer):
    """Payment method dialog."""

    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )
    transaction_id = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        default='',
    )


class ProcessAllInputSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(
        choices=PaymentMethod.choices,
        default=PaymentMethod.CASH,
    )


class PaymentFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for payment filtering.

    Query Parameters:
        status (str): pending or paid
        period (str): YYYY-MM
        farmer (UUID): Filter by farmer ID
    """

    status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        error_messages={'invalid': 'Period must be in YYYY-MM format.'},
    )
    farmer = serializers.UUIDField(required=False)


class ProcessResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    payment = PaymentSerializer(required=False, allow_null=True)


class ProcessAllResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    count = serializers.IntegerField()
